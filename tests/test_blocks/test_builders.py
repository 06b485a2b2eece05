# tests/test_blocks/test_builders.py
import pytest
from pydantic import ValidationError

from librarian.blocks import actions
from librarian.blocks.builders import (
    collection_item_blocks, home_header_blocks, lender_list_blocks,
    search_result_blocks, stars, user_ratings_blocks,
)
from librarian.blocks.types import (
    ActionsBlock, HeaderBlock, InputBlock, Option, PlainText, SectionBlock, to_slack,
)
from librarian.blocks.views import modal_view
from librarian.catalog import build_book_list
from librarian.models import Book, CollectionEntry, CollectionInfo, SearchResultEntry, UserRating

DUNE = Book(title="Dune", author_name="Frank Herbert", isbn="9780441172719", cover_id="123")


def _action_ids(blocks):
    return [
        element.action_id
        for block in blocks if isinstance(block, ActionsBlock)
        for element in block.elements
    ]


def _entry(owner_count=1, lender_count=0, avg_rating=0.0, cover_id="123"):
    return CollectionEntry(
        team_id="T1", member_id="U1", isbn=DUNE.isbn, title=DUNE.title,
        author_name=DUNE.author_name, cover_id=cover_id, rating=3, lend_out=False,
        info=CollectionInfo(isbn=DUNE.isbn, owner_count=owner_count,
                            lender_count=lender_count, avg_rating=avg_rating),
    )


def test_stars():
    assert stars(0) == "No rating"
    assert stars(1) == "⭐"
    assert stars(4.5) == "⭐⭐⭐⭐⭐"
    assert stars(4.49) == "⭐⭐⭐⭐"


def test_search_result_without_team_copies():
    entry = SearchResultEntry(book=DUNE, info=CollectionInfo.empty(DUNE.isbn))
    blocks = search_result_blocks(entry)
    assert _action_ids(blocks) == [actions.COLLECTION_ADD_ITEM]


def test_search_result_with_owners_and_lenders():
    info = CollectionInfo(isbn=DUNE.isbn, owner_count=2, lender_count=1, avg_rating=4.0)
    blocks = search_result_blocks(SearchResultEntry(book=DUNE, info=info))

    assert _action_ids(blocks) == [
        actions.COLLECTION_ADD_ITEM,
        actions.COLLECTION_ITEM_FIND_LENDERS,
        actions.COLLECTION_ITEM_FIND_OTHER_RATINGS,
    ]
    details = blocks[1].text.text
    assert "Owners in your team: 2" in details
    assert "Potential lenders in your team: 1" in details
    assert "⭐⭐⭐⭐" in details


def test_search_result_already_owned():
    info = CollectionInfo(isbn=DUNE.isbn, owner_count=2, lender_count=1)
    blocks = search_result_blocks(SearchResultEntry(book=DUNE, info=info, in_collection=True))
    assert _action_ids(blocks) == []
    assert "Already in your collection" in blocks[-1].text.text


def test_home_header_search_toggle():
    open_blocks = home_header_blocks("U1", collection_full=False)
    assert isinstance(open_blocks[-1], InputBlock)
    assert open_blocks[-1].element.action_id == actions.BOOK_SEARCH_SUBMIT

    full_blocks = home_header_blocks("U1", collection_full=True)
    assert isinstance(full_blocks[-1], SectionBlock)
    assert "No search" in full_blocks[-1].text.text
    assert "<@U1>" in full_blocks[0].text.text


def test_collection_item_find_other_owners_only_when_shared():
    assert actions.COLLECTION_ITEM_FIND_OTHER_RATINGS not in _action_ids(
        collection_item_blocks(_entry(owner_count=1), interactive=True)
    )
    ids = _action_ids(collection_item_blocks(_entry(owner_count=2), interactive=True))
    assert ids == [
        actions.COLLECTION_ITEM_UPDATE_RATING,
        actions.COLLECTION_ITEM_UPDATE_LEND_OUT,
        actions.COLLECTION_REMOVE_ITEM,
        actions.COLLECTION_ITEM_FIND_OTHER_RATINGS,
    ]


def test_collection_item_read_only():
    blocks = collection_item_blocks(_entry(owner_count=3), interactive=False)
    assert _action_ids(blocks) == []


def test_missing_cover_has_no_image():
    blocks = collection_item_blocks(_entry(cover_id=None), interactive=True)
    assert blocks[1].accessory is None
    assert "accessory" not in to_slack(blocks)[1]


def test_user_ratings_split_into_sections():
    ratings = [UserRating(member_id=f"U{i}", rating=i % 6) for i in range(12)]
    blocks = user_ratings_blocks(ratings, "Dune", user_owns_it=True)

    assert isinstance(blocks[0], HeaderBlock)
    assert "12 other people who own Dune" in blocks[0].text.text
    sections = blocks[1:]
    # 2 header fields plus 24 user/rating fields
    assert [len(section.fields) for section in sections] == [10, 10, 6]


def test_empty_lists():
    assert "nobody else" in user_ratings_blocks([], "Dune", user_owns_it=False)[0].text.text
    assert "nobody who could lend" in lender_list_blocks([], "Dune")[0].text.text


def test_long_titles_are_truncated():
    title = "x" * 300
    header = lender_list_blocks(["U1"], title)[0]
    assert len(header.text.text) <= 150

    view = modal_view("A much too long modal title for Slack", [header])
    assert len(view.title.text) <= 24


def test_search_result_for_very_long_catalog_record():
    """Buttons stay within Slack's value limit for any catalog record"""
    book = build_book_list({"docs": [
        {"title": "T|" * 1500, "author_name": ["A\\" * 600], "isbn": ["1"], "cover_i": 7}
    ]})[0]
    blocks = search_result_blocks(SearchResultEntry(book=book, info=CollectionInfo.empty(book.isbn)))
    assert _action_ids(blocks) == [actions.COLLECTION_ADD_ITEM]


def test_option_value_limit():
    Option(text=PlainText(text="ok"), value="v" * 150)
    with pytest.raises(ValidationError):
        Option(text=PlainText(text="too long"), value="v" * 151)
