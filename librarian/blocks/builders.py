# librarian/blocks/builders.py
"""Pure functions turning collection data into Block Kit blocks."""
import math
from typing import List, Optional, Sequence

from librarian.catalog import cover_url
from librarian.models import CollectionEntry, CollectionInfo, SearchResultEntry, UserRating
from librarian.services import COLLECTION_LIMIT
from . import actions
from .payloads import (
    AddItemPayload, BorrowPayload, LendOutPayload, OwnersPayload,
    RatingPayload, RemoveItemPayload, encode_payload,
)
from .types import (
    ActionsBlock, Block, Button, DividerBlock, HeaderBlock, Image, InputBlock,
    Markdown, Option, PlainText, PlainTextInput, SectionBlock, StaticSelect,
    UsersSelect, HEADER_TEXT_LIMIT, SECTION_FIELDS_LIMIT,
)

NO_RATING = "No rating"
STAR = "⭐"
LEND_OUT_LABELS = {False: "No lending out", True: "Open to lend out"}


def stars(rating: float) -> str:
    """Render a rating as stars, averages rounded half up."""
    count = int(math.floor(rating + 0.5))
    if count <= 0:
        return NO_RATING
    return STAR * count


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit - 1] + "…"


def _header(text: str) -> HeaderBlock:
    return HeaderBlock(text=PlainText(text=_truncate(text, HEADER_TEXT_LIMIT), emoji=None))


def _mention(member_id: str) -> str:
    return f"<@{member_id}>"


def _cover(cover_id: Optional[str]) -> Optional[Image]:
    url = cover_url(cover_id)
    if url is None:
        return None
    return Image(image_url=url, alt_text="book cover")


def _button(text: str, action_id: str, value: Optional[str] = None, style: Optional[str] = None) -> Button:
    return Button(text=PlainText(text=text), action_id=action_id, value=value, style=style)


def book_details_text(
    title: str,
    author_name: str,
    isbn: str,
    info: CollectionInfo,
    bold_labels: bool = False
) -> str:
    """Book description with the team statistics that apply to it."""
    if bold_labels:
        text = f"*{title}*  \n *Author:* {author_name} \n *ISBN:* {isbn}"
    else:
        text = f"*{title}* \n Author: {author_name} \n ISBN: {isbn}"
    if info.owner_count > 0:
        text += f"\n Owners in your team: {info.owner_count}"
    if info.avg_rating != 0:
        text += f" \n Average rating in your team: {stars(info.avg_rating)}"
    if info.lender_count > 0:
        text += f"\n Potential lenders in your team: {info.lender_count}"
    return text


def home_header_blocks(member_id: str, collection_full: bool) -> List[Block]:
    """Header of the home tab.

    Args:
        member_id: Slack member ID of the viewer
        collection_full: Replace the search input by a notice when the
            collection has reached its size limit
    """
    blocks: List[Block] = [
        SectionBlock(text=Markdown(
            text=f"*Welcome to your own private collection in the floating library {_mention(member_id)}*"
        )),
        SectionBlock(text=Markdown(
            text="This is where you enter all your favorite books to chat about them with your colleagues. "
                 "\n You can also lend them out if you want!"
        )),
        DividerBlock(),
        InputBlock(
            dispatch_action=True,
            element=UsersSelect(
                placeholder=PlainText(text="Select user"),
                action_id=actions.OTHER_USERS_COLLECTION
            ),
            label=PlainText(text="Check out another user's collection:")
        ),
        DividerBlock(),
    ]
    if collection_full:
        blocks.append(SectionBlock(text=Markdown(
            text=f"*Sorry! No search* \n Your collection has reached the size limit of {COLLECTION_LIMIT} books! "
                 "If you want to add books you'll have to remove some others first."
        )))
    else:
        blocks.append(InputBlock(
            dispatch_action=True,
            element=PlainTextInput(action_id=actions.BOOK_SEARCH_SUBMIT),
            label=PlainText(text="Search books to borrow or add to your collection: 📖🔎")
        ))
    return blocks


def search_query_info_block(query: str) -> SectionBlock:
    return SectionBlock(
        text=Markdown(text=f"You searched for: *{query}*"),
        accessory=_button("close", actions.SHOW_HOME)
    )


def search_unavailable_block() -> SectionBlock:
    return SectionBlock(text=Markdown(
        text="⚠️ The book search is unavailable right now. Please try again in a few minutes."
    ))


def no_search_results_block() -> SectionBlock:
    return SectionBlock(text=Markdown(text="No books found. Try another title or author."))


def error_notice_block(message: str = "Something went wrong, please try again later.") -> SectionBlock:
    return SectionBlock(text=Markdown(text=f"⚠️ {message}"))


def search_result_blocks(entry: SearchResultEntry) -> List[Block]:
    """Blocks for one catalog search result.

    Borrowing is offered only if someone in the team would lend the book,
    finding owners only if someone owns it.
    """
    book, info = entry.book, entry.info
    blocks: List[Block] = [
        DividerBlock(),
        SectionBlock(
            text=Markdown(text=book_details_text(book.title, book.author_name, book.isbn, info)),
            accessory=_cover(book.cover_id)
        ),
    ]
    if entry.in_collection:
        blocks.append(SectionBlock(text=Markdown(text="✅ Already in your collection")))
        return blocks

    buttons = [
        _button(
            "Add to collection",
            actions.COLLECTION_ADD_ITEM,
            encode_payload(AddItemPayload(
                isbn=book.isbn,
                title=book.title,
                author_name=book.author_name,
                cover_id=book.cover_id
            )),
            style="primary"
        )
    ]
    if info.lender_count > 0:
        buttons.append(_button(
            "Borrow",
            actions.COLLECTION_ITEM_FIND_LENDERS,
            encode_payload(BorrowPayload(isbn=book.isbn, title=book.title))
        ))
    if info.owner_count > 0:
        buttons.append(_button(
            "Find owners",
            actions.COLLECTION_ITEM_FIND_OTHER_RATINGS,
            encode_payload(OwnersPayload(isbn=book.isbn, title=book.title, user_owns_it=False))
        ))
    blocks.append(ActionsBlock(elements=buttons))
    return blocks


def _rating_select(entry: CollectionEntry) -> StaticSelect:
    return StaticSelect(
        placeholder=PlainText(text=stars(entry.rating)),
        options=[
            Option(
                text=PlainText(text=stars(rating)),
                value=encode_payload(RatingPayload(isbn=entry.isbn, rating=rating))
            )
            for rating in range(0, 6)
        ],
        action_id=actions.COLLECTION_ITEM_UPDATE_RATING
    )


def _lend_out_select(entry: CollectionEntry) -> StaticSelect:
    return StaticSelect(
        placeholder=PlainText(text=LEND_OUT_LABELS[entry.lend_out]),
        options=[
            Option(
                text=PlainText(text=LEND_OUT_LABELS[lend_out]),
                value=encode_payload(LendOutPayload(isbn=entry.isbn, lend_out=lend_out))
            )
            for lend_out in (False, True)
        ],
        action_id=actions.COLLECTION_ITEM_UPDATE_LEND_OUT
    )


def collection_item_blocks(entry: CollectionEntry, interactive: bool) -> List[Block]:
    """Blocks for one book in a member's collection.

    Args:
        entry: The collection entry with its team statistics
        interactive: Include the rating, lend-out and remove controls. Off
            when showing someone else's collection.
    """
    elements = []
    if interactive:
        elements.extend([
            _rating_select(entry),
            _lend_out_select(entry),
            _button(
                "Remove from collection",
                actions.COLLECTION_REMOVE_ITEM,
                encode_payload(RemoveItemPayload(isbn=entry.isbn)),
                style="danger"
            ),
        ])
        # owner_count includes the viewer
        if entry.info.owner_count > 1:
            elements.append(_button(
                "Find other owners",
                actions.COLLECTION_ITEM_FIND_OTHER_RATINGS,
                encode_payload(OwnersPayload(isbn=entry.isbn, title=entry.title, user_owns_it=True))
            ))

    blocks: List[Block] = [
        DividerBlock(),
        SectionBlock(
            text=Markdown(text=book_details_text(
                entry.title, entry.author_name, entry.isbn, entry.info, bold_labels=True
            )),
            accessory=_cover(entry.cover_id)
        ),
    ]
    if elements:
        blocks.append(ActionsBlock(elements=elements))
    return blocks


def lender_list_blocks(lenders: Sequence[str], title: str) -> List[Block]:
    if not lenders:
        return [_header(f"Unfortunately it seems there's nobody who could lend you {title} right now 😞")]
    people = "person" if len(lenders) == 1 else "people"
    return [
        _header(f":tada: We found {len(lenders)} {people} who could lend you {title}"),
        DividerBlock(),
        SectionBlock(text=Markdown(text=", ".join(_mention(lender) for lender in lenders))),
    ]


def user_ratings_blocks(ratings: Sequence[UserRating], title: str, user_owns_it: bool) -> List[Block]:
    """Blocks listing the other owners of a book and their ratings.

    Args:
        ratings: Ratings of the other owners
        title: Title of the book
        user_owns_it: Whether the viewer owns the book too, only changes the wording
    """
    if not ratings:
        return [_header(f"Looks like nobody else in your team owns {title} 😞")]

    other = " other " if user_owns_it else " "
    owners = "person who owns" if len(ratings) == 1 else "people who own"
    blocks: List[Block] = [_header(f":tada: We found {len(ratings)}{other}{owners} {title}")]

    fields = [Markdown(text="*User*"), Markdown(text="*Rating*")]
    for rating in ratings:
        fields.extend([Markdown(text=_mention(rating.member_id)), Markdown(text=stars(rating.rating))])
    # a section holds at most 10 fields, i.e. 5 user/rating rows
    for start in range(0, len(fields), SECTION_FIELDS_LIMIT):
        blocks.append(SectionBlock(fields=fields[start:start + SECTION_FIELDS_LIMIT]))
    return blocks


def member_collection_blocks(member_id: str, entries: Sequence[CollectionEntry]) -> List[Block]:
    """Read-only blocks for a teammate's collection."""
    if not entries:
        return [SectionBlock(text=Markdown(
            text=f"Looks like {_mention(member_id)} doesn't have any books in their collection yet 😟"
        ))]
    blocks: List[Block] = [SectionBlock(text=Markdown(text=f"Have a look at {_mention(member_id)}'s collection"))]
    for entry in entries:
        blocks.extend(collection_item_blocks(entry, interactive=False))
    return blocks
