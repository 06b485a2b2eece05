# librarian/bot/handlers.py
"""Interaction handlers.

Each handler takes the caller's team and member id plus the raw value of the
interaction and returns the view to show next. Slack itself is not touched
here; see librarian.bot.app for the wiring.
"""
import logging
from typing import List

from librarian.blocks import actions
from librarian.blocks.builders import (
    collection_item_blocks, home_header_blocks, lender_list_blocks,
    member_collection_blocks, no_search_results_block, search_query_info_block,
    search_result_blocks, search_unavailable_block, user_ratings_blocks,
)
from librarian.blocks.payloads import decode_payload
from librarian.blocks.types import Block, View
from librarian.blocks.views import (
    OTHER_OWNERS_TITLE, POTENTIAL_LENDERS_TITLE, TEAMMATE_COLLECTION_TITLE,
    home_view, modal_view,
)
from librarian.exceptions import CollectionFullError
from librarian.models import Book
from librarian.services import CollectionService, is_collection_full

logger = logging.getLogger(__name__)


def build_home(service: CollectionService, team_id: str, member_id: str) -> View:
    """The default home tab: header plus the member's collection"""
    collection = service.home_collection(team_id, member_id)
    blocks: List[Block] = home_header_blocks(member_id, is_collection_full(collection.total_count))
    for entry in collection.entries:
        blocks.extend(collection_item_blocks(entry, interactive=True))
    return home_view(blocks)


def handle_search(service: CollectionService, team_id: str, member_id: str, query: str) -> View:
    query = (query or "").strip()
    if not query:
        return build_home(service, team_id, member_id)

    results = service.search(team_id, member_id, query)
    blocks: List[Block] = home_header_blocks(member_id, service.collection_full(team_id, member_id))
    blocks.append(search_query_info_block(query))
    if results.unavailable:
        blocks.append(search_unavailable_block())
    elif not results.entries:
        blocks.append(no_search_results_block())
    for entry in results.entries:
        blocks.extend(search_result_blocks(entry))
    return home_view(blocks)


def handle_add(service: CollectionService, team_id: str, member_id: str, raw: str) -> View:
    payload = decode_payload(actions.COLLECTION_ADD_ITEM, raw)
    book = Book(
        title=payload.title,
        author_name=payload.author_name,
        isbn=payload.isbn,
        cover_id=payload.cover_id
    )
    try:
        service.add_book(team_id, member_id, book)
    except CollectionFullError:
        # the home header explains the limit
        logger.info(f"Collection of {member_id} is full, {book.isbn} not added")
    return build_home(service, team_id, member_id)


def handle_remove(service: CollectionService, team_id: str, member_id: str, raw: str) -> View:
    payload = decode_payload(actions.COLLECTION_REMOVE_ITEM, raw)
    service.remove_book(team_id, member_id, payload.isbn)
    return build_home(service, team_id, member_id)


def handle_rating(service: CollectionService, team_id: str, member_id: str, raw: str) -> View:
    payload = decode_payload(actions.COLLECTION_ITEM_UPDATE_RATING, raw)
    service.rate_book(team_id, member_id, payload.isbn, payload.rating)
    return build_home(service, team_id, member_id)


def handle_lend_out(service: CollectionService, team_id: str, member_id: str, raw: str) -> View:
    payload = decode_payload(actions.COLLECTION_ITEM_UPDATE_LEND_OUT, raw)
    service.set_lend_out(team_id, member_id, payload.isbn, payload.lend_out)
    return build_home(service, team_id, member_id)


def handle_find_lenders(service: CollectionService, team_id: str, member_id: str, raw: str) -> View:
    payload = decode_payload(actions.COLLECTION_ITEM_FIND_LENDERS, raw)
    lenders = service.potential_lenders(team_id, member_id, payload.isbn)
    return modal_view(POTENTIAL_LENDERS_TITLE, lender_list_blocks(lenders, payload.title))


def handle_find_owners(service: CollectionService, team_id: str, member_id: str, raw: str) -> View:
    payload = decode_payload(actions.COLLECTION_ITEM_FIND_OTHER_RATINGS, raw)
    ratings = service.user_ratings(team_id, member_id, payload.isbn)
    return modal_view(
        OTHER_OWNERS_TITLE,
        user_ratings_blocks(ratings, payload.title, payload.user_owns_it)
    )


def handle_member_collection(service: CollectionService, team_id: str, selected_member_id: str) -> View:
    entries = service.member_collection(team_id, selected_member_id)
    return modal_view(TEAMMATE_COLLECTION_TITLE, member_collection_blocks(selected_member_id, entries))
