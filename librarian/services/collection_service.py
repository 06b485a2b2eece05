# librarian/services/collection_service.py

import logging
from typing import Iterable, List, Protocol

from librarian.exceptions import CollectionFullError
from librarian.models import (
    Book, CollectionEntry, CollectionInfo, HomeCollection,
    SearchOutcome, SearchResultEntry, SearchResults, UserRating,
    MIN_RATING, MAX_RATING,
)
from librarian.sa.database import Database
from librarian.sa.repositories import CollectionRepository

logger = logging.getLogger(__name__)

COLLECTION_LIMIT = 30


class CatalogClient(Protocol):
    def search(self, query: str) -> SearchOutcome: ...


def merge_search_results(
    books: List[Book],
    infos: List[CollectionInfo],
    owned_isbns: Iterable[str]
) -> List[SearchResultEntry]:
    """Attach team statistics and ownership to catalog search results.

    Books nobody in the team owns get empty statistics.
    """
    owned = set(owned_isbns)
    results = []
    for book in books:
        info = next((i for i in infos if i.isbn == book.isbn), None)
        results.append(SearchResultEntry(
            book=book,
            info=info or CollectionInfo.empty(book.isbn),
            in_collection=book.isbn in owned
        ))
    return results


def is_collection_full(total_count: int, limit: int = COLLECTION_LIMIT) -> bool:
    return total_count >= limit


class CollectionService:
    """Team collection use cases on top of the store and the catalog.

    Every method opens its own unit of work, so a pooled connection is
    never held while the catalog is being queried.
    """

    def __init__(self, database: Database, catalog: CatalogClient):
        self.database = database
        self.catalog = catalog

    def home_collection(self, team_id: str, member_id: str) -> HomeCollection:
        """Get the (capped) collection of a member and its exact size."""
        with self.database.session_scope() as session:
            repo = CollectionRepository(session)
            entries = repo.get_collection(team_id, member_id)
            total_count = repo.count_collection(team_id, member_id)
        return HomeCollection(entries=entries, total_count=total_count)

    def collection_full(self, team_id: str, member_id: str) -> bool:
        """Whether a member has reached the collection size limit."""
        with self.database.session_scope() as session:
            total_count = CollectionRepository(session).count_collection(team_id, member_id)
        return is_collection_full(total_count)

    def member_collection(self, team_id: str, member_id: str) -> List[CollectionEntry]:
        """Get another member's collection for read-only display."""
        with self.database.session_scope() as session:
            return CollectionRepository(session).get_collection(team_id, member_id)

    def search(self, team_id: str, member_id: str, query: str) -> SearchResults:
        """Search the catalog and reconcile the results with the team's collection.

        Args:
            team_id: Slack team ID of the caller
            member_id: Slack member ID of the caller
            query: Search term

        Returns:
            SearchResults, flagged unavailable if the catalog could not be queried
        """
        outcome = self.catalog.search(query)
        if outcome.unavailable:
            return SearchResults(query=query, entries=[], unavailable=True)
        if not outcome.books:
            return SearchResults(query=query)

        with self.database.session_scope() as session:
            repo = CollectionRepository(session)
            owned_isbns = repo.get_owned_isbns(team_id, member_id)
            infos = repo.get_collection_info(team_id, [book.isbn for book in outcome.books])

        return SearchResults(
            query=query,
            entries=merge_search_results(outcome.books, infos, owned_isbns)
        )

    def add_book(self, team_id: str, member_id: str, book: Book) -> bool:
        """Add a book to a member's collection.

        Returns:
            True if the book was added, False if the member already owns it

        Raises:
            CollectionFullError: If the collection has reached its size limit
        """
        with self.database.session_scope() as session:
            repo = CollectionRepository(session)
            if book.isbn in repo.get_owned_isbns(team_id, member_id):
                logger.warning(f"{member_id} already owns {book.isbn}, not adding it again")
                return False
            if is_collection_full(repo.count_collection(team_id, member_id)):
                raise CollectionFullError(COLLECTION_LIMIT)
            repo.add_entry(
                team_id, member_id, book.isbn, book.title, book.author_name, book.cover_id
            )
        logger.info(f"Added {book.isbn} to the collection of {member_id} in {team_id}")
        return True

    def remove_book(self, team_id: str, member_id: str, isbn: str) -> int:
        with self.database.session_scope() as session:
            removed = CollectionRepository(session).remove_entry(team_id, member_id, isbn)
        if removed != 1:
            logger.warning(f"Removing {isbn} for {member_id} deleted {removed} rows")
        return removed

    def rate_book(self, team_id: str, member_id: str, isbn: str, rating: int) -> None:
        """Rate a book in a member's collection.

        Raises:
            ValueError: If the rating is not between 0 ("No rating") and 5
        """
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValueError(f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}")
        with self.database.session_scope() as session:
            CollectionRepository(session).set_rating(team_id, member_id, isbn, rating)

    def set_lend_out(self, team_id: str, member_id: str, isbn: str, lend_out: bool) -> None:
        with self.database.session_scope() as session:
            CollectionRepository(session).set_lend_out(team_id, member_id, isbn, lend_out)

    def user_ratings(self, team_id: str, member_id: str, isbn: str) -> List[UserRating]:
        with self.database.session_scope() as session:
            return CollectionRepository(session).get_user_ratings(team_id, member_id, isbn)

    def potential_lenders(self, team_id: str, member_id: str, isbn: str) -> List[str]:
        with self.database.session_scope() as session:
            return CollectionRepository(session).get_potential_lenders(team_id, member_id, isbn)
