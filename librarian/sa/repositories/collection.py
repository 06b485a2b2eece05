# librarian/sa/repositories/collection.py
from typing import List, Optional, Sequence

from sqlalchemy import case, desc, distinct, func, select
from sqlalchemy.orm import Session

from librarian.models import CollectionEntry, CollectionInfo, UserRating
from librarian.utils.tracing import traced
from ..models import CollectionItem

COLLECTION_PAGE_SIZE = 30
USER_RATINGS_LIMIT = 30
POTENTIAL_LENDERS_LIMIT = 50


class CollectionRepository:
    """Repository for the per-member book entries of Slack teams.

    Every query is scoped to a team. Team statistics (owners, lenders,
    average rating) are aggregated from the current rows on each call.
    """

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def _collection_info_query(self, team_id: str):
        """Aggregate query yielding one statistics row per ISBN in a team."""
        return (
            self.session.query(
                CollectionItem.isbn.label('isbn'),
                func.count(distinct(CollectionItem.member_id)).label('owner_count'),
                func.count(distinct(
                    case((CollectionItem.lend_out.is_(True), CollectionItem.member_id), else_=None)
                )).label('lender_count'),
                # AVG ignores NULLs, so unrated (0) entries do not drag the mean down
                func.avg(
                    case((CollectionItem.rating != 0, CollectionItem.rating), else_=None)
                ).label('avg_rating'),
            )
            .filter(CollectionItem.team_id == team_id)
            .group_by(CollectionItem.isbn)
        )

    @staticmethod
    def _to_info(isbn: str, owner_count, lender_count, avg_rating) -> CollectionInfo:
        return CollectionInfo(
            isbn=isbn,
            owner_count=int(owner_count or 0),
            lender_count=int(lender_count or 0),
            avg_rating=float(avg_rating) if avg_rating is not None else 0.0,
        )

    @traced("Get book collection")
    def get_collection(
        self,
        team_id: str,
        member_id: str,
        limit: Optional[int] = COLLECTION_PAGE_SIZE
    ) -> List[CollectionEntry]:
        """Get a member's collection joined with team statistics.

        Args:
            team_id: Slack team ID
            member_id: Slack member ID of the owner
            limit: Maximum number of entries (default: 30), None for all

        Returns:
            List of CollectionEntry objects, most recently added first
        """
        owned_isbns = (
            select(CollectionItem.isbn)
            .where(
                CollectionItem.team_id == team_id,
                CollectionItem.member_id == member_id
            )
            .correlate(None)
        )
        info = (
            self._collection_info_query(team_id)
            .filter(CollectionItem.isbn.in_(owned_isbns))
            .subquery()
        )
        query = (
            self.session.query(
                CollectionItem,
                info.c.owner_count,
                info.c.lender_count,
                info.c.avg_rating
            )
            .join(info, info.c.isbn == CollectionItem.isbn)
            .filter(
                CollectionItem.team_id == team_id,
                CollectionItem.member_id == member_id
            )
            .order_by(desc(CollectionItem.id))
        )
        if limit is not None:
            query = query.limit(limit)

        return [
            CollectionEntry(
                team_id=item.team_id,
                member_id=item.member_id,
                isbn=item.isbn,
                title=item.title,
                author_name=item.author_name,
                cover_id=item.cover_id,
                rating=item.rating,
                lend_out=item.lend_out,
                info=self._to_info(item.isbn, owner_count, lender_count, avg_rating),
            )
            for item, owner_count, lender_count, avg_rating in query.all()
        ]

    @traced("Count book collection")
    def count_collection(self, team_id: str, member_id: str) -> int:
        """Get the exact number of books in a member's collection."""
        return (
            self.session.query(func.count(CollectionItem.id))
            .filter(
                CollectionItem.team_id == team_id,
                CollectionItem.member_id == member_id
            )
            .scalar()
        ) or 0

    @traced("Get owned isbns")
    def get_owned_isbns(self, team_id: str, member_id: str) -> List[str]:
        """Get the ISBNs of every book in a member's collection, uncapped."""
        rows = (
            self.session.query(CollectionItem.isbn)
            .filter(
                CollectionItem.team_id == team_id,
                CollectionItem.member_id == member_id
            )
            .all()
        )
        return [isbn for (isbn,) in rows]

    @traced("Get collection info")
    def get_collection_info(self, team_id: str, isbns: Sequence[str]) -> List[CollectionInfo]:
        """Get team statistics for a number of books.

        Args:
            team_id: Slack team ID
            isbns: ISBNs of the books to look up

        Returns:
            One CollectionInfo per ISBN owned by anyone in the team. ISBNs
            nobody owns are left out.
        """
        if not isbns:
            return []
        rows = (
            self._collection_info_query(team_id)
            .filter(CollectionItem.isbn.in_(list(isbns)))
            .all()
        )
        return [
            self._to_info(row.isbn, row.owner_count, row.lender_count, row.avg_rating)
            for row in rows
        ]

    @traced("Add book")
    def add_entry(
        self,
        team_id: str,
        member_id: str,
        isbn: str,
        title: str,
        author_name: str,
        cover_id: Optional[str] = None
    ) -> CollectionItem:
        """Add a book to a member's collection, unrated and not lent out.

        No existence check is made; adding the same ISBN twice creates two rows.
        """
        item = CollectionItem(
            team_id=team_id,
            member_id=member_id,
            isbn=isbn,
            title=title,
            author_name=author_name,
            cover_id=cover_id,
            rating=0,
            lend_out=False
        )
        self.session.add(item)
        self.session.flush()
        return item

    @traced("Remove book")
    def remove_entry(self, team_id: str, member_id: str, isbn: str) -> int:
        """Remove a book from a member's collection.

        Returns:
            Number of rows deleted
        """
        return (
            self.session.query(CollectionItem)
            .filter(
                CollectionItem.team_id == team_id,
                CollectionItem.member_id == member_id,
                CollectionItem.isbn == isbn
            )
            .delete(synchronize_session=False)
        )

    @traced("Update rating")
    def set_rating(self, team_id: str, member_id: str, isbn: str, rating: int) -> int:
        """Set the rating of a collection entry. The value is not validated here."""
        return (
            self.session.query(CollectionItem)
            .filter(
                CollectionItem.team_id == team_id,
                CollectionItem.member_id == member_id,
                CollectionItem.isbn == isbn
            )
            .update({CollectionItem.rating: rating}, synchronize_session=False)
        )

    @traced("Update lendOut")
    def set_lend_out(self, team_id: str, member_id: str, isbn: str, lend_out: bool) -> int:
        """Set whether a member is open to lend out a book."""
        return (
            self.session.query(CollectionItem)
            .filter(
                CollectionItem.team_id == team_id,
                CollectionItem.member_id == member_id,
                CollectionItem.isbn == isbn
            )
            .update({CollectionItem.lend_out: lend_out}, synchronize_session=False)
        )

    @traced("Get user ratings")
    def get_user_ratings(
        self,
        team_id: str,
        member_id: str,
        isbn: str,
        limit: int = USER_RATINGS_LIMIT
    ) -> List[UserRating]:
        """Get other team members' ratings of a book, best first.

        Args:
            team_id: Slack team ID
            member_id: Member to exclude from the results (the caller)
            isbn: ISBN of the book
            limit: Maximum number of ratings (default: 30)
        """
        rows = (
            self.session.query(CollectionItem.member_id, CollectionItem.rating)
            .filter(
                CollectionItem.team_id == team_id,
                CollectionItem.member_id != member_id,
                CollectionItem.isbn == isbn
            )
            .order_by(desc(CollectionItem.rating), CollectionItem.id)
            .limit(limit)
            .all()
        )
        return [UserRating(member_id=row.member_id, rating=row.rating) for row in rows]

    @traced("Get potential lenders")
    def get_potential_lenders(
        self,
        team_id: str,
        member_id: str,
        isbn: str,
        limit: int = POTENTIAL_LENDERS_LIMIT
    ) -> List[str]:
        """Get the members of a team who would lend out a book.

        Args:
            team_id: Slack team ID
            member_id: Member to exclude from the results (the caller)
            isbn: ISBN of the book
            limit: Maximum number of lenders (default: 50)

        Returns:
            Slack member IDs
        """
        rows = (
            self.session.query(CollectionItem.member_id)
            .filter(
                CollectionItem.team_id == team_id,
                CollectionItem.member_id != member_id,
                CollectionItem.isbn == isbn,
                CollectionItem.lend_out.is_(True)
            )
            .order_by(CollectionItem.id)
            .limit(limit)
            .all()
        )
        return [lender for (lender,) in rows]
