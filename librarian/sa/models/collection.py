# librarian/sa/models/collection.py
from sqlalchemy import Boolean, Integer, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from librarian.models import AUTHOR_NAME_MAX_LENGTH, TITLE_MAX_LENGTH
from .base import Base


class CollectionItem(Base):
    """One book owned by one member of a Slack team.

    At most one row per (team_id, member_id, isbn) is expected. The schema
    does not enforce it.
    """
    __tablename__ = 'collection_items'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    team_id: Mapped[str] = mapped_column(String(20), nullable=False)
    member_id: Mapped[str] = mapped_column(String(20), nullable=False)
    isbn: Mapped[str] = mapped_column(String(13), nullable=False)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    author_name: Mapped[str] = mapped_column(String(AUTHOR_NAME_MAX_LENGTH), nullable=False)
    cover_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    lend_out: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    rating: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<CollectionItem {self.team_id}/{self.member_id} isbn={self.isbn}>"
