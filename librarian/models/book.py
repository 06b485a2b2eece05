# librarian/models/book.py

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

MIN_RATING = 0  # "No rating"
MAX_RATING = 5

# column sizes of the collection store
TITLE_MAX_LENGTH = 255
AUTHOR_NAME_MAX_LENGTH = 255


class Book(BaseModel):
    """A catalog search result. Never persisted as-is."""
    title: str
    author_name: str
    isbn: str
    cover_id: Optional[str] = None  # OpenLibrary covers API id


class CollectionInfo(BaseModel):
    """Team-wide statistics for one book"""
    isbn: str
    owner_count: int = 0    # members of the team owning the book
    lender_count: int = 0   # owners open to lend it out
    avg_rating: float = 0   # mean of ratings 1-5, ignoring "No rating"

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def empty(cls, isbn: str) -> "CollectionInfo":
        """Info for a book nobody in the team owns yet"""
        return cls(isbn=isbn)


class CollectionEntry(BaseModel):
    """A book in one member's collection, joined with its team statistics"""
    team_id: str
    member_id: str
    isbn: str
    title: str
    author_name: str
    cover_id: Optional[str] = None
    rating: int = Field(default=0, ge=MIN_RATING, le=MAX_RATING)
    lend_out: bool = False
    info: CollectionInfo

    model_config = ConfigDict(from_attributes=True)


class UserRating(BaseModel):
    member_id: str
    rating: int


class SearchOutcome(BaseModel):
    """Result of a catalog search.

    `unavailable` is set when the catalog could not be queried at all, as
    opposed to a query that simply matched nothing.
    """
    books: List[Book] = []
    unavailable: bool = False


class SearchResultEntry(BaseModel):
    book: Book
    info: CollectionInfo
    in_collection: bool = False


class SearchResults(BaseModel):
    query: str
    entries: List[SearchResultEntry] = []
    unavailable: bool = False


class HomeCollection(BaseModel):
    entries: List[CollectionEntry] = []
    total_count: int = 0  # exact size, not capped like `entries`
