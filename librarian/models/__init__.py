# librarian/models/__init__.py
from .book import (
    Book, CollectionInfo, CollectionEntry, UserRating,
    SearchOutcome, SearchResultEntry, SearchResults, HomeCollection,
    MIN_RATING, MAX_RATING, TITLE_MAX_LENGTH, AUTHOR_NAME_MAX_LENGTH,
)

__all__ = [
    'Book',
    'CollectionInfo',
    'CollectionEntry',
    'UserRating',
    'SearchOutcome',
    'SearchResultEntry',
    'SearchResults',
    'HomeCollection',
    'MIN_RATING',
    'MAX_RATING',
    'TITLE_MAX_LENGTH',
    'AUTHOR_NAME_MAX_LENGTH',
]
