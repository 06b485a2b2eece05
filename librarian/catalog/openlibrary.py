# librarian/catalog/openlibrary.py
"""Book search against the public OpenLibrary API.

https://openlibrary.org/dev/docs/api/search
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from librarian.models import AUTHOR_NAME_MAX_LENGTH, TITLE_MAX_LENGTH, Book, SearchOutcome
from librarian.utils.tracing import traced

logger = logging.getLogger(__name__)

SEARCH_URL = "https://openlibrary.org/search.json"
COVER_URL = "http://covers.openlibrary.org/b/id/{cover_id}-M.jpg"
SEARCH_FIELDS = "title,author_name,cover_i,isbn"
FETCH_LIMIT = 20    # fetched before filtering incomplete records
RESULT_LIMIT = 5


def cover_url(cover_id: Optional[str]) -> Optional[str]:
    """Build the medium size cover image URL for a cover id."""
    if not cover_id:
        return None
    return COVER_URL.format(cover_id=cover_id)


def _first(values: Any) -> Optional[str]:
    if not isinstance(values, list) or not values or values[0] is None:
        return None
    return str(values[0])


def build_book_list(payload: Dict[str, Any], limit: int = RESULT_LIMIT) -> List[Book]:
    """Turn a search response into books.

    Records without a title, author or ISBN are dropped, only the first
    author and ISBN of each record is kept, and at most `limit` books are
    returned. Titles and author names are cut to the size the collection
    store can hold.

    Raises:
        ValueError: If the payload has no `docs` list
    """
    docs = payload.get("docs") if isinstance(payload, dict) else None
    if not isinstance(docs, list):
        raise ValueError("Search response has no 'docs' list")

    books = []
    for doc in docs:
        if not isinstance(doc, dict):
            continue
        title = doc.get("title")
        author_name = _first(doc.get("author_name"))
        isbn = _first(doc.get("isbn"))
        if title is None or author_name is None or isbn is None:
            continue
        cover = doc.get("cover_i")
        books.append(Book(
            title=str(title)[:TITLE_MAX_LENGTH],
            author_name=author_name[:AUTHOR_NAME_MAX_LENGTH],
            isbn=isbn,
            cover_id=str(cover) if cover is not None else None
        ))
        if len(books) >= limit:
            break
    return books


class OpenLibraryClient:
    """Searches the OpenLibrary catalog.

    Failures never propagate: they come back as an unavailable SearchOutcome
    so the caller can tell "no matches" from "could not search".
    """

    def __init__(
        self,
        base_url: str = SEARCH_URL,
        timeout: float = 10,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @traced("Search books", op="http.client")
    def search(self, query: str) -> SearchOutcome:
        """Search the catalog for books.

        Args:
            query: Free text search term

        Returns:
            SearchOutcome with up to 5 books
        """
        params = {
            "q": query,
            "fields": SEARCH_FIELDS,
            "limit": FETCH_LIMIT,
        }
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            books = build_book_list(response.json())
        except requests.RequestException as e:
            logger.warning(f"OpenLibrary search failed for {query!r}: {str(e)}")
            return SearchOutcome(books=[], unavailable=True)
        except ValueError as e:
            # includes JSON decode errors
            logger.warning(f"Unparseable OpenLibrary response for {query!r}: {str(e)}")
            return SearchOutcome(books=[], unavailable=True)

        logger.info(f"OpenLibrary search for {query!r} returned {len(books)} books")
        return SearchOutcome(books=books, unavailable=False)
