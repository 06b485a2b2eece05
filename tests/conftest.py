# tests/conftest.py
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from librarian.models import Book, SearchOutcome


@pytest.fixture
def sample_books():
    """Books as the catalog would return them."""
    return [
        Book(title="The Hobbit", author_name="J.R.R. Tolkien", isbn="9780261103344", cover_id="8406786"),
        Book(title="Dune", author_name="Frank Herbert", isbn="9780441172719", cover_id=None),
    ]


@pytest.fixture
def catalog(sample_books):
    """Catalog client stub returning the sample books."""
    client = Mock()
    client.search.return_value = SearchOutcome(books=sample_books)
    return client
