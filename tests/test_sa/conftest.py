# tests/test_sa/conftest.py
import os

import pytest
from sqlalchemy.orm import Session
from sqlalchemy.sql import text

from librarian.sa.database import Database
from librarian.sa.models import Base, CollectionItem

TEAM = "T0001"
OTHER_TEAM = "T0002"


@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory):
    """Create a temporary directory for the test database."""
    test_dir = tmp_path_factory.mktemp("test_db")
    return str(test_dir / "test_librarian.db")


@pytest.fixture(scope="session")
def database(test_db_path):
    """Create a test database instance"""
    db = Database(f"sqlite:///{test_db_path}")

    # Drop all tables and recreate schema
    Base.metadata.drop_all(db.engine)
    db.init_db()

    yield db

    db.dispose()
    try:
        os.remove(test_db_path)
    except OSError:
        pass  # Ignore errors if file doesn't exist


@pytest.fixture(autouse=True)
def cleanup_db(db_session):
    """Clean up the collection table before each test"""
    db_session.execute(text("DELETE FROM collection_items"))
    db_session.commit()
    yield
    db_session.rollback()


@pytest.fixture(scope="function")
def db_session(database):
    """Create a new database session for a test"""
    session: Session = database.get_session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_item():
    """Factory for unsaved collection rows."""
    def _make_item(member_id, isbn, team_id=TEAM, rating=0, lend_out=False, title=None):
        return CollectionItem(
            team_id=team_id,
            member_id=member_id,
            isbn=isbn,
            title=title or f"Book {isbn}",
            author_name="Test Author",
            cover_id=None,
            rating=rating,
            lend_out=lend_out
        )
    return _make_item


@pytest.fixture
def shared_book(db_session, make_item):
    """One ISBN owned by four members of a team, two of them lending it out."""
    items = [
        make_item("U1", "111", rating=0, lend_out=False),
        make_item("U2", "111", rating=0, lend_out=True),
        make_item("U3", "111", rating=4, lend_out=True),
        make_item("U4", "111", rating=5, lend_out=False),
        # same book in another team must not count
        make_item("U9", "111", team_id=OTHER_TEAM, rating=1, lend_out=True),
    ]
    db_session.add_all(items)
    db_session.commit()
    return items
