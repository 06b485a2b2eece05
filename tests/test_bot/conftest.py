# tests/test_bot/conftest.py
import pytest

from librarian.sa.database import Database
from librarian.services import CollectionService

TEAM = "T0001"


@pytest.fixture
def database(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'bot.db'}")
    db.init_db()
    yield db
    db.dispose()


@pytest.fixture
def service(database, catalog):
    return CollectionService(database, catalog)


class FakeApp:
    """Records the listeners a Bolt app would dispatch to."""

    def __init__(self):
        self.actions = {}
        self.events = {}

    def action(self, action_id):
        def register(func):
            self.actions[action_id] = func
            return func
        return register

    def event(self, name):
        def register(func):
            self.events[name] = func
            return func
        return register


@pytest.fixture
def fake_app():
    return FakeApp()
