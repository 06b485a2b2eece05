# tests/test_sa/test_repositories/test_collection_repository.py
import pytest

from librarian.sa.models import CollectionItem
from librarian.sa.repositories.collection import CollectionRepository, COLLECTION_PAGE_SIZE

TEAM = "T0001"
OTHER_TEAM = "T0002"


@pytest.fixture
def collection_repo(db_session):
    """Fixture to create a CollectionRepository instance"""
    return CollectionRepository(db_session)


def test_collection_info_aggregates(collection_repo, shared_book):
    """Owners, lenders and average rating are computed within the team"""
    infos = collection_repo.get_collection_info(TEAM, ["111"])
    assert len(infos) == 1
    info = infos[0]
    assert info.owner_count == 4
    assert info.lender_count == 2
    # unrated entries are ignored: mean of 4 and 5
    assert info.avg_rating == pytest.approx(4.5)


def test_collection_info_other_team(collection_repo, shared_book):
    infos = collection_repo.get_collection_info(OTHER_TEAM, ["111"])
    assert len(infos) == 1
    assert infos[0].owner_count == 1
    assert infos[0].lender_count == 1
    assert infos[0].avg_rating == pytest.approx(1.0)


def test_collection_info_unknown_isbns(collection_repo, shared_book):
    """ISBNs nobody owns are left out, an empty list gives no rows"""
    assert collection_repo.get_collection_info(TEAM, ["999"]) == []
    assert collection_repo.get_collection_info(TEAM, []) == []


def test_collection_info_all_unrated(collection_repo, db_session, make_item):
    db_session.add_all([make_item("U1", "222"), make_item("U2", "222")])
    db_session.commit()

    info = collection_repo.get_collection_info(TEAM, ["222"])[0]
    assert info.avg_rating == 0
    assert info.lender_count == 0


def test_get_collection_with_team_statistics(collection_repo, shared_book, db_session, make_item):
    db_session.add(make_item("U3", "333", rating=2))
    db_session.commit()

    entries = collection_repo.get_collection(TEAM, "U3")
    assert [entry.isbn for entry in entries] == ["333", "111"]  # newest first

    shared = entries[1]
    assert shared.member_id == "U3"
    assert shared.rating == 4
    assert shared.lend_out is True
    assert shared.info.owner_count == 4
    assert shared.info.lender_count == 2
    assert shared.info.avg_rating == pytest.approx(4.5)

    only_mine = entries[0]
    assert only_mine.info.owner_count == 1
    assert only_mine.info.avg_rating == pytest.approx(2.0)


def test_get_collection_scoped_to_team(collection_repo, shared_book):
    """A member id in another team sees nothing of this team"""
    assert collection_repo.get_collection(OTHER_TEAM, "U3") == []
    assert collection_repo.get_collection(TEAM, "U9") == []


def test_get_collection_capped_count_exact(collection_repo, db_session, make_item):
    db_session.add_all([make_item("U1", f"isbn-{i}") for i in range(COLLECTION_PAGE_SIZE + 3)])
    db_session.commit()

    entries = collection_repo.get_collection(TEAM, "U1")
    assert len(entries) == COLLECTION_PAGE_SIZE
    assert collection_repo.count_collection(TEAM, "U1") == COLLECTION_PAGE_SIZE + 3
    assert len(collection_repo.get_owned_isbns(TEAM, "U1")) == COLLECTION_PAGE_SIZE + 3


def test_aggregates_are_idempotent(collection_repo, shared_book):
    """Reading the same store state twice gives the same statistics"""
    assert collection_repo.get_collection_info(TEAM, ["111"]) == collection_repo.get_collection_info(TEAM, ["111"])
    assert collection_repo.get_collection(TEAM, "U3") == collection_repo.get_collection(TEAM, "U3")


def test_add_and_remove_entry(collection_repo, shared_book, db_session):
    """Adding then removing a book restores the previous collection and statistics"""
    before = collection_repo.get_collection(TEAM, "U1")
    info_before = collection_repo.get_collection_info(TEAM, ["111", "444"])

    item = collection_repo.add_entry(TEAM, "U1", "444", "Dune", "Frank Herbert", "123")
    db_session.commit()
    assert item.id is not None
    assert item.rating == 0
    assert item.lend_out is False
    assert sorted(collection_repo.get_owned_isbns(TEAM, "U1")) == ["111", "444"]

    removed = collection_repo.remove_entry(TEAM, "U1", "444")
    db_session.commit()
    assert removed == 1
    assert collection_repo.get_collection(TEAM, "U1") == before
    assert collection_repo.get_collection_info(TEAM, ["111", "444"]) == info_before


def test_remove_missing_entry(collection_repo):
    assert collection_repo.remove_entry(TEAM, "U1", "nope") == 0


def test_set_rating_and_lend_out(collection_repo, shared_book, db_session):
    assert collection_repo.set_rating(TEAM, "U1", "111", 3) == 1
    assert collection_repo.set_lend_out(TEAM, "U1", "111", True) == 1
    db_session.commit()

    item = (
        db_session.query(CollectionItem)
        .filter_by(team_id=TEAM, member_id="U1", isbn="111")
        .one()
    )
    db_session.refresh(item)
    assert item.rating == 3
    assert item.lend_out is True

    info = collection_repo.get_collection_info(TEAM, ["111"])[0]
    assert info.lender_count == 3
    assert info.avg_rating == pytest.approx(4.0)


def test_get_user_ratings(collection_repo, shared_book):
    """Other owners only, best rating first"""
    ratings = collection_repo.get_user_ratings(TEAM, "U4", "111")
    assert [r.member_id for r in ratings] == ["U3", "U1", "U2"]
    assert [r.rating for r in ratings] == [4, 0, 0]


def test_get_potential_lenders(collection_repo, shared_book):
    assert collection_repo.get_potential_lenders(TEAM, "U1", "111") == ["U2", "U3"]
    # the caller is never listed
    assert collection_repo.get_potential_lenders(TEAM, "U2", "111") == ["U3"]
    assert collection_repo.get_potential_lenders(OTHER_TEAM, "U1", "111") == ["U9"]
