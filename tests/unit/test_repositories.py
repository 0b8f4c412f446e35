"""Unit tests for the document repository and change feed"""

import pytest
from finance_calendar.domain.exceptions import InvalidCollectionError
from finance_calendar.infrastructure.database.change_feed import ChangeFeed
from finance_calendar.infrastructure.database.repositories import CARDS, TRANSACTIONS, DocumentRepository


@pytest.fixture
def feed():
    return ChangeFeed()


@pytest.fixture
def repo(db, feed):
    return DocumentRepository(db, feed)


def test_upsert_and_get(repo):
    created = repo.upsert(TRANSACTIONS, "user-1", {"date": "2024-01-05", "amount": 250, "category": None})

    assert created["id"]
    assert "category" not in created
    assert repo.get(TRANSACTIONS, "user-1", created["id"]) == created
    assert repo.get(TRANSACTIONS, "user-2", created["id"]) is None


def test_upsert_replaces_unless_merging(repo):
    repo.upsert(CARDS, "user-1", {"bankName": "Akbank", "currentDebt": 100}, doc_id="c1")

    repo.upsert(CARDS, "user-1", {"currentDebt": 50}, doc_id="c1", merge=True)
    assert repo.get(CARDS, "user-1", "c1") == {"bankName": "Akbank", "currentDebt": 50, "id": "c1"}

    repo.upsert(CARDS, "user-1", {"currentDebt": 0}, doc_id="c1")
    assert repo.get(CARDS, "user-1", "c1") == {"currentDebt": 0, "id": "c1"}


def test_upsert_takes_id_from_data(repo):
    doc = repo.upsert(TRANSACTIONS, "user-1", {"id": "t1", "amount": 5})
    assert doc == {"amount": 5, "id": "t1"}


def test_list_is_per_user_and_collection(repo):
    repo.upsert(TRANSACTIONS, "user-1", {"amount": 1}, doc_id="a")
    repo.upsert(TRANSACTIONS, "user-1", {"amount": 2}, doc_id="b")
    repo.upsert(TRANSACTIONS, "user-2", {"amount": 3}, doc_id="c")
    repo.upsert(CARDS, "user-1", {"bankName": "Akbank"}, doc_id="d")

    assert [d["id"] for d in repo.list(TRANSACTIONS, "user-1")] == ["a", "b"]


def test_remove(repo):
    repo.upsert(TRANSACTIONS, "user-1", {"amount": 1}, doc_id="a")

    assert repo.remove(TRANSACTIONS, "user-1", "a") is True
    assert repo.remove(TRANSACTIONS, "user-1", "a") is False
    assert repo.list(TRANSACTIONS, "user-1") == []


def test_unknown_collection_rejected(repo):
    with pytest.raises(InvalidCollectionError):
        repo.list("notes", "user-1")
    with pytest.raises(InvalidCollectionError):
        repo.upsert("notes", "user-1", {})


def test_watch_delivers_snapshot_now_and_after_commit(repo):
    snapshots = []
    repo.upsert(TRANSACTIONS, "user-1", {"amount": 1}, doc_id="a")
    repo.commit()

    unsubscribe = repo.watch(TRANSACTIONS, "user-1", snapshots.append)
    assert [[d["id"] for d in s] for s in snapshots] == [["a"]]

    repo.upsert(TRANSACTIONS, "user-1", {"amount": 2}, doc_id="b")
    assert len(snapshots) == 1  # nothing until commit
    repo.commit()
    assert [d["id"] for d in snapshots[-1]] == ["a", "b"]

    unsubscribe()
    repo.remove(TRANSACTIONS, "user-1", "a")
    repo.commit()
    assert len(snapshots) == 2


def test_rollback_discards_pending_notifications(repo, feed):
    snapshots = []
    repo.watch(TRANSACTIONS, "user-1", snapshots.append)

    repo.upsert(TRANSACTIONS, "user-1", {"amount": 1}, doc_id="a")
    repo.rollback()
    repo.commit()

    assert len(snapshots) == 1
    assert repo.list(TRANSACTIONS, "user-1") == []


def test_change_feed_isolates_failing_listener(feed):
    received = []

    def broken(documents):
        raise RuntimeError("boom")

    feed.subscribe(TRANSACTIONS, "user-1", broken)
    feed.subscribe(TRANSACTIONS, "user-1", received.append)

    feed.publish(TRANSACTIONS, "user-1", [{"id": "a"}])

    assert received == [[{"id": "a"}]]


def test_change_feed_unsubscribe(feed):
    unsubscribe = feed.subscribe(CARDS, "user-1", lambda docs: None)
    assert feed.has_listeners(CARDS, "user-1")

    unsubscribe()

    assert not feed.has_listeners(CARDS, "user-1")
    assert not feed.has_listeners(CARDS, "user-2")
