"""Tests for session storage."""

import json
from datetime import UTC, datetime
from pathlib import Path

from business_hub.adapters.session_store import FileSessionStore, InMemorySessionStore
from business_hub.domain.models import Business
from business_hub.domain.session import Session


def _business() -> Business:
    return Business(
        id="biz-1",
        name="Acme",
        email="owner@acme.test",
        phone="555-0100",
        created_at=datetime(2024, 1, 5, tzinfo=UTC),
    )


def test_file_store_round_trips_session(tmp_path: Path) -> None:
    store = FileSessionStore(tmp_path / "state" / "session.json")

    store.save(Session(token="abc", business=_business()))

    reopened = FileSessionStore(tmp_path / "state" / "session.json")
    assert reopened.get_token() == "abc"
    assert reopened.get_business() == _business()


def test_file_store_writes_token_and_business_keys(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    FileSessionStore(path).save(Session(token="abc", business=_business()))

    data = json.loads(path.read_text())

    assert set(data) == {"token", "business"}
    assert data["business"]["name"] == "Acme"


def test_file_store_clear_removes_both_keys(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    store = FileSessionStore(path)
    store.save(Session(token="abc", business=_business()))

    store.clear()
    store.clear()

    assert not path.exists()
    assert store.get_token() is None
    assert store.get_business() is None


def test_file_store_ignores_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    path.write_text("{not json")

    store = FileSessionStore(path)

    assert store.get_token() is None
    assert store.get_business() is None


def test_file_store_drops_business_without_id(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    path.write_text(
        json.dumps({"token": "abc", "business": {"name": "Acme", "created_at": "soon"}})
    )

    store = FileSessionStore(path)

    assert store.get_token() == "abc"
    assert store.get_business() is None


def test_file_store_tolerates_partial_business(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    path.write_text(
        json.dumps({"token": "abc", "business": {"id": "biz-1", "updated_at": "x"}})
    )

    business = FileSessionStore(path).get_business()

    assert business == Business(id="biz-1", name="", email="")


def test_in_memory_store_lifecycle() -> None:
    store = InMemorySessionStore()
    assert store.get_token() is None

    store.save(Session(token="abc", business=_business()))
    assert store.get_token() == "abc"
    assert store.get_business() == _business()

    store.clear()
    assert store.get_token() is None
    assert store.get_business() is None
