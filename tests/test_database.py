"""Tests for the SQLite event store."""

import sqlite3
from datetime import datetime

import pytest

from core.database import EventStore
from core.errors import NotFoundError, StoreUnavailableError, ValidationError


def test_create_then_list_by_date(event_store):
    created = event_store.create_event({"date": "2025-12-01", "title": "Standup"})

    events = event_store.list_events("2025-12-01")

    assert events == [created]
    assert created["title"] == "Standup"
    assert len(created["id"]) == 32
    assert datetime.fromisoformat(created["created_at"]).tzinfo is not None


def test_unfiltered_list_is_sorted_by_date_then_insertion(event_store):
    event_store.create_event({"date": "2025-12-24", "title": "Holiday Party"})
    event_store.create_event({"date": "2025-11-25", "title": "Project Kickoff"})
    event_store.create_event({"date": "2025-11-25", "title": "Team Review"})

    titles = [e["title"] for e in event_store.list_events()]

    assert titles == ["Project Kickoff", "Team Review", "Holiday Party"]


def test_list_empty(event_store):
    assert event_store.list_events() == []
    assert event_store.list_events("2025-12-01") == []


def test_invalid_event_never_reaches_storage(event_store):
    with pytest.raises(ValidationError):
        event_store.create_event({"date": "2025-12-01", "title": ""})
    assert event_store.count_events() == 0


def test_delete_missing_leaves_count_unchanged(event_store):
    event_store.create_event({"date": "2025-12-01", "title": "Standup"})

    with pytest.raises(NotFoundError, match="Event not found"):
        event_store.delete_event("does-not-exist")

    assert event_store.count_events() == 1


def test_round_trip(event_store):
    created = event_store.create_event(
        {"date": "2025-12-01", "title": "Standup", "description": "Daily"}
    )
    assert event_store.list_events("2025-12-01")[0]["description"] == "Daily"

    event_store.delete_event(created["id"])

    assert event_store.list_events("2025-12-01") == []
    with pytest.raises(NotFoundError):
        event_store.delete_event(created["id"])


def test_uninitialized_store_is_unavailable(tmp_path):
    store = EventStore(tmp_path / "missing.db")

    assert store.ping() is False
    with pytest.raises(StoreUnavailableError):
        store.list_events()


def test_initialize_is_idempotent(event_store):
    event_store.create_event({"date": "2025-12-01", "title": "Standup"})
    event_store.initialize()
    assert event_store.count_events() == 1


def test_schema_has_request_log_table(event_store):
    conn = sqlite3.connect(event_store.db_path)
    try:
        tables = {
            row[0]
            for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
    finally:
        conn.close()
    assert {"events", "api_requests"} <= tables


def test_seed_sample_events(event_store):
    from scripts.seed_events import SAMPLE_EVENTS, seed

    assert seed(event_store) == len(SAMPLE_EVENTS)
    assert seed(event_store, reset=True) == len(SAMPLE_EVENTS)

    events = event_store.list_events()
    assert len(events) == 6
    assert [e["title"] for e in event_store.list_events("2025-12-24")] == ["Holiday Party"]
