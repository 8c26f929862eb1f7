"""Tests for new-event validation, the event index and conflict levels."""

import pytest

from core.errors import ValidationError
from core.validation import (
    REQUIRED_FIELDS_MESSAGE,
    EventIndex,
    classify_conflict,
    conflict_css_class,
    is_valid_date,
    is_valid_time,
    validate_new_event,
)
from models.events import ConflictLevel


class TestValidateNewEvent:
    def test_normalizes_optional_fields(self):
        clean = validate_new_event({"date": "2025-12-01", "title": "  Standup "})
        assert clean == {
            "date": "2025-12-01",
            "title": "Standup",
            "time": None,
            "duration": None,
            "description": "",
        }

    def test_keeps_time_and_duration(self):
        clean = validate_new_event(
            {"date": "2025-12-01", "title": "Standup", "time": "09:15", "duration": "15m"}
        )
        assert clean["time"] == "09:15"
        assert clean["duration"] == "15m"

    @pytest.mark.parametrize(
        "fields",
        [
            {},
            {"title": "Standup"},
            {"date": "2025-12-01"},
            {"date": "", "title": "Standup"},
            {"date": "2025-12-01", "title": "   "},
            {"date": None, "title": None},
        ],
    )
    def test_requires_date_and_title(self, fields):
        with pytest.raises(ValidationError, match=REQUIRED_FIELDS_MESSAGE):
            validate_new_event(fields)

    @pytest.mark.parametrize("value", ["2025-2-01", "2025-02-30", "01-12-2025", "tomorrow"])
    def test_rejects_malformed_date(self, value):
        with pytest.raises(ValidationError, match="YYYY-MM-DD"):
            validate_new_event({"date": value, "title": "Standup"})

    @pytest.mark.parametrize("value", ["9:00", "24:00", "09:60", "9am"])
    def test_rejects_malformed_time(self, value):
        with pytest.raises(ValidationError, match="HH:MM"):
            validate_new_event({"date": "2025-12-01", "title": "Standup", "time": value})


def test_date_and_time_checks():
    assert is_valid_date("2024-02-29")
    assert not is_valid_date("2025-02-29")
    assert is_valid_time("00:00")
    assert is_valid_time("23:59")
    assert not is_valid_time("7:05")


class TestEventIndex:
    def test_events_on_holiday(self, sample_events):
        index = EventIndex(sample_events)
        found = index.events_on("2025-12-24")
        assert [e["title"] for e in found] == ["Holiday Party"]

    def test_preserves_input_order(self, sample_events):
        index = EventIndex(sample_events)
        titles = [e["title"] for e in index.events_on("2025-11-25")]
        assert titles == ["Project Kickoff", "Team Review", "Client Presentation"]

    def test_unknown_date_is_empty(self, sample_events):
        index = EventIndex(sample_events)
        assert index.events_on("2030-01-01") == []
        assert index.count_on("2030-01-01") == 0

    def test_returned_list_is_a_copy(self, sample_events):
        index = EventIndex(sample_events)
        index.events_on("2025-12-24").clear()
        assert index.count_on("2025-12-24") == 1


@pytest.mark.parametrize(
    "count, level",
    [
        (0, ConflictLevel.NONE),
        (1, ConflictLevel.SINGLE),
        (2, ConflictLevel.DOUBLE),
        (3, ConflictLevel.MULTIPLE),
        (10, ConflictLevel.MULTIPLE),
    ],
)
def test_classify_conflict(count, level):
    assert classify_conflict(count) is level


def test_classify_conflict_rejects_negative():
    with pytest.raises(ValueError):
        classify_conflict(-1)


def test_sample_busy_day_is_multiple(sample_events):
    # Three events at 10:00, 11:00 and 14:00 do not overlap but still count
    index = EventIndex(sample_events)
    assert classify_conflict(index.count_on("2025-11-25")) is ConflictLevel.MULTIPLE


def test_conflict_css_classes():
    assert conflict_css_class(ConflictLevel.NONE) is None
    assert conflict_css_class(ConflictLevel.SINGLE) is None
    assert conflict_css_class(ConflictLevel.DOUBLE) == "conflict-level-2"
    assert conflict_css_class(ConflictLevel.MULTIPLE) == "conflict-level-3"
