"""
Event validation, per-day indexing and conflict detection.
"""

import re
from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime

from core.config import DATE_FORMAT, TIME_FORMAT
from core.errors import ValidationError
from models.events import ConflictLevel, Event, NewEvent

REQUIRED_FIELDS_MESSAGE = "date and title are required"

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")


def is_valid_date(value: str) -> bool:
    """Check for a real, zero-padded YYYY-MM-DD date."""
    if not _DATE_RE.match(value):
        return False
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return False
    return True


def is_valid_time(value: str) -> bool:
    """Check for a zero-padded 24-hour HH:MM time."""
    if not _TIME_RE.match(value):
        return False
    try:
        datetime.strptime(value, TIME_FORMAT)
    except ValueError:
        return False
    return True


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_new_event(fields: NewEvent) -> NewEvent:
    """
    Validate and normalize the fields of an event about to be created.

    Checks:
    1. Date and title are present and not blank
    2. Date is a real YYYY-MM-DD date
    3. Time, when given, is HH:MM

    Returns:
        Normalized copy with stripped strings; blank optional fields become
        None and a missing description becomes "".

    Raises:
        ValidationError: if any check fails
    """
    event_date = _clean(fields.get("date"))
    title = _clean(fields.get("title"))

    # Check 1: Required fields
    if not event_date or not title:
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)

    # Check 2: Date format
    if not is_valid_date(event_date):
        raise ValidationError(f"date must be a valid YYYY-MM-DD date, got '{event_date}'")

    # Check 3: Time format
    event_time = _clean(fields.get("time"))
    if event_time is not None and not is_valid_time(event_time):
        raise ValidationError(f"time must be HH:MM (24-hour), got '{event_time}'")

    return {
        "date": event_date,
        "title": title,
        "time": event_time,
        "duration": _clean(fields.get("duration")),
        "description": _clean(fields.get("description")) or "",
    }


class EventIndex:
    """Events grouped by date string, keeping their input order."""

    def __init__(self, events: Iterable[Event]):
        self._by_date: dict[str, list[Event]] = defaultdict(list)
        for event in events:
            self._by_date[event["date"]].append(event)

    def events_on(self, date_string: str) -> list[Event]:
        # .get avoids inserting empty groups into the defaultdict
        return list(self._by_date.get(date_string, []))

    def count_on(self, date_string: str) -> int:
        return len(self._by_date.get(date_string, []))


def classify_conflict(count: int) -> ConflictLevel:
    """
    Derive the conflict level from the number of events on a day.

    Purely count-based: two events at non-overlapping times are flagged the
    same as two overlapping ones.
    """
    if count < 0:
        raise ValueError(f"event count cannot be negative, got {count}")
    if count == 0:
        return ConflictLevel.NONE
    if count == 1:
        return ConflictLevel.SINGLE
    if count == 2:
        return ConflictLevel.DOUBLE
    return ConflictLevel.MULTIPLE


CONFLICT_CSS_CLASSES = {
    ConflictLevel.DOUBLE: "conflict-level-2",
    ConflictLevel.MULTIPLE: "conflict-level-3",
}


def conflict_css_class(level: ConflictLevel) -> str | None:
    """CSS class flagging a conflict level, or None when nothing is flagged."""
    return CONFLICT_CSS_CLASSES.get(level)
