"""
Data models for events and the calendar view.

Events stay TypedDicts so they move between the store, the API and the
client as plain dictionaries. View state is immutable.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import TypedDict


class Event(TypedDict):
    """Persisted calendar event."""
    id: str
    date: str  # YYYY-MM-DD
    title: str
    time: str | None  # HH:MM
    duration: str | None  # free text, e.g. "1h", "30m"
    description: str
    created_at: str  # ISO 8601 UTC


class NewEvent(TypedDict, total=False):
    """Fields accepted when creating an event."""
    date: str
    title: str
    time: str | None
    duration: str | None
    description: str | None


class ConflictLevel(str, Enum):
    """Display hint derived from the number of events on a day."""

    NONE = "none"
    SINGLE = "single"
    DOUBLE = "double"
    MULTIPLE = "multiple"


@dataclass(frozen=True)
class CalendarView:
    """Displayed month. Month is 0-based (0 = January)."""

    year: int
    month: int

    @classmethod
    def for_date(cls, d: date) -> "CalendarView":
        return cls(year=d.year, month=d.month - 1)

    def prev(self) -> "CalendarView":
        if self.month == 0:
            return CalendarView(self.year - 1, 11)
        return CalendarView(self.year, self.month - 1)

    def next(self) -> "CalendarView":
        if self.month == 11:
            return CalendarView(self.year + 1, 0)
        return CalendarView(self.year, self.month + 1)

    @property
    def label(self) -> str:
        """Header text, e.g. 'November 2025'."""
        return date(self.year, self.month + 1, 1).strftime("%B %Y")


@dataclass(frozen=True)
class DayCell:
    """One rendered grid cell."""

    day_number: int
    date: str
    is_active: bool
    is_today: bool = False
    events: list[Event] = field(default_factory=list)
    conflict: ConflictLevel = ConflictLevel.NONE
