"""
Calendar renderer: view-state transitions, day-cell projection and the
controller that sequences store calls.

State is immutable. Transitions are plain functions returning a new
``CalendarState``; ``CalendarController`` holds the current state and awaits
the event store between transitions.
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Protocol

from core.errors import CalendarError
from core.grid import days_in_previous_month, format_date, month_layout
from core.validation import REQUIRED_FIELDS_MESSAGE, EventIndex, classify_conflict
from models.events import CalendarView, DayCell, Event

logger = logging.getLogger(__name__)


class EventSource(Protocol):
    """Async event store interface used by the renderer."""

    async def list_events(self, date: str | None = None) -> list[Event]: ...

    async def create_event(
        self,
        date: str,
        title: str,
        description: str | None = None,
        time: str | None = None,
        duration: str | None = None,
    ) -> Event: ...

    async def delete_event(self, event_id: str) -> str: ...


@dataclass(frozen=True)
class EventPrompt:
    """Add-event form opened from a day cell."""

    date: str
    title: str = ""
    time: str = ""
    duration: str = ""
    description: str = ""
    submitting: bool = False
    error: str | None = None


@dataclass(frozen=True)
class CalendarState:
    view: CalendarView
    events: tuple[Event, ...] = ()
    prompt: EventPrompt | None = None
    error: str | None = None
    saving: bool = False  # a create is outstanding


# =============================================================================
# TRANSITIONS
# =============================================================================


def prev_month(state: CalendarState) -> CalendarState:
    return replace(state, view=state.view.prev())


def next_month(state: CalendarState) -> CalendarState:
    return replace(state, view=state.view.next())


def open_prompt(state: CalendarState, date_string: str) -> CalendarState:
    """Open the add-event prompt pre-populated with a cell's date."""
    return replace(state, prompt=EventPrompt(date=date_string))


def close_prompt(state: CalendarState) -> CalendarState:
    return replace(state, prompt=None)


def update_prompt(state: CalendarState, **fields) -> CalendarState:
    """Change form fields of the open prompt."""
    if state.prompt is None:
        raise ValueError("No event prompt is open")
    return replace(state, prompt=replace(state.prompt, **fields))


# =============================================================================
# PROJECTION
# =============================================================================


def build_day_cells(view: CalendarView, events: list[Event], today: date) -> list[DayCell]:
    """
    Build the grid cells for a month.

    Order: leading days of the previous month, the month's own days, then
    trailing days of the next month. Only active cells carry events, a
    conflict level and the today flag.
    """
    layout = month_layout(view.year, view.month)
    index = EventIndex(events)
    today_string = format_date(today.year, today.month - 1, today.day)
    cells: list[DayCell] = []

    before = view.prev()
    prev_days = days_in_previous_month(view.year, view.month)
    for i in range(layout.leading_count):
        day = prev_days - layout.leading_count + i + 1
        cells.append(
            DayCell(day, format_date(before.year, before.month, day), is_active=False)
        )

    for day in range(1, layout.days_in_month + 1):
        date_string = format_date(view.year, view.month, day)
        day_events = index.events_on(date_string)
        cells.append(
            DayCell(
                day,
                date_string,
                is_active=True,
                is_today=date_string == today_string,
                events=day_events,
                conflict=classify_conflict(len(day_events)),
            )
        )

    after = view.next()
    for day in range(1, layout.trailing_count + 1):
        cells.append(
            DayCell(day, format_date(after.year, after.month, day), is_active=False)
        )

    return cells


# =============================================================================
# CONTROLLER
# =============================================================================


class CalendarController:
    """
    Drives the calendar against an event store.

    Every navigation and every successful create or delete triggers a full
    rebuild. Store failures never propagate: they are kept in the state and
    the previous events stay on screen.
    """

    def __init__(
        self,
        store: EventSource,
        view: CalendarView | None = None,
        today: date | None = None,
    ):
        self.store = store
        self.today = today or date.today()
        self.state = CalendarState(view=view or CalendarView.for_date(self.today))
        self._rebuild_lock = asyncio.Lock()

    async def _rebuild(self) -> None:
        async with self._rebuild_lock:
            try:
                events = await self.store.list_events()
            except CalendarError as e:
                logger.warning("Could not refresh events: %s", e)
                self.state = replace(self.state, error=str(e))
                return
            self.state = replace(self.state, events=tuple(events), error=None)

    async def load(self, view: CalendarView | None = None) -> CalendarState:
        if view is not None:
            self.state = replace(self.state, view=view)
        await self._rebuild()
        return self.state

    async def prev(self) -> CalendarState:
        self.state = prev_month(self.state)
        await self._rebuild()
        return self.state

    async def next(self) -> CalendarState:
        self.state = next_month(self.state)
        await self._rebuild()
        return self.state

    def open_prompt(self, date_string: str) -> CalendarState:
        self.state = open_prompt(self.state, date_string)
        return self.state

    def close_prompt(self) -> CalendarState:
        self.state = close_prompt(self.state)
        return self.state

    async def submit(self, **fields) -> bool:
        """
        Submit the open prompt, optionally updating its fields first.

        Returns True when the event was created. While a create is
        outstanding every further submit is refused, including one from a
        prompt opened after the first was dismissed.
        """
        prompt = self.state.prompt
        if prompt is None or self.state.saving:
            return False
        if fields:
            prompt = replace(prompt, **fields)

        if not prompt.date.strip() or not prompt.title.strip():
            self.state = replace(self.state, prompt=replace(prompt, error=REQUIRED_FIELDS_MESSAGE))
            return False

        submitted = replace(prompt, submitting=True, error=None)
        self.state = replace(self.state, prompt=submitted, saving=True)
        try:
            await self.store.create_event(
                date=prompt.date,
                title=prompt.title,
                description=prompt.description,
                time=prompt.time,
                duration=prompt.duration,
            )
        except CalendarError as e:
            logger.warning("Could not create event on %s: %s", prompt.date, e)
            if self.state.prompt is submitted:
                self.state = replace(
                    self.state,
                    prompt=replace(submitted, submitting=False, error=str(e)),
                    saving=False,
                )
            else:
                # Prompt was dismissed or replaced while the request was pending
                self.state = replace(self.state, error=str(e), saving=False)
            return False

        if self.state.prompt is submitted:
            self.state = close_prompt(self.state)
        self.state = replace(self.state, saving=False)
        await self._rebuild()
        return True

    async def delete(self, event_id: str) -> bool:
        """Delete an event and rebuild; on failure keep the current events."""
        try:
            await self.store.delete_event(event_id)
        except CalendarError as e:
            logger.warning("Could not delete event %s: %s", event_id, e)
            self.state = replace(self.state, error=str(e))
            return False
        await self._rebuild()
        return True

    def cells(self) -> list[DayCell]:
        return build_day_cells(self.state.view, list(self.state.events), self.today)

    def render(self) -> str:
        from services.markup import render_month_html

        return render_month_html(self.state, self.today)
