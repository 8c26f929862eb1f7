"""Server-rendered month grid and its add-event form."""

import asyncio
import logging
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Query, status
from fastapi.responses import HTMLResponse, RedirectResponse

from api.dependencies import get_event_store
from core.database import EventStore
from core.errors import ValidationError
from core.validation import is_valid_date
from models.events import CalendarView
from services.calendar import CalendarState, EventPrompt, open_prompt
from services.markup import render_month_html

logger = logging.getLogger(__name__)

router = APIRouter()

CALENDAR_PATH = "/calendar"


def resolve_view(year: int | None, month: int | None) -> CalendarView:
    """Fill a missing year or month from today's date."""
    current = CalendarView.for_date(date.today())
    return CalendarView(
        year=current.year if year is None else year,
        month=current.month if month is None else month,
    )


@router.get(CALENDAR_PATH, response_class=HTMLResponse)
async def calendar_page(
    year: Annotated[int | None, Query(ge=1, le=9999)] = None,
    month: Annotated[int | None, Query(ge=0, le=11, description="0-based month")] = None,
    add: Annotated[
        str | None, Query(description="Open the add-event prompt for this date")
    ] = None,
    store: EventStore = Depends(get_event_store),
):
    """Render one month; defaults to the current month."""
    view = resolve_view(year, month)

    events = await asyncio.to_thread(store.list_events)
    state = CalendarState(view=view, events=tuple(events))

    if add is not None:
        if not is_valid_date(add):
            raise ValidationError(f"add must be a valid YYYY-MM-DD date, got '{add}'")
        state = open_prompt(state, add)

    return HTMLResponse(render_month_html(state, date.today(), CALENDAR_PATH))


@router.post(CALENDAR_PATH, response_class=HTMLResponse)
async def calendar_form_submit(
    year: Annotated[int, Form(ge=1, le=9999)],
    month: Annotated[int, Form(ge=0, le=11, description="0-based month")],
    event_date: Annotated[str | None, Form(alias="date")] = None,
    title: Annotated[str | None, Form()] = None,
    time: Annotated[str | None, Form()] = None,
    duration: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    store: EventStore = Depends(get_event_store),
):
    """
    Create an event from the add-event form.

    Redirects back to the month on success. An invalid submission
    re-renders the month with the form still open, its values kept and the
    error shown.
    """
    view = CalendarView(year, month)
    fields = {
        "date": event_date,
        "title": title,
        "time": time,
        "duration": duration,
        "description": description,
    }

    try:
        await asyncio.to_thread(store.create_event, fields)
    except ValidationError as e:
        logger.info("Rejected add-event form for %s: %s", event_date, e)
        events = await asyncio.to_thread(store.list_events)
        prompt = EventPrompt(
            date=event_date or "",
            title=title or "",
            time=time or "",
            duration=duration or "",
            description=description or "",
            error=str(e),
        )
        state = CalendarState(view=view, events=tuple(events), prompt=prompt)
        return HTMLResponse(
            render_month_html(state, date.today(), CALENDAR_PATH),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    return RedirectResponse(
        f"{CALENDAR_PATH}?year={view.year}&month={view.month}",
        status_code=status.HTTP_303_SEE_OTHER,
    )
