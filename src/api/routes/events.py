"""Event CRUD endpoints."""

import asyncio
import logging
import time
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies import get_client_ip, get_event_store
from api.errors import error_status
from api.logging import RequestLog, log_request
from api.models.responses import EventCreate, EventResponse, MessageResponse
from core.database import EventStore
from core.errors import CalendarError

logger = logging.getLogger(__name__)

router = APIRouter()


def _record_failure(request_log: RequestLog, exc: Exception) -> None:
    request_log.status_code, request_log.error_code = error_status(exc)
    request_log.error_message = str(exc)


async def _finish(store: EventStore, request_log: RequestLog, start_time: float) -> None:
    request_log.processing_time_ms = int((time.time() - start_time) * 1000)
    await asyncio.to_thread(log_request, store, request_log)


@router.get("/events", response_model=list[EventResponse])
async def list_events_endpoint(
    request: Request,
    date: Annotated[
        str | None, Query(description="Only events on this date (YYYY-MM-DD)")
    ] = None,
    store: EventStore = Depends(get_event_store),
):
    """
    List events, ordered ascending by date.

    An unmatched date filter returns an empty list.
    """
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/events",
        method="GET",
        client_ip=get_client_ip(request),
        event_date=date,
    )

    try:
        events = await asyncio.to_thread(store.list_events, date)
        request_log.status_code = status.HTTP_200_OK
        return [EventResponse.model_validate(event) for event in events]

    except Exception as e:
        _record_failure(request_log, e)
        if isinstance(e, CalendarError):
            logger.error("Error fetching events: %s", e)
        raise

    finally:
        await _finish(store, request_log, start_time)


@router.post(
    "/events",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_event_endpoint(
    request: Request,
    body: EventCreate | None = None,
    store: EventStore = Depends(get_event_store),
):
    """
    Create an event.

    Date and title are required; a missing or blank value is rejected with
    400 before anything reaches the store.
    """
    start_time = time.time()
    fields = (body or EventCreate()).model_dump()
    request_log = RequestLog(
        endpoint="/events",
        method="POST",
        client_ip=get_client_ip(request),
        event_date=fields.get("date"),
    )

    try:
        event = await asyncio.to_thread(store.create_event, fields)
        request_log.status_code = status.HTTP_201_CREATED
        request_log.event_id = event["id"]
        return EventResponse.model_validate(event)

    except Exception as e:
        _record_failure(request_log, e)
        if isinstance(e, CalendarError):
            logger.error("Error adding event: %s", e)
        raise

    finally:
        await _finish(store, request_log, start_time)


@router.delete("/events/{event_id}", response_model=MessageResponse)
async def delete_event_endpoint(
    request: Request,
    event_id: str,
    store: EventStore = Depends(get_event_store),
):
    """Delete an event by id; 404 if it does not exist."""
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/events/{event_id}",
        method="DELETE",
        client_ip=get_client_ip(request),
        event_id=event_id,
    )

    try:
        await asyncio.to_thread(store.delete_event, event_id)
        request_log.status_code = status.HTTP_200_OK
        return MessageResponse(message="Event deleted")

    except Exception as e:
        _record_failure(request_log, e)
        if isinstance(e, CalendarError):
            logger.error("Error deleting event %s: %s", event_id, e)
        raise

    finally:
        await _finish(store, request_log, start_time)
