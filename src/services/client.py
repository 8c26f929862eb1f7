"""
Async REST client for the calendar event API.
"""

import logging

import httpx

from core.config import CALENDAR_API_URL, CLIENT_TIMEOUT_SECONDS
from core.errors import NotFoundError, StoreUnavailableError, ValidationError
from core.validation import validate_new_event
from models.events import Event

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Pull the 'error' field out of an error body, falling back to the status."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {response.status_code}"


def _to_event(data: dict) -> Event:
    return {
        "id": data["id"],
        "date": data["date"],
        "title": data["title"],
        "time": data.get("time"),
        "duration": data.get("duration"),
        "description": data.get("description") or "",
        "created_at": data.get("createdAt", ""),
    }


class EventStoreClient:
    """
    Client for ``/events``.

    Pass an ``http_client`` to share a connection pool or to route requests
    to an in-process app; otherwise one is created and owned by this client.
    """

    def __init__(
        self,
        base_url: str = CALENDAR_API_URL,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = CLIENT_TIMEOUT_SECONDS,
    ):
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> "EventStoreClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error("Event API unreachable (%s %s): %s", method, url, e)
            raise StoreUnavailableError(f"Event API unreachable: {e}") from e

        if response.status_code == 400:
            raise ValidationError(_error_message(response))
        if response.status_code == 404:
            raise NotFoundError(_error_message(response))
        if response.status_code >= 400:
            message = _error_message(response)
            logger.error("Event API error (%s %s): %s", method, url, message)
            raise StoreUnavailableError(message)
        return response

    async def list_events(self, date: str | None = None) -> list[Event]:
        """List events, optionally only those on one date."""
        params = {"date": date} if date else None
        response = await self._request("GET", "/events", params=params)
        return [_to_event(item) for item in response.json()]

    async def create_event(
        self,
        date: str,
        title: str,
        description: str | None = None,
        time: str | None = None,
        duration: str | None = None,
    ) -> Event:
        """
        Create an event.

        Raises:
            ValidationError: if date or title is empty (checked before sending)
        """
        payload = validate_new_event(
            {
                "date": date,
                "title": title,
                "description": description,
                "time": time,
                "duration": duration,
            }
        )
        response = await self._request("POST", "/events", json=payload)
        return _to_event(response.json())

    async def delete_event(self, event_id: str) -> str:
        """Delete an event and return the server's confirmation message."""
        response = await self._request("DELETE", f"/events/{event_id}")
        return response.json().get("message", "Event deleted")
