"""FastAPI dependencies for shared resources."""

from fastapi import Request

from core.database import EventStore


def get_event_store(request: Request) -> EventStore:
    """
    Return the event store created at application startup.

    Tests replace this dependency through ``app.dependency_overrides``.
    """
    return request.app.state.event_store


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"
