"""API Pydantic models."""

from .responses import (
    ErrorCodes,
    ErrorResponse,
    EventCreate,
    EventResponse,
    HealthResponse,
    MessageResponse,
)

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "EventCreate",
    "EventResponse",
    "MessageResponse",
]
