"""Pydantic request and response models for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    store_available: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class MessageResponse(BaseModel):
    """Confirmation message."""

    message: str


class EventCreate(BaseModel):
    """
    Body of POST /events.

    Everything is optional at the schema level so that a missing date or
    title is reported as a 400 with the standard error body.
    """

    date: str | None = None
    title: str | None = None
    time: str | None = None
    duration: str | None = None
    description: str | None = None


class EventResponse(BaseModel):
    """Persisted event."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    date: str
    title: str
    time: str | None = None
    duration: str | None = None
    description: str = ""
    created_at: str = Field(alias="createdAt")


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
