"""Health check endpoint."""

import asyncio
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_event_store
from api.models.responses import HealthResponse
from core.config import API_VERSION
from core.database import EventStore

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(store: EventStore = Depends(get_event_store)):
    """
    Health check endpoint for monitoring.

    Returns 200 if the event store answers, 503 otherwise.
    """
    store_available = await asyncio.to_thread(store.ping)
    timestamp = datetime.now(timezone.utc).isoformat()

    if store_available:
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            store_available=True,
            timestamp=timestamp,
        )
    else:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=API_VERSION,
                store_available=False,
                timestamp=timestamp,
                error="Event store unavailable",
            ).model_dump(),
        )
