"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.routes import calendar_router, events_router, health_router
from core.config import API_DEBUG, API_VERSION, CORS_ORIGINS, DB_PATH, LOG_LEVEL
from core.database import EventStore

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup: make sure the event store schema exists
    store = EventStore(DB_PATH)
    store.initialize()
    app.state.event_store = store
    logger.info("Event store ready at %s", DB_PATH)

    yield


app = FastAPI(
    title="Calendar API",
    description="REST API for calendar events and a server-rendered month grid",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(health_router)
app.include_router(events_router)
app.include_router(calendar_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
