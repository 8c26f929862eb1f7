"""SQLite request logging for API."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from core.database import EventStore
from core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class RequestLog:
    """Captured request/response data for logging."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    client_ip: str | None = None
    event_id: str | None = None
    event_date: str | None = None
    status_code: int = 0
    error_code: str | None = None
    error_message: str | None = None
    processing_time_ms: int = 0


def log_request(store: EventStore, log: RequestLog) -> None:
    """
    Write request log to the store's SQLite database.

    A failed write is reported as a warning; it never fails the request.
    """
    try:
        with store.connect() as conn:
            conn.execute(
                """
                INSERT INTO api_requests (
                    request_id, timestamp, endpoint, method, client_ip,
                    event_id, event_date, status_code, error_code,
                    error_message, processing_time_ms
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
                (
                    log.request_id,
                    log.timestamp,
                    log.endpoint,
                    log.method,
                    log.client_ip,
                    log.event_id,
                    log.event_date,
                    log.status_code,
                    log.error_code,
                    log.error_message,
                    log.processing_time_ms,
                ),
            )
    except StoreUnavailableError as e:
        logger.warning("Could not write request log %s: %s", log.request_id, e)
