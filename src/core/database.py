"""
SQLite event store.
"""

import logging
import sqlite3
import threading
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path

from core.config import DB_PATH
from core.errors import NotFoundError, StoreUnavailableError
from core.validation import validate_new_event
from models.events import Event, NewEvent

logger = logging.getLogger(__name__)

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS events (
        id TEXT PRIMARY KEY,
        date TEXT NOT NULL,
        title TEXT NOT NULL,
        time TEXT,
        duration TEXT,
        description TEXT NOT NULL DEFAULT '',
        created_at TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_events_date ON events(date)",
    """
    CREATE TABLE IF NOT EXISTS api_requests (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        request_id TEXT UNIQUE NOT NULL,
        timestamp TEXT NOT NULL,
        endpoint TEXT NOT NULL,
        method TEXT NOT NULL,
        client_ip TEXT,
        event_id TEXT,
        event_date TEXT,
        status_code INTEGER NOT NULL,
        error_code TEXT,
        error_message TEXT,
        processing_time_ms INTEGER NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_api_requests_timestamp ON api_requests(timestamp)",
    "CREATE INDEX IF NOT EXISTS idx_api_requests_status ON api_requests(status_code)",
]

EVENT_COLUMNS = "id, date, title, time, duration, description, created_at"


def _row_to_event(row: sqlite3.Row) -> Event:
    return {
        "id": row["id"],
        "date": row["date"],
        "title": row["title"],
        "time": row["time"],
        "duration": row["duration"],
        "description": row["description"],
        "created_at": row["created_at"],
    }


class EventStore:
    """
    Event persistence backed by a single SQLite file.

    One connection is opened per operation. Writes are serialized with a
    lock so concurrent creates and deletes from worker threads never
    interleave.
    """

    def __init__(self, db_path: Path = DB_PATH):
        self.db_path = Path(db_path)
        self._write_lock = threading.Lock()

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection; sqlite errors surface as StoreUnavailableError."""
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            logger.exception("Cannot open event store at %s", self.db_path)
            raise StoreUnavailableError(f"Cannot open event store: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.exception("Event store operation failed")
            raise StoreUnavailableError(f"Event store operation failed: {e}") from e
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create the database file and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self.connect() as conn:
            for statement in SCHEMA:
                conn.execute(statement)

    def ping(self) -> bool:
        """Return True if the events table can be queried."""
        try:
            with self.connect() as conn:
                conn.execute("SELECT 1 FROM events LIMIT 1")
        except StoreUnavailableError:
            return False
        return True

    def list_events(self, date: str | None = None) -> list[Event]:
        """
        List events, optionally restricted to one exact date.

        Results are ordered by date, then by insertion order.
        """
        with self.connect() as conn:
            if date is not None:
                rows = conn.execute(
                    f"SELECT {EVENT_COLUMNS} FROM events WHERE date = ? ORDER BY rowid",
                    (date,),
                ).fetchall()
            else:
                rows = conn.execute(
                    f"SELECT {EVENT_COLUMNS} FROM events ORDER BY date, rowid"
                ).fetchall()
        return [_row_to_event(row) for row in rows]

    def create_event(self, fields: NewEvent) -> Event:
        """
        Validate and persist a new event.

        Raises:
            ValidationError: before touching the database if fields are invalid
            StoreUnavailableError: if the insert fails
        """
        clean = validate_new_event(fields)
        event: Event = {
            "id": uuid.uuid4().hex,
            "date": clean["date"],
            "title": clean["title"],
            "time": clean["time"],
            "duration": clean["duration"],
            "description": clean["description"],
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        with self._write_lock, self.connect() as conn:
            conn.execute(
                f"INSERT INTO events ({EVENT_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    event["id"],
                    event["date"],
                    event["title"],
                    event["time"],
                    event["duration"],
                    event["description"],
                    event["created_at"],
                ),
            )
        logger.info("Created event %s on %s", event["id"], event["date"])
        return event

    def delete_event(self, event_id: str) -> None:
        """
        Permanently remove an event.

        Raises:
            NotFoundError: if no event has this id
        """
        with self._write_lock, self.connect() as conn:
            cursor = conn.execute("DELETE FROM events WHERE id = ?", (event_id,))
            deleted = cursor.rowcount
        if deleted == 0:
            raise NotFoundError("Event not found")
        logger.info("Deleted event %s", event_id)

    def count_events(self) -> int:
        with self.connect() as conn:
            return conn.execute("SELECT COUNT(*) FROM events").fetchone()[0]
