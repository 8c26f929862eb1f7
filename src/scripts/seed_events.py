#!/usr/bin/env python3
"""
Load the sample events into the calendar database.

Usage:
    uv run python src/scripts/seed_events.py
    uv run python src/scripts/seed_events.py --db /tmp/calendar.db --reset
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DB_PATH
from core.database import EventStore

SAMPLE_EVENTS = [
    {"title": "Project Kickoff", "date": "2025-11-25", "time": "10:00", "duration": "1h"},
    {"title": "Team Review", "date": "2025-11-25", "time": "11:00", "duration": "30m"},
    {"title": "Client Presentation", "date": "2025-11-25", "time": "14:00", "duration": "2h"},
    {"title": "Quarterly Planning", "date": "2025-12-05", "time": "09:30", "duration": "2h"},
    {"title": "Holiday Party", "date": "2025-12-24", "time": "18:00", "duration": "4h"},
    {"title": "Bug Bash", "date": "2025-11-01", "time": "09:00", "duration": "3h"},
]


def seed(store: EventStore, reset: bool = False) -> int:
    """Insert the sample events; with reset, delete existing events first."""
    store.initialize()
    if reset:
        for event in store.list_events():
            store.delete_event(event["id"])
    for fields in SAMPLE_EVENTS:
        store.create_event(fields)
    return len(SAMPLE_EVENTS)


def main():
    parser = argparse.ArgumentParser(description="Seed the calendar with sample events")
    parser.add_argument("--db", type=Path, default=DB_PATH, help="SQLite database path")
    parser.add_argument(
        "--reset", action="store_true", help="Delete existing events before seeding"
    )
    args = parser.parse_args()

    count = seed(EventStore(args.db), reset=args.reset)
    print(f"Seeded {count} events into {args.db}")


if __name__ == "__main__":
    main()
