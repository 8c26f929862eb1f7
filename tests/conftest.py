"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.database import EventStore  # noqa: E402


@pytest.fixture
def sample_event():
    """Sample event dictionary for testing."""
    return {
        "id": "0f3c1c8e9b7a4d2e8f6a5b4c3d2e1f00",
        "date": "2025-11-25",
        "title": "Project Kickoff",
        "time": "10:00",
        "duration": "1h",
        "description": "",
        "created_at": "2025-11-20T09:00:00+00:00",
    }


@pytest.fixture
def sample_events(sample_event):
    """The six sample events shown on first load."""
    rows = [
        ("Project Kickoff", "2025-11-25", "10:00", "1h"),
        ("Team Review", "2025-11-25", "11:00", "30m"),
        ("Client Presentation", "2025-11-25", "14:00", "2h"),
        ("Quarterly Planning", "2025-12-05", "09:30", "2h"),
        ("Holiday Party", "2025-12-24", "18:00", "4h"),
        ("Bug Bash", "2025-11-01", "09:00", "3h"),
    ]
    return [
        {
            **sample_event,
            "id": f"{i:032x}",
            "title": title,
            "date": date,
            "time": time,
            "duration": duration,
        }
        for i, (title, date, time, duration) in enumerate(rows, start=1)
    ]


@pytest.fixture
def event_store(tmp_path):
    """Empty, initialized event store in a temporary directory."""
    store = EventStore(tmp_path / "db" / "calendar.db")
    store.initialize()
    return store
