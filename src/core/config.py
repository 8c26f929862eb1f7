"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(
    os.environ.get("CALENDAR_DB_PATH", PROJECT_ROOT / "data" / "db" / "calendar.db")
)

# =============================================================================
# CALENDAR CONFIGURATION
# =============================================================================

DATE_FORMAT = "%Y-%m-%d"  # e.g., "2025-11-26"
TIME_FORMAT = "%H:%M"  # 24-hour, zero-padded
GRID_COLUMNS = 7
GRID_MAX_CELLS = 42  # 6 rows x 7 columns

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "4000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# =============================================================================
# CLIENT CONFIGURATION
# =============================================================================

CALENDAR_API_URL = os.environ.get("CALENDAR_API_URL", f"http://localhost:{API_PORT}")
CLIENT_TIMEOUT_SECONDS = float(os.environ.get("CLIENT_TIMEOUT_SECONDS", "10"))
