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
    os.environ.get("REQUEST_LOG_DB", PROJECT_ROOT / "data" / "db" / "facility-requests.db")
)
OUTPUT_DIR = PROJECT_ROOT / "output"

# =============================================================================
# FACILITY
# =============================================================================

FACILITY_NAME = os.environ.get("FACILITY_NAME", "CRC & SIB JCC Facility Manager")

FLOORS = (1, 2, 3, 4, 5, 6)
CATEGORIES = ("Maintenance", "Cleaning", "Event")

# =============================================================================
# SCHEDULE CONFIGURATION
# =============================================================================

DEFAULT_START_HOUR = 9  # Seeded events start at 9 AM local time

# Approved requests start/end at this hour on the requested date (0 = local midnight)
APPROVED_EVENT_HOUR = int(os.environ.get("APPROVED_EVENT_HOUR", "0"))

# Week start as a Python weekday (0 = Monday ... 6 = Sunday)
WEEK_START = int(os.environ.get("WEEK_START", "6"))

MAX_EVENTS_PER_CELL = 4  # Events shown per calendar cell before "+N more"

# =============================================================================
# AI ASSISTANT (from environment)
# =============================================================================

GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-1.5-flash")
AI_SNAPSHOT_LIMIT = 50

AI_UNAVAILABLE_MESSAGE = "AI assistant is unavailable: no API key is configured."
AI_ERROR_MESSAGE = "Sorry, the AI assistant could not answer right now. Please try again later."

# =============================================================================
# API CONFIGURATION
# =============================================================================

ADMIN_PASSPHRASE = os.environ.get("ADMIN_PASSPHRASE", "")
MAX_ADMIN_SESSIONS = int(os.environ.get("MAX_ADMIN_SESSIONS", "100"))  # Oldest login evicted beyond this
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
