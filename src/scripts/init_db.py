#!/usr/bin/env python3
"""Create the API request log SQLite3 database and tables."""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DB_PATH
from core.database import create_request_log_tables


def create_database():
    """Create the database and tables if they don't exist."""
    create_request_log_tables(DB_PATH)
    print(f"Database created successfully at: {DB_PATH}")


if __name__ == "__main__":
    create_database()
