"""
Pytest configuration and shared fixtures.
"""

import os
import sys
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

# Keep the request log out of the project data directory during tests
os.environ["REQUEST_LOG_DB"] = str(Path(tempfile.mkdtemp()) / "requests.db")
os.environ["ADMIN_PASSPHRASE"] = "test-passphrase"
os.environ["GEMINI_API_KEY"] = ""

from core.database import create_request_log_tables  # noqa: E402
from core.ids import SequentialIdGenerator  # noqa: E402
from models.events import CalendarEvent, Category  # noqa: E402
from services.store import FacilityStore  # noqa: E402

ADMIN_PASSPHRASE = "test-passphrase"

create_request_log_tables()


@pytest.fixture
def id_generator():
    return SequentialIdGenerator()


@pytest.fixture
def sample_event():
    """Sample maintenance event for testing."""
    return CalendarEvent(
        id="evt-sample",
        title="Boiler Service",
        start=datetime(2025, 3, 10, 9, 0),
        end=datetime(2025, 3, 10, 11, 0),
        category=Category.MAINTENANCE,
        floor=1,
        room="Mechanical Room",
        description="Annual boiler service",
    )


@pytest.fixture
def sample_events(sample_event):
    """Events spread across categories, floors and days."""
    return [
        sample_event,
        CalendarEvent(
            id="evt-clean",
            title="Lobby Floor Polish",
            start=datetime(2025, 3, 10, 14, 0),
            end=datetime(2025, 3, 10, 16, 0),
            category=Category.CLEANING,
            floor=1,
            room="Lobby",
        ),
        CalendarEvent(
            id="evt-party",
            title="Purim Party",
            start=datetime(2025, 3, 14, 18, 0),
            end=datetime(2025, 3, 14, 21, 0),
            category=Category.EVENT,
            floor=3,
            room="Community Hall",
        ),
        CalendarEvent(
            id="evt-april",
            title="Roof Drain Check",
            start=datetime(2025, 4, 2, 9, 0),
            end=datetime(2025, 4, 2, 10, 0),
            category=Category.MAINTENANCE,
            floor=6,
            room="Roof",
        ),
    ]


@pytest.fixture
def store(sample_events, id_generator):
    return FacilityStore(sample_events, id_generator)


@pytest.fixture
def seeded_store():
    return FacilityStore.seeded(2025, SequentialIdGenerator())


@pytest.fixture
def client(seeded_store):
    """TestClient with the seeded 2025 store in place of the startup one."""
    from fastapi.testclient import TestClient

    from api.dependencies import get_store
    from api.main import app

    app.dependency_overrides[get_store] = lambda: seeded_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client):
    response = client.post("/v1/session/login", json={"passphrase": ADMIN_PASSPHRASE})
    assert response.status_code == 200
    return {"X-Session-Token": response.json()["token"]}
