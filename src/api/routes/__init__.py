"""API route modules."""

from .assistant import router as assistant_router
from .calendar import router as calendar_router
from .events import router as events_router
from .health import router as health_router
from .requests import router as requests_router
from .session import router as session_router

__all__ = [
    "assistant_router",
    "calendar_router",
    "events_router",
    "health_router",
    "requests_router",
    "session_router",
]
