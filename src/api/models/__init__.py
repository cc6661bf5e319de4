"""API Pydantic models."""

from .requests import AssistantQuery, EventCreate, EventUpdate, LoginRequest, RequestSubmission
from .responses import (
    AssistantResponse,
    CalendarCellResponse,
    CalendarResponse,
    DayResponse,
    ErrorCodes,
    ErrorResponse,
    EventResponse,
    HealthResponse,
    RequestResponse,
    SessionResponse,
)

__all__ = [
    "AssistantQuery",
    "AssistantResponse",
    "CalendarCellResponse",
    "CalendarResponse",
    "DayResponse",
    "ErrorCodes",
    "ErrorResponse",
    "EventCreate",
    "EventResponse",
    "EventUpdate",
    "HealthResponse",
    "LoginRequest",
    "RequestResponse",
    "RequestSubmission",
    "SessionResponse",
]
