"""Pydantic response models for API endpoints."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from models.events import Category, RequestStatus


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    event_count: int
    pending_requests: int
    assistant_configured: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    CONFIRMATION_REQUIRED = "CONFIRMATION_REQUIRED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    ASSISTANT_BUSY = "ASSISTANT_BUSY"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    start: datetime
    end: datetime
    category: Category
    floor: int
    room: str
    description: str | None = None


class RequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    date: date
    category: Category
    floor: int
    room: str
    description: str
    status: RequestStatus
    submitted_by: str | None = None
    submitted_at: datetime


class CalendarCellResponse(BaseModel):
    """One grid cell, truncated for display."""

    date: date
    in_month: bool
    is_today: bool
    events: list[EventResponse]
    more_count: int


class CalendarResponse(BaseModel):
    month: str  # YYYY-MM
    title: str  # "March 2025"
    previous_month: str
    next_month: str
    cells: list[CalendarCellResponse]


class DayResponse(BaseModel):
    date: date
    events: list[EventResponse]


class SessionResponse(BaseModel):
    role: str
    token: str | None = None


class AssistantResponse(BaseModel):
    answer: str
    status: str  # "ok", "unavailable" or "error"
