"""
Data models for calendar events, guest requests and view state.

Plain dataclasses with no behavior beyond small derived properties.
API-facing Pydantic models live in api.models.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from core.config import MAX_EVENTS_PER_CELL


class Category(str, Enum):
    """Activity category shown on the calendar."""
    MAINTENANCE = "Maintenance"
    CLEANING = "Cleaning"
    EVENT = "Event"


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Role(str, Enum):
    VIEWER = "viewer"
    ADMIN = "admin"


@dataclass
class CalendarEvent:
    """Scheduled activity on a floor/room."""
    id: str
    title: str
    start: datetime
    end: datetime
    category: Category
    floor: int
    room: str
    description: str | None = None


@dataclass
class FacilityRequest:
    """Guest-submitted request awaiting an admin decision."""
    id: str
    title: str
    date: date
    category: Category
    floor: int
    room: str
    description: str = ""
    status: RequestStatus = RequestStatus.PENDING
    submitted_by: str | None = None
    submitted_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class FilterState:
    """Calendar view filters. floor=None means every floor is shown."""
    show_maintenance: bool = True
    show_cleaning: bool = True
    show_events: bool = True
    floor: int | None = None


@dataclass
class CalendarCell:
    """One day in the projected month grid."""
    day: date
    in_month: bool
    is_today: bool
    events: list[CalendarEvent] = field(default_factory=list)

    @property
    def visible_events(self) -> list[CalendarEvent]:
        return self.events[:MAX_EVENTS_PER_CELL]

    @property
    def overflow_count(self) -> int:
        return max(len(self.events) - MAX_EVENTS_PER_CELL, 0)
