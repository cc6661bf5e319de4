"""
In-memory event collection and guest request lifecycle.

FacilityStore is the single owner of both collections. Requests move
pending -> approved (becoming a calendar event) or pending -> rejected
(discarded). Resolved requests leave the pending collection and no
decision history is kept.
"""

from dataclasses import replace
from datetime import datetime, time

from core.config import APPROVED_EVENT_HOUR
from core.ids import IdGenerator, UuidIdGenerator
from core.validation import raise_if_errors, validate_event_fields, validate_request_fields
from models.events import CalendarEvent, Category, FacilityRequest, RequestStatus
from services.schedule import generate_seed_events

EDITABLE_EVENT_FIELDS = {"title", "start", "end", "category", "floor", "room", "description"}


class FacilityStore:
    def __init__(
        self,
        events: list[CalendarEvent] | None = None,
        id_generator: IdGenerator | None = None,
        approved_event_hour: int = APPROVED_EVENT_HOUR,
    ):
        self.id_generator = id_generator or UuidIdGenerator()
        self.approved_event_hour = approved_event_hour
        self._events: list[CalendarEvent] = list(events or [])
        self._pending: list[FacilityRequest] = []

    @classmethod
    def seeded(cls, year: int, id_generator: IdGenerator | None = None, **kwargs) -> "FacilityStore":
        """Create a store holding the generated schedule for year."""
        id_generator = id_generator or UuidIdGenerator()
        return cls(generate_seed_events(year, id_generator), id_generator, **kwargs)

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def list_events(self) -> list[CalendarEvent]:
        return list(self._events)

    def get_event(self, event_id: str) -> CalendarEvent:
        for event in self._events:
            if event.id == event_id:
                return event
        raise KeyError(event_id)

    def create_event(self, data: dict) -> CalendarEvent:
        """Add an event directly (admin path). Raises ValueError on invalid fields."""
        event = CalendarEvent(
            id=self.id_generator.new_id(),
            title=data["title"],
            start=data["start"],
            end=data["end"],
            category=Category(data["category"]),
            floor=data["floor"],
            room=data["room"],
            description=data.get("description"),
        )
        raise_if_errors(
            validate_event_fields(
                event.title, event.start, event.end, event.category, event.floor, event.room
            )
        )
        self._events.append(event)
        return event

    def update_event(self, event_id: str, changes: dict) -> CalendarEvent:
        """
        Apply field changes to an event.

        The event is left untouched if the result would be invalid.
        """
        current = self.get_event(event_id)
        # Only description may be cleared
        changes = {k: v for k, v in changes.items() if v is not None or k == "description"}
        unknown = set(changes) - EDITABLE_EVENT_FIELDS
        if unknown:
            raise ValueError("\n".join(f"Field '{name}' cannot be edited" for name in sorted(unknown)))

        updated = replace(current, **changes)
        updated.category = Category(updated.category)
        raise_if_errors(
            validate_event_fields(
                updated.title, updated.start, updated.end, updated.category, updated.floor, updated.room
            )
        )
        self._events[self._events.index(current)] = updated
        return updated

    def delete_event(self, event_id: str) -> CalendarEvent:
        event = self.get_event(event_id)
        self._events.remove(event)
        return event

    # -------------------------------------------------------------------------
    # Requests
    # -------------------------------------------------------------------------

    def pending_requests(self) -> list[FacilityRequest]:
        """Pending requests, most recent first."""
        return list(self._pending)

    def get_request(self, request_id: str) -> FacilityRequest:
        for request in self._pending:
            if request.id == request_id:
                return request
        raise KeyError(request_id)

    def submit_request(self, data: dict) -> FacilityRequest:
        """Create a pending request at the front of the inbox."""
        raise_if_errors(
            validate_request_fields(data["title"], data["category"], data["floor"], data["room"])
        )
        request = FacilityRequest(
            id=self.id_generator.new_id(),
            title=data["title"],
            date=data["date"],
            category=Category(data["category"]),
            floor=data["floor"],
            room=data["room"],
            description=data.get("description") or "",
            submitted_by=data.get("submitted_by"),
        )
        self._pending.insert(0, request)
        return request

    def approve_request(self, request_id: str) -> CalendarEvent:
        """Remove the request from pending and add exactly one event with the same id."""
        request = self.get_request(request_id)
        start = datetime.combine(request.date, time(hour=self.approved_event_hour))
        event = CalendarEvent(
            id=request.id,
            title=request.title,
            start=start,
            end=start,
            category=request.category,
            floor=request.floor,
            room=request.room,
            description=request.description,
        )
        self._pending.remove(request)
        request.status = RequestStatus.APPROVED
        self._events.append(event)
        return event

    def reject_request(self, request_id: str) -> FacilityRequest:
        """Remove the request from pending without producing an event."""
        request = self.get_request(request_id)
        self._pending.remove(request)
        request.status = RequestStatus.REJECTED
        return request
