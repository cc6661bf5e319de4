"""Calendar event endpoints."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies import (
    get_filters,
    get_store,
    not_found,
    require_admin,
    require_confirmation,
    validation_failed,
)
from api.models.requests import EventCreate, EventUpdate
from api.models.responses import EventResponse
from core.session import Session
from models.events import FilterState
from services.filters import apply_filters
from services.store import FacilityStore

router = APIRouter(prefix="/v1/events")


@router.get("", response_model=list[EventResponse])
async def list_events(
    request: Request,
    filters: FilterState = Depends(get_filters),
    store: FacilityStore = Depends(get_store),
):
    """All visible events in collection order."""
    events = apply_filters(store.list_events(), filters)
    request.state.request_log.result_count = len(events)
    return [EventResponse.model_validate(e) for e in events]


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: str, store: FacilityStore = Depends(get_store)):
    try:
        return EventResponse.model_validate(store.get_event(event_id))
    except KeyError:
        raise not_found("Event", event_id)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    request: Request,
    body: EventCreate,
    store: FacilityStore = Depends(get_store),
    _admin: Session = Depends(require_admin),
):
    """Add an event directly to the calendar."""
    try:
        event = store.create_event(body.model_dump())
    except ValueError as e:
        raise validation_failed(e, "Event validation failed")
    request.state.request_log.resource_id = event.id
    return EventResponse.model_validate(event)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    request: Request,
    event_id: str,
    body: EventUpdate,
    store: FacilityStore = Depends(get_store),
    _admin: Session = Depends(require_admin),
):
    """Edit an event. Only fields present in the body are changed."""
    request.state.request_log.resource_id = event_id
    try:
        event = store.update_event(event_id, body.model_dump(exclude_unset=True))
    except KeyError:
        raise not_found("Event", event_id)
    except ValueError as e:
        raise validation_failed(e, "Event validation failed")
    return EventResponse.model_validate(event)


@router.delete("/{event_id}", response_model=EventResponse)
async def delete_event(
    request: Request,
    event_id: str,
    confirm: bool = False,
    store: FacilityStore = Depends(get_store),
    _admin: Session = Depends(require_admin),
):
    """Delete an event. Requires confirm=true; without it nothing changes."""
    request.state.request_log.resource_id = event_id
    require_confirmation(confirm, "delete this event")
    try:
        event = store.delete_event(event_id)
    except KeyError:
        raise not_found("Event", event_id)
    return EventResponse.model_validate(event)
