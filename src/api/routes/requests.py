"""Guest request submission and admin approval endpoints."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies import (
    get_store,
    not_found,
    require_admin,
    require_confirmation,
    validation_failed,
)
from api.models.requests import RequestSubmission
from api.models.responses import EventResponse, RequestResponse
from core.session import Session
from services.store import FacilityStore

router = APIRouter(prefix="/v1/requests")


@router.post("", response_model=RequestResponse, status_code=status.HTTP_201_CREATED)
async def submit_request(
    request: Request,
    body: RequestSubmission,
    store: FacilityStore = Depends(get_store),
):
    """Submit a request for admin review. Open to guests."""
    try:
        facility_request = store.submit_request(body.model_dump())
    except ValueError as e:
        raise validation_failed(e, "Request validation failed")
    request.state.request_log.resource_id = facility_request.id
    return RequestResponse.model_validate(facility_request)


@router.get("", response_model=list[RequestResponse])
async def list_pending_requests(
    request: Request,
    store: FacilityStore = Depends(get_store),
    _admin: Session = Depends(require_admin),
):
    """Pending requests, most recent first."""
    pending = store.pending_requests()
    request.state.request_log.result_count = len(pending)
    return [RequestResponse.model_validate(r) for r in pending]


@router.post("/{request_id}/approve", response_model=EventResponse)
async def approve_request(
    request: Request,
    request_id: str,
    store: FacilityStore = Depends(get_store),
    _admin: Session = Depends(require_admin),
):
    """Approve a pending request; returns the calendar event it became."""
    request.state.request_log.resource_id = request_id
    try:
        event = store.approve_request(request_id)
    except KeyError:
        raise not_found("Request", request_id)
    return EventResponse.model_validate(event)


@router.post("/{request_id}/reject", response_model=RequestResponse)
async def reject_request(
    request: Request,
    request_id: str,
    confirm: bool = False,
    store: FacilityStore = Depends(get_store),
    _admin: Session = Depends(require_admin),
):
    """Reject a pending request. Requires confirm=true; the request is discarded."""
    request.state.request_log.resource_id = request_id
    require_confirmation(confirm, "reject this request")
    try:
        facility_request = store.reject_request(request_id)
    except KeyError:
        raise not_found("Request", request_id)
    return RequestResponse.model_validate(facility_request)
