"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_store
from api.models.responses import HealthResponse
from core.config import API_VERSION, GEMINI_API_KEY
from services.store import FacilityStore

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(store: FacilityStore = Depends(get_store)):
    """
    Health check endpoint for monitoring.

    Returns 200 if healthy, 503 if the schedule was not seeded.
    """
    event_count = len(store.list_events())
    timestamp = datetime.now(timezone.utc).isoformat()
    response = HealthResponse(
        status="healthy",
        version=API_VERSION,
        event_count=event_count,
        pending_requests=len(store.pending_requests()),
        assistant_configured=bool(GEMINI_API_KEY),
        timestamp=timestamp,
    )

    if event_count:
        return response

    response.status = "unhealthy"
    response.error = "Schedule is empty"
    return JSONResponse(status_code=503, content=response.model_dump())
