"""AI schedule assistant endpoint."""

import asyncio

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import get_assistant_gate, get_store, require_admin
from api.models.requests import AssistantQuery
from api.models.responses import AssistantResponse, ErrorCodes
from core.config import GEMINI_API_KEY, GEMINI_MODEL
from core.session import Session
from services.assistant import (
    STATUS_OK,
    AssistantBusyError,
    AssistantGate,
    build_snapshot,
    query_schedule_assistant,
)
from services.store import FacilityStore

router = APIRouter(prefix="/v1/assistant")


@router.post("/query", response_model=AssistantResponse)
async def query_assistant(
    request: Request,
    body: AssistantQuery,
    store: FacilityStore = Depends(get_store),
    gate: AssistantGate = Depends(get_assistant_gate),
    session: Session = Depends(require_admin),
):
    """
    Ask the AI assistant about the schedule.

    One query per session at a time; a second one while the first is
    pending gets 409. An unavailable or failing assistant still returns 200
    with a fixed message.
    """
    # Snapshot on the event loop so the worker thread never sees the live collection
    events = store.list_events()
    request.state.request_log.result_count = len(build_snapshot(events))

    try:
        with gate.hold(session.token):
            reply = await asyncio.to_thread(
                query_schedule_assistant, events, body.query, GEMINI_API_KEY, GEMINI_MODEL
            )
    except AssistantBusyError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "error": "An assistant query is already in progress",
                "code": ErrorCodes.ASSISTANT_BUSY,
                "details": ["Wait for the current answer before asking again"],
            },
        )

    if reply.status != STATUS_OK:
        request.state.request_log.warn(f"assistant {reply.status}: {reply.error or reply.text}")

    return AssistantResponse(answer=reply.text, status=reply.status)
