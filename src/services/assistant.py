"""
AI-assisted schedule questions via Gemini.

The assistant sees a bounded, read-only snapshot of the event collection.
Its reply is treated as opaque text; missing credentials and failed calls
come back as fixed messages rather than errors.
"""

import json
from contextlib import contextmanager
from dataclasses import dataclass

import google.generativeai as genai

from core.config import (
    AI_ERROR_MESSAGE,
    AI_SNAPSHOT_LIMIT,
    AI_UNAVAILABLE_MESSAGE,
    FACILITY_NAME,
    GEMINI_MODEL,
)
from models.events import CalendarEvent

STATUS_OK = "ok"
STATUS_UNAVAILABLE = "unavailable"
STATUS_ERROR = "error"


@dataclass
class AssistantReply:
    text: str
    status: str
    error: str | None = None  # Exception text for the request log, never shown to users


class AssistantBusyError(RuntimeError):
    """A query is already in flight for this session."""


class AssistantGate:
    """Allows at most one in-flight assistant query per session key."""

    def __init__(self):
        self._in_flight: set[str] = set()

    def is_busy(self, key: str) -> bool:
        return key in self._in_flight

    @contextmanager
    def hold(self, key: str):
        if key in self._in_flight:
            raise AssistantBusyError(key)
        self._in_flight.add(key)
        try:
            yield
        finally:
            self._in_flight.discard(key)


def build_snapshot(events: list[CalendarEvent], limit: int = AI_SNAPSHOT_LIMIT) -> list[dict]:
    """Reduce the first `limit` events to title/date/category/location."""
    return [
        {
            "title": event.title,
            "date": event.start.date().isoformat(),
            "category": getattr(event.category, "value", event.category),
            "location": f"Floor {event.floor} - {event.room}",
        }
        for event in events[:limit]
    ]


def build_prompt(snapshot: list[dict], query: str) -> str:
    return (
        f"You are the scheduling assistant for {FACILITY_NAME}, a six-floor building.\n"
        "Answer the staff member's question using only the schedule below. "
        "If the schedule does not contain the answer, say so.\n\n"
        f"Schedule ({len(snapshot)} entries):\n"
        f"{json.dumps(snapshot, indent=2)}\n\n"
        f"Question: {query}"
    )


def query_schedule_assistant(
    events: list[CalendarEvent],
    query: str,
    api_key: str,
    model_name: str = GEMINI_MODEL,
) -> AssistantReply:
    """
    Ask Gemini a question about the schedule.

    Single attempt, no retry. Blocking; run it in a worker thread from async code.
    """
    if not api_key:
        return AssistantReply(text=AI_UNAVAILABLE_MESSAGE, status=STATUS_UNAVAILABLE)

    prompt = build_prompt(build_snapshot(events), query)

    try:
        genai.configure(api_key=api_key)
        model = genai.GenerativeModel(model_name)
        response = model.generate_content(prompt)
        text = response.text
    except Exception as e:
        return AssistantReply(text=AI_ERROR_MESSAGE, status=STATUS_ERROR, error=str(e))

    return AssistantReply(text=text, status=STATUS_OK)
