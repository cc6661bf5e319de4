"""FastAPI dependencies for sessions and shared resources."""

from fastapi import Depends, Header, HTTPException, Query, Request, status

from api.models.responses import ErrorCodes
from core.session import Session, SessionRegistry
from models.events import FilterState
from services.assistant import AssistantGate
from services.store import FacilityStore


def get_store(request: Request) -> FacilityStore:
    """The in-memory store seeded at startup."""
    return request.app.state.store


def get_sessions(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_assistant_gate(request: Request) -> AssistantGate:
    return request.app.state.assistant_gate


async def get_session(
    request: Request,
    x_session_token: str | None = Header(default=None, alias="X-Session-Token"),
    sessions: SessionRegistry = Depends(get_sessions),
) -> Session:
    """Resolve the caller's session; callers without a valid token are viewers."""
    session = sessions.resolve(x_session_token)
    request_log = getattr(request.state, "request_log", None)
    if request_log is not None:
        request_log.role = session.role.value
    return session


async def require_admin(session: Session = Depends(get_session)) -> Session:
    """
    Require an admin session.

    Raises:
        HTTPException: 401 if the session is not an admin session
    """
    if not session.is_admin:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "Admin session required",
                "code": ErrorCodes.UNAUTHORIZED,
                "details": ["Log in with the staff passphrase and send X-Session-Token"],
            },
        )
    return session


def require_confirmation(confirm: bool, action: str) -> None:
    """
    Gate destructive actions behind an explicit confirm=true.

    Raises:
        HTTPException: 409 if the action was not confirmed
    """
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "error": f"Confirmation required to {action}",
                "code": ErrorCodes.CONFIRMATION_REQUIRED,
                "details": ["Repeat the request with confirm=true"],
            },
        )


def not_found(kind: str, resource_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={
            "error": f"{kind} not found",
            "code": ErrorCodes.NOT_FOUND,
            "details": [f"No {kind.lower()} with id '{resource_id}'"],
        },
    )


def validation_failed(error: ValueError, message: str) -> HTTPException:
    """Map a multi-line ValueError to a 422 with one detail per line."""
    details = [line.strip() for line in str(error).split("\n") if line.strip()]
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={
            "error": message,
            "code": ErrorCodes.VALIDATION_ERROR,
            "details": details,
        },
    )


def get_filters(
    show_maintenance: bool = True,
    show_cleaning: bool = True,
    show_events: bool = True,
    floor: int | None = Query(default=None, ge=1, le=6),
) -> FilterState:
    """Calendar filters from query parameters; omitted floor means all floors."""
    return FilterState(
        show_maintenance=show_maintenance,
        show_cleaning=show_cleaning,
        show_events=show_events,
        floor=floor,
    )
