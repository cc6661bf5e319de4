"""Staff login/logout endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_session, get_sessions, require_admin
from api.models.requests import LoginRequest
from api.models.responses import ErrorCodes, SessionResponse
from core.session import Session, SessionRegistry

router = APIRouter(prefix="/v1/session")


@router.get("", response_model=SessionResponse)
async def current_session(session: Session = Depends(get_session)):
    return SessionResponse(role=session.role.value)


@router.post("/login", response_model=SessionResponse)
async def login(body: LoginRequest, sessions: SessionRegistry = Depends(get_sessions)):
    """
    Exchange the shared staff passphrase for an admin session token.

    Raises:
        HTTPException: 500 if no passphrase is configured, 401 if it doesn't match
    """
    if not sessions.configured:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Admin passphrase not configured on server",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    session = sessions.login(body.passphrase)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "Invalid passphrase",
                "code": ErrorCodes.UNAUTHORIZED,
                "details": [],
            },
        )
    return SessionResponse(role=session.role.value, token=session.token)


@router.post("/logout", response_model=SessionResponse)
async def logout(
    session: Session = Depends(require_admin),
    sessions: SessionRegistry = Depends(get_sessions),
):
    sessions.logout(session.token)
    return SessionResponse(role="viewer")
