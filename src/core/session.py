"""
Viewer/admin sessions gated by a single shared passphrase.
"""

import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone

from models.events import Role


@dataclass
class Session:
    """Explicit session context passed to the components that need the role."""

    token: str | None = None
    role: Role = Role.VIEWER
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class SessionRegistry:
    """In-memory admin sessions keyed by token."""

    def __init__(self, passphrase: str, max_sessions: int = 100):
        self.passphrase = passphrase
        self.max_sessions = max_sessions
        self._sessions: dict[str, Session] = {}

    @property
    def configured(self) -> bool:
        return bool(self.passphrase)

    def login(self, passphrase: str) -> Session | None:
        """Return a new admin session, or None if the passphrase is wrong."""
        if not self.passphrase:
            return None
        # Constant-time comparison to prevent timing attacks
        if not secrets.compare_digest(passphrase.encode(), self.passphrase.encode()):
            return None
        session = Session(token=secrets.token_urlsafe(32), role=Role.ADMIN)
        self._sessions[session.token] = session
        # Dicts keep insertion order, so the first key is the oldest login
        while len(self._sessions) > self.max_sessions:
            del self._sessions[next(iter(self._sessions))]
        return session

    def logout(self, token: str) -> bool:
        return self._sessions.pop(token, None) is not None

    def resolve(self, token: str | None) -> Session:
        """Look up a session by token; unknown or missing tokens are anonymous viewers."""
        if token and token in self._sessions:
            return self._sessions[token]
        return Session()

    def __len__(self) -> int:
        return len(self._sessions)
