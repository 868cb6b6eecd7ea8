"""
In-memory session registry.

Holds AthleteSession objects for the lifetime of the process. Nothing
here is persisted: a restart means every athlete re-authorizes.

Sessions whose Strava token has expired are dropped on lookup, and all
expired sessions are swept whenever a new one is created, so sessions
abandoned without a logout do not accumulate.
"""

import logging
import secrets
import time
from typing import Optional

from .models import AthleteSession

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Registry of active athlete sessions keyed by an opaque session ID.

    Usage:
        session = session_store.create(athlete_id, name, access_token, expires_at)
        session = session_store.get(session_id)
        session_store.end(session_id)
    """

    def __init__(self):
        self._sessions: dict[str, AthleteSession] = {}

    def create(
        self,
        athlete_id: str,
        athlete_name: str,
        access_token: str,
        expires_at: Optional[int] = None
    ) -> AthleteSession:
        """Start a session after a successful credential exchange."""
        self.purge_expired()

        session = AthleteSession(
            session_id=secrets.token_urlsafe(32),
            athlete_id=str(athlete_id),
            athlete_name=athlete_name,
            access_token=access_token,
            expires_at=expires_at,
        )
        self._sessions[session.session_id] = session
        logger.info(f"Session created for athlete {session.athlete_id}")
        return session

    def get(self, session_id: str | None) -> AthleteSession | None:
        """Return the session if it exists, holds a credential and has not expired."""
        if not session_id:
            return None
        session = self._sessions.get(session_id)
        if session is None or not session.is_active:
            return None
        if session.is_expired():
            logger.info(f"Session expired for athlete {session.athlete_id}")
            self.end(session_id)
            return None
        return session

    def end(self, session_id: str) -> bool:
        """
        Tear a session down (logout, expiry or authorization failure).

        Returns True if a session was removed.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.invalidate()
        logger.info(f"Session ended for athlete {session.athlete_id}")
        return True

    def purge_expired(self, now: Optional[float] = None) -> int:
        """
        Drop every session whose token has expired.

        Returns:
            Number of sessions removed
        """
        now = time.time() if now is None else now
        expired = [sid for sid, s in self._sessions.items() if s.is_expired(now)]
        for session_id in expired:
            self.end(session_id)
        if expired:
            logger.info(f"Purged {len(expired)} expired sessions")
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)


# Global session registry
session_store = SessionStore()
