"""Athlete session context (dataclass, no DB dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import time


@dataclass
class AthleteSession:
    """
    Credential and identity for one signed-in athlete.

    Created after a successful Strava code exchange. The bearer token lives
    only here; invalidate() drops it and the session can no longer sync.
    """

    session_id: str
    athlete_id: str
    athlete_name: str
    access_token: str | None
    expires_at: int | None = None  # unix timestamp from the token response
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_active(self) -> bool:
        return self.access_token is not None

    def is_expired(self, now: float | None = None) -> bool:
        """True once the bearer token has passed its expiry."""
        if self.expires_at is None:
            return False
        now = time.time() if now is None else now
        return self.expires_at <= now

    def invalidate(self) -> None:
        self.access_token = None

    def __repr__(self) -> str:
        # Never leak the token into logs
        return (
            f"<AthleteSession {self.session_id[:8]}… athlete={self.athlete_id} "
            f"active={self.is_active}>"
        )
