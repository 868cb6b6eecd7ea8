"""
Shared FastAPI dependencies.

Overridable in tests via app.dependency_overrides.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_async_db
from app.features.session import AthleteSession, SessionStore, session_store
from app.features.strava import StravaClient, StravaOAuth
from app.features.strava.sync import ActivitySynchronizer

SESSION_HEADER = "X-Session-Id"


def get_session_store() -> SessionStore:
    """Process-wide session registry."""
    return session_store


def get_strava_client() -> StravaClient:
    return StravaClient()


def get_strava_oauth() -> StravaOAuth:
    return StravaOAuth()


def get_current_session(
    x_session_id: Optional[str] = Header(default=None, alias=SESSION_HEADER),
    sessions: SessionStore = Depends(get_session_store),
) -> AthleteSession:
    """Resolve the caller's session or ask them to re-authorize."""
    session = sessions.get(x_session_id)
    if session is None:
        raise HTTPException(
            status_code=401,
            detail="Session expired or unknown. Connect with Strava again."
        )
    return session


def get_synchronizer(
    db: AsyncSession = Depends(get_async_db),
    client: StravaClient = Depends(get_strava_client),
    sessions: SessionStore = Depends(get_session_store),
) -> ActivitySynchronizer:
    return ActivitySynchronizer(db, client=client, sessions=sessions)
