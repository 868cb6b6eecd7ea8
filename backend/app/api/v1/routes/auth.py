"""
Strava authorization and session routes.

Endpoints:
- GET    /auth/strava/url       - Authorization URL for the Strava consent page
- POST   /auth/strava/exchange  - Exchange the code, start a session
- DELETE /session               - Logout (drop the credential)
"""

import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from app.api.deps import SESSION_HEADER, get_session_store, get_strava_oauth
from app.config import settings
from app.features.session import SessionStore
from app.features.strava import StravaOAuth, StravaOAuthError, athlete_identity
from app.features.strava.schemas import (
    AuthorizationUrlResponse,
    CodeExchangeRequest,
    SessionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/auth/strava/url", response_model=AuthorizationUrlResponse)
async def strava_authorization_url(
    state: Optional[str] = Query(default=None, description="CSRF state to echo back"),
    oauth: StravaOAuth = Depends(get_strava_oauth),
):
    """Build the Strava consent URL."""
    if not settings.strava_client_id:
        raise HTTPException(
            status_code=503,
            detail="Strava integration not configured"
        )

    url = oauth.get_authorization_url(
        redirect_uri=settings.strava_redirect_uri,
        state=state or secrets.token_urlsafe(16),
    )
    return AuthorizationUrlResponse(url=url)


@router.post("/auth/strava/exchange", response_model=SessionResponse)
async def strava_exchange(
    request: CodeExchangeRequest,
    oauth: StravaOAuth = Depends(get_strava_oauth),
    sessions: SessionStore = Depends(get_session_store),
):
    """
    Exchange an authorization code and start a session.

    The returned session_id goes in the X-Session-Id header of later calls.
    """
    try:
        token_data = await oauth.exchange_code(request.code)
        athlete_id, athlete_name = athlete_identity(token_data)
    except StravaOAuthError as e:
        logger.warning(f"Strava code exchange rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    session = sessions.create(
        athlete_id,
        athlete_name,
        token_data["access_token"],
        expires_at=token_data.get("expires_at"),
    )
    logger.info(f"Strava connected: athlete_id={athlete_id}")

    return SessionResponse(
        session_id=session.session_id,
        athlete_id=session.athlete_id,
        athlete_name=session.athlete_name,
    )


@router.delete("/session")
async def logout(
    x_session_id: Optional[str] = Header(default=None, alias=SESSION_HEADER),
    sessions: SessionStore = Depends(get_session_store),
):
    """End the caller's session."""
    ended = sessions.end(x_session_id) if x_session_id else False
    return {"ended": ended}
