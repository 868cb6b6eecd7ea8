"""
Strava OAuth flow.

Handles:
- Authorization URL generation
- Code exchange for a bearer token plus athlete identity

Only the short-lived access token is used; it lives in the athlete's
session and is never persisted.
"""

import logging
from typing import Optional
from urllib.parse import urlencode

import httpx

from app.config import settings

logger = logging.getLogger(__name__)


class StravaOAuthError(Exception):
    """OAuth-related error."""
    pass


class StravaOAuth:
    """
    Strava OAuth handler.

    Usage:
        oauth = StravaOAuth()
        auth_url = oauth.get_authorization_url(
            redirect_uri="https://example.com/callback",
            state="csrf-token"
        )
        tokens = await oauth.exchange_code(code)
        athlete_id, athlete_name = athlete_identity(tokens)
    """

    AUTHORIZE_URL = "https://www.strava.com/oauth/authorize"
    TOKEN_URL = "https://www.strava.com/oauth/token"

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.client_id = settings.strava_client_id
        self.client_secret = settings.strava_client_secret
        self.timeout = settings.strava_request_timeout_seconds
        self.transport = transport

    def get_authorization_url(
        self,
        redirect_uri: str,
        state: Optional[str] = None,
        scope: str = "read,activity:read_all"
    ) -> str:
        """
        Generate Strava OAuth authorization URL.

        Args:
            redirect_uri: URL to redirect after authorization
            state: Optional state parameter for CSRF protection
            scope: OAuth scope (activity:read_all includes private runs)

        Returns:
            Authorization URL string
        """
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": scope,
            "approval_prompt": "force"
        }
        if state:
            params["state"] = state

        return f"{self.AUTHORIZE_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> dict:
        """
        Exchange authorization code for tokens.

        Args:
            code: Authorization code from Strava callback

        Returns:
            {
                "access_token": "...",
                "expires_at": 1234567890,
                "athlete": {"id": 123, "firstname": "...", ...}
            }

        Raises:
            StravaOAuthError: If token exchange fails
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.TOKEN_URL,
                    data={
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                        "code": code,
                        "grant_type": "authorization_code"
                    }
                )
        except httpx.HTTPError as e:
            logger.error(f"Strava token exchange failed: {e}")
            raise StravaOAuthError("Token exchange failed: Strava unreachable") from e

        if response.status_code != 200:
            logger.error(f"Strava token exchange failed: {response.status_code}")
            raise StravaOAuthError(
                f"Token exchange failed: {response.status_code}"
            )

        token_data = response.json()
        if "access_token" not in token_data or "athlete" not in token_data:
            raise StravaOAuthError("Token exchange failed: incomplete response")
        return token_data


def athlete_identity(token_data: dict) -> tuple[str, str]:
    """
    Extract (athlete_id, athlete_name) from a token exchange response.

    Name is "firstname lastname", trimmed.
    """
    athlete = token_data.get("athlete") or {}
    if athlete.get("id") is None:
        raise StravaOAuthError("Token response has no athlete id")
    name = f"{athlete.get('firstname', '')} {athlete.get('lastname', '')}".strip()
    return str(athlete["id"]), name
