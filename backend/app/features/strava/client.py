"""
Strava API client.

Read-only access to the athlete activity list.
Handles rate limiting, timeouts, and error classification.

Strava API Limits:
- 200 requests per 15 minutes
- 2,000 requests per day
- per_page is capped at 200 on /athlete/activities
"""

import asyncio
import logging
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Optional

import httpx

from app.config import settings, STRAVA_MAX_PAGE_SIZE

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================

class StravaError(Exception):
    """Base Strava error."""
    pass


class StravaAPIError(StravaError):
    """Strava API error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class StravaAuthError(StravaError):
    """Authentication/authorization error (expired or revoked token)."""
    pass


class StravaRateLimitError(StravaError):
    """Rate limit exceeded."""
    pass


class StravaTimeoutError(StravaError):
    """Request did not complete within the configured timeout."""
    pass


class StravaNetworkError(StravaError):
    """Strava unreachable (DNS, connection reset, TLS...)."""
    pass


# =============================================================================
# Rate Limiter
# =============================================================================

class StravaRateLimiter:
    """
    In-memory rate limiter for Strava API.

    Limits:
    - 200 requests per 15 minutes (short-term)
    - 2000 requests per day (daily)
    """

    def __init__(
        self,
        short_limit: int = 200,
        short_window_minutes: int = 15,
        daily_limit: int = 2000
    ):
        self.short_limit = short_limit
        self.short_window = timedelta(minutes=short_window_minutes)
        self.daily_limit = daily_limit

        self.short_counts: dict[str, list[datetime]] = defaultdict(list)
        self.daily_counts: dict[str, int] = defaultdict(int)
        self.daily_date = datetime.now().date()
        self._lock = asyncio.Lock()

    async def check_and_increment(self, key: str = "global") -> bool:
        """
        Check if request is allowed and increment counters.

        Returns True if request is allowed, False if rate limited.
        """
        async with self._lock:
            now = datetime.now()

            # Reset daily counter if new day
            if now.date() != self.daily_date:
                self.daily_counts.clear()
                self.daily_date = now.date()
                logger.info("Daily rate limit counters reset")

            # Drop timestamps outside the short window
            cutoff = now - self.short_window
            self.short_counts[key] = [
                ts for ts in self.short_counts[key]
                if ts > cutoff
            ]

            short_count = len(self.short_counts[key])
            daily_count = self.daily_counts[key]

            if short_count >= self.short_limit:
                logger.warning(
                    f"Strava rate limit hit: {short_count}/{self.short_limit} "
                    f"requests in 15 min for {key}"
                )
                return False

            if daily_count >= self.daily_limit:
                logger.warning(
                    f"Strava daily limit hit: {daily_count}/{self.daily_limit} "
                    f"for {key}"
                )
                return False

            self.short_counts[key].append(now)
            self.daily_counts[key] += 1

            return True


# Global rate limiter instance
rate_limiter = StravaRateLimiter()


# =============================================================================
# Strava Client
# =============================================================================

class StravaClient:
    """
    Async client for the Strava activities API.

    Usage:
        client = StravaClient()
        page = await client.get_activities(token, page=1, per_page=200)

    Tests pass an httpx transport (e.g. httpx.MockTransport) and their own
    limiter.
    """

    API_URL = "https://www.strava.com/api/v3"

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        limiter: Optional[StravaRateLimiter] = None
    ):
        self.timeout = timeout if timeout is not None else settings.strava_request_timeout_seconds
        self.transport = transport
        self.limiter = limiter or rate_limiter

    async def _api_request(
        self,
        method: str,
        endpoint: str,
        access_token: str,
        params: Optional[dict] = None,
        rate_limit_key: str = "global"
    ):
        """
        Make an authenticated API request with rate limiting.

        Raises:
            StravaRateLimitError: If rate limit exceeded
            StravaAuthError: If authentication fails
            StravaTimeoutError: If the call exceeds the timeout
            StravaNetworkError: If Strava cannot be reached
            StravaAPIError: If API returns error
        """
        if not await self.limiter.check_and_increment(rate_limit_key):
            raise StravaRateLimitError("Rate limit exceeded")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self.transport
            ) as client:
                response = await client.request(
                    method=method,
                    url=f"{self.API_URL}{endpoint}",
                    headers={"Authorization": f"Bearer {access_token}"},
                    params=params
                )
        except httpx.TimeoutException as e:
            raise StravaTimeoutError(f"Strava request timed out after {self.timeout}s") from e
        except httpx.TransportError as e:
            raise StravaNetworkError(f"Strava unreachable: {e}") from e

        # Log rate limit headers from Strava
        if "X-RateLimit-Limit" in response.headers:
            logger.debug(
                f"Strava rate limit: {response.headers.get('X-RateLimit-Usage')} "
                f"/ {response.headers.get('X-RateLimit-Limit')}"
            )

        if response.status_code in (401, 403):
            raise StravaAuthError("Invalid, expired or revoked token")
        elif response.status_code == 429:
            raise StravaRateLimitError("Strava rate limit exceeded")
        elif response.status_code != 200:
            raise StravaAPIError(
                f"API error: {response.status_code} - {response.text}",
                status_code=response.status_code
            )

        return response.json()

    async def get_activities(
        self,
        access_token: str,
        page: int = 1,
        per_page: int = STRAVA_MAX_PAGE_SIZE,
        rate_limit_key: str = "global"
    ) -> list[dict]:
        """
        Get one page of athlete activities.

        Args:
            access_token: Valid access token
            page: Page number (1-based)
            per_page: Results per page (max 200)
            rate_limit_key: Limiter bucket, usually the athlete ID

        Returns:
            Activity summaries in Strava's order. Strava gives no explicit
            "has more" flag; a page shorter than per_page is the last one.
        """
        params = {"page": page, "per_page": min(per_page, STRAVA_MAX_PAGE_SIZE)}

        data = await self._api_request(
            "GET",
            "/athlete/activities",
            access_token,
            params,
            rate_limit_key=rate_limit_key
        )
        if not isinstance(data, list):
            raise StravaAPIError("Unexpected activities payload: expected a list")
        return data
