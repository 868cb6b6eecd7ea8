"""
Strava integration module.

Usage:
    from app.features.strava import StravaOAuth, StravaClient
    from app.features.strava.sync import ActivitySynchronizer

Components:
- StravaOAuth: Code exchange for a bearer token (session creation)
- StravaClient: Paginated activity list
- StravaActivityRepository: Per-athlete activity store
- ActivitySynchronizer: Cache-or-sync orchestration

Models:
- StravaActivity: Stored run summary
- Activity: In-memory value type
"""

from .models import StravaActivity
from .activity import Activity, parse_strava_datetime
from .oauth import (
    StravaOAuth,
    StravaOAuthError,
    athlete_identity,
)
from .client import (
    StravaClient,
    StravaError,
    StravaAPIError,
    StravaAuthError,
    StravaRateLimitError,
    StravaTimeoutError,
    StravaNetworkError,
    StravaRateLimiter,
    rate_limiter,
)
from .repository import (
    StravaActivityRepository,
    ActivityStoreError,
)

__all__ = [
    # Models
    "StravaActivity",
    "Activity",
    "parse_strava_datetime",
    # OAuth
    "StravaOAuth",
    "StravaOAuthError",
    "athlete_identity",
    # Client
    "StravaClient",
    "StravaError",
    "StravaAPIError",
    "StravaAuthError",
    "StravaRateLimitError",
    "StravaTimeoutError",
    "StravaNetworkError",
    "StravaRateLimiter",
    "rate_limiter",
    # Repositories
    "StravaActivityRepository",
    "ActivityStoreError",
]
