"""
Strava sync configuration constants.

Contains all configuration values for sync behavior.
"""

from app.config import STRAVA_MAX_PAGE_SIZE
from app.shared.constants import SYNCED_ACTIVITY_TYPE


class SyncConfig:
    """Configuration for sync behavior."""

    # Activities requested per API call (Strava maximum)
    ACTIVITIES_PER_PAGE = STRAVA_MAX_PAGE_SIZE

    # First page of a full sync
    FIRST_PAGE = 1

    # Upper bound on pages per sync pass (100k activities at 200/page).
    # Reaching it stops the pass with a warning instead of looping forever
    # against a source that keeps returning full pages.
    MAX_PAGES = 500

    # Only this Strava type is stored and analyzed
    ACTIVITY_TYPE = SYNCED_ACTIVITY_TYPE
