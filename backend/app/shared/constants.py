"""
Unified constants for activity types and distance comparison.

Single source of truth for Strava naming and analysis thresholds.
"""

# Strava activity type that enters the store and the analysis
SYNCED_ACTIVITY_TYPE: str = "Run"

METERS_PER_KM = 1000.0

# Custom preset tolerance: max(MIN_TOLERANCE_KM, target * TOLERANCE_RATIO)
MIN_TOLERANCE_KM = 0.5
TOLERANCE_RATIO = 0.1

# Band edges and distances are compared at this many decimal places (km),
# i.e. to the millimetre
BAND_PRECISION = 6

# Pace trend: compare the earliest N runs with the most recent N runs,
# only when at least MIN_RUNS_FOR_TREND runs matched
TREND_WINDOW = 3
MIN_RUNS_FOR_TREND = 6
