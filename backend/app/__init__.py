"""Run comparison backend: Strava activity sync and distance-banded analysis."""
