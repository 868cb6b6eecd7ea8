"""
Formatting utilities for display.

Used by API responses next to the raw numeric values.
"""


def format_duration(seconds: int | float | None) -> str:
    """
    Format a duration as 'H:MM:SS' or 'M:SS'.

    553   -> "9:13"
    3125  -> "52:05"
    3760  -> "1:02:40"
    """
    if seconds is None or seconds < 0:
        return "—"

    total = int(round(seconds))
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_pace(pace_sec_per_km: float | None) -> str:
    """
    Format pace as 'M:SS /km'.

    Args:
        pace_sec_per_km: Pace in seconds per km

    Returns:
        Formatted string (e.g., '5:30 /km')
    """
    if pace_sec_per_km is None:
        return "—"

    total = int(round(pace_sec_per_km))
    minutes, seconds = divmod(total, 60)
    return f"{minutes}:{seconds:02d} /km"
