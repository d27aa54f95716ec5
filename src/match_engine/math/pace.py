"""Pace string parsing and formatting.

Paces are "minutes:seconds" per km as typed by coaches in the workout
builder, e.g. "4:30".
"""

from __future__ import annotations

from match_engine.models.enums import DEFAULT_PACE_S_PER_KM


def parse_pace(pace: object, default: int = DEFAULT_PACE_S_PER_KM) -> int:
    """Convert a "mm:ss" pace string to seconds.

    Malformed input (not a string, no colon, extra colons, non-numeric or
    empty parts) returns ``default`` instead of raising, so one bad pace
    never aborts a metrics computation.

    Args:
        pace: Pace string such as "4:30".
        default: Fallback in seconds (5:00/km unless configured).

    Returns:
        Total seconds, always >= 0 for well-formed input.
    """
    if not isinstance(pace, str) or not pace:
        return default
    parts = pace.strip().split(":")
    if len(parts) != 2:
        return default
    minutes, seconds = (part.strip() for part in parts)
    if not (minutes.isdigit() and seconds.isdigit()):
        return default
    return int(minutes) * 60 + int(seconds)


def format_pace(seconds_per_km: float) -> str:
    """Format seconds per km as "m:ss". Example: 270 → "4:30"."""
    total = max(0, int(round(seconds_per_km)))
    return f"{total // 60}:{total % 60:02d}"
