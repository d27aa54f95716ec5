"""Pure functions mapping activity-store dicts to RecordedActivity.

Accepts Strava-style payloads (``distance`` in m, ``moving_time`` /
``elapsed_time`` in s, ISO ``start_date``) as well as the store's own
``duration`` column. Every extractor handles missing or malformed fields
by returning a neutral value instead of raising.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional

from match_engine.exceptions import ActivityDataError
from match_engine.models.activity import Lap, RecordedActivity


def map_activity(raw: Mapping[str, Any]) -> RecordedActivity:
    """Map one activity payload to a RecordedActivity.

    Raises:
        ActivityDataError: ``raw`` is not a mapping.
    """
    if not isinstance(raw, Mapping):
        raise ActivityDataError(f"Activity payload must be an object, got {type(raw).__name__}")

    activity_id = raw.get("id")
    return RecordedActivity(
        total_distance_m=_to_float(raw.get("distance")) or 0.0,
        total_duration_s=_extract_duration(raw),
        start_time=_parse_datetime(raw.get("start_date") or raw.get("startDate")),
        laps=_extract_laps(raw.get("laps")),
        activity_id=str(activity_id) if activity_id is not None else None,
        title=str(raw.get("title") or raw.get("name") or ""),
    )


def map_activities(raw_list: Any) -> list[RecordedActivity]:
    """Map a list of activity payloads, skipping entries that are not objects."""
    if not isinstance(raw_list, list):
        return []
    return [map_activity(raw) for raw in raw_list if isinstance(raw, Mapping)]


# ---------------------------------------------------------------------------
# Internal extractors: each handles None input gracefully
# ---------------------------------------------------------------------------


def _extract_duration(raw: Mapping[str, Any]) -> float:
    """Stored ``duration`` first, then moving time, then elapsed time."""
    for key in ("duration", "moving_time", "elapsed_time"):
        value = _to_float(raw.get(key))
        if value:
            return value
    return 0.0


def _extract_laps(data: Any) -> tuple[Lap, ...]:
    if not isinstance(data, list):
        return ()
    laps: list[Lap] = []
    for entry in data:
        if not isinstance(entry, Mapping):
            continue
        laps.append(
            Lap(
                distance_m=_to_float(entry.get("distance")) or 0.0,
                elapsed_s=_to_float(entry.get("elapsed_time")),
                moving_s=_to_float(entry.get("moving_time")),
            )
        )
    return tuple(laps)


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO timestamp ("Z" suffix allowed); None when unparsable."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
