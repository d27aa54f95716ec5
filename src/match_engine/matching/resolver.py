"""Candidate activity resolver — picks the activity that executed a plan.

All functions are pure (no I/O); candidate activities are fetched by the
caller for the window it wants to search.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Sequence

import numpy as np

from match_engine.models.activity import RecordedActivity
from match_engine.models.enums import AUTO_MATCH_WINDOW_DAYS
from match_engine.models.results import PlannedMetrics

logger = logging.getLogger(__name__)


def candidates_in_window(
    activities: Sequence[RecordedActivity],
    scheduled_date: date,
    window_days: int = AUTO_MATCH_WINDOW_DAYS,
) -> list[RecordedActivity]:
    """Activities starting within ``scheduled_date ± window_days``.

    Calendar days are compared on the activity's own start date. Results
    are ordered by start time, oldest first; activities without a start
    time are dropped. Naive start times are ordered as if they were UTC,
    so exports mixing both forms sort without error.
    """
    first_day = scheduled_date - timedelta(days=window_days)
    last_day = scheduled_date + timedelta(days=window_days)
    in_window = [
        a for a in activities
        if a.start_time is not None and first_day <= a.start_time.date() <= last_day
    ]
    return sorted(in_window, key=_start_key)


def _start_key(activity: RecordedActivity) -> datetime:
    start = activity.start_time
    if start.tzinfo is None:
        return start.replace(tzinfo=timezone.utc)
    return start


def similarity_scores(
    activities: Sequence[RecordedActivity], planned: PlannedMetrics
) -> np.ndarray:
    """Relative distance + duration error of each activity (lower = closer).

    score = |Δdistance| / max(planned_distance, 1) + |Δduration| / max(planned_duration, 1)
    """
    distances = np.array([a.total_distance_m or 0.0 for a in activities], dtype=np.float64)
    durations = np.array([a.total_duration_s or 0.0 for a in activities], dtype=np.float64)
    distance_norm = max(planned.planned_distance_m, 1.0)
    duration_norm = max(planned.planned_duration_s, 1.0)
    return (
        np.abs(distances - planned.planned_distance_m) / distance_norm
        + np.abs(durations - planned.planned_duration_s) / duration_norm
    )


def resolve_activity(
    activities: Sequence[RecordedActivity],
    planned: PlannedMetrics,
    manual_activity_id: str | None = None,
) -> RecordedActivity | None:
    """Select the activity that best corresponds to a plan.

    Args:
        activities: Candidates, in the order they were captured.
        planned: Planned totals of the workout.
        manual_activity_id: Explicit choice from the caller. When given it
            is authoritative and the similarity heuristic is skipped.

    Returns:
        The chosen activity, or None when nothing matches. Ties go to the
        earliest candidate in input order.
    """
    if manual_activity_id is not None:
        for activity in activities:
            if activity.activity_id == manual_activity_id:
                return activity
        logger.info("Manual activity %s not among %d candidates", manual_activity_id, len(activities))
        return None

    if not activities:
        return None
    if len(activities) == 1:
        return activities[0]

    scores = similarity_scores(activities, planned)
    # argmin returns the first index on ties
    best = int(np.argmin(scores))
    logger.debug(
        "Resolved activity %d of %d (score %.3f)", best, len(activities), float(scores[best])
    )
    return activities[best]
