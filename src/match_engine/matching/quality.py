"""Match quality scorer — grades planned vs. actual aggregate metrics.

The workout's primary objective (distance or duration) carries 70% of the
grade; the other dimension carries 30% at half the sensitivity, so it
only drags the score down for wildly divergent sessions.
"""

from __future__ import annotations

from match_engine.config import DEFAULT_CONFIG, MatchingConfig
from match_engine.math.rounding import round_half_up, round_int
from match_engine.models.activity import RecordedActivity
from match_engine.models.enums import (
    MATCH_CATEGORY_THRESHOLDS,
    MatchCategory,
    ObjectiveType,
)
from match_engine.models.results import MatchQualityResult, PlannedMetrics


def percent_delta(actual: float, planned: float) -> float:
    """Signed percentage deviation of actual from planned (0 if planned is 0)."""
    if planned <= 0:
        return 0.0
    return (actual - planned) / planned * 100.0


def score_match_quality(
    planned: PlannedMetrics,
    activity: RecordedActivity,
    objective_type: ObjectiveType,
    config: MatchingConfig = DEFAULT_CONFIG,
) -> MatchQualityResult:
    """Score how faithfully an activity executed the planned totals.

    objective_match = max(0, 100 - |primary Δ%|)
    secondary_match = max(0, 100 - |secondary Δ%| × sensitivity)
    overall = round(0.7 × objective_match + 0.3 × secondary_match)

    Args:
        planned: Planned totals from :func:`calculate_planned_metrics`.
        activity: The resolved activity.
        objective_type: Primary goal of the workout.
        config: Weights and sensitivity.

    Returns:
        MatchQualityResult with rounded deltas and scores.
    """
    actual_distance = activity.total_distance_m or 0.0
    actual_duration = activity.total_duration_s or 0.0

    distance_delta = percent_delta(actual_distance, planned.planned_distance_m)
    duration_delta = percent_delta(actual_duration, planned.planned_duration_s)

    if objective_type == ObjectiveType.DISTANCE:
        primary_delta, secondary_delta = distance_delta, duration_delta
    else:
        primary_delta, secondary_delta = duration_delta, distance_delta

    objective_match = max(0.0, 100.0 - abs(primary_delta))
    secondary_match = max(0.0, 100.0 - abs(secondary_delta) * config.secondary_sensitivity)
    overall = (
        objective_match * config.objective_weight
        + secondary_match * config.secondary_weight
    )

    return MatchQualityResult(
        overall_score=round_int(overall),
        objective_type=objective_type,
        objective_match_score=round_int(objective_match),
        distance_pct_delta=round_half_up(distance_delta, 1),
        duration_pct_delta=round_half_up(duration_delta, 1),
        planned_distance_m=round_int(planned.planned_distance_m),
        planned_duration_s=round_int(planned.planned_duration_s),
        actual_distance_m=round_int(actual_distance),
        actual_duration_s=round_int(actual_duration),
    )


def match_category(score: float) -> MatchCategory:
    """Grade an overall score: excellent ≥85, good ≥70, fair ≥50, else low."""
    for category, threshold in MATCH_CATEGORY_THRESHOLDS.items():
        if score >= threshold:
            return category
    return MatchCategory.LOW
