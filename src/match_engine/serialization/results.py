"""JSON serialization of match results for the assignment match endpoint.

Produces the camelCase shape the web client reads. All functions are
pure (no I/O).
"""

from __future__ import annotations

import json

from match_engine.matching.quality import match_category
from match_engine.models.activity import RecordedActivity
from match_engine.models.enums import DurationType, MatchCategory, ObjectiveType, StepKind
from match_engine.models.results import (
    AssignmentMatch,
    BlockComparison,
    MatchedLap,
    MatchQualityResult,
)
from match_engine.models.workout import FlatStep

_OBJECTIVE_KEYS = {
    ObjectiveType.DISTANCE: "distance",
    ObjectiveType.DURATION: "duration",
}

_DURATION_KEYS = {
    DurationType.DISTANCE: "distance",
    DurationType.TIME: "duration",
}

# Lap/step labels use "active" for interval work, as the lap view does.
_STEP_KIND_KEYS = {
    StepKind.WARMUP: "warmup",
    StepKind.INTERVAL: "active",
    StepKind.RECOVERY: "recovery",
    StepKind.COOLDOWN: "cooldown",
    StepKind.OTHER: "other",
}

_CATEGORY_KEYS = {
    MatchCategory.EXCELLENT: "excellent",
    MatchCategory.GOOD: "good",
    MatchCategory.FAIR: "fair",
    MatchCategory.LOW: "low",
}


def to_match_json(result: AssignmentMatch) -> dict:
    """Convert an AssignmentMatch to the match endpoint's response dict."""
    if not result.matched or result.activity is None:
        return {"matched": False}

    payload = {
        "matched": True,
        "manual": result.manual,
        "activity": activity_json(result.activity),
        "blockComparison": [block_comparison_json(b) for b in result.block_comparison],
        "steps": [flat_step_json(step) for step in result.steps],
        "laps": [matched_lap_json(lap) for lap in result.laps],
    }
    if result.quality is not None:
        payload["matchQuality"] = match_quality_json(result.quality)
    return payload


def to_match_json_string(result: AssignmentMatch, indent: int = 2) -> str:
    """Convert an AssignmentMatch to a JSON string."""
    return json.dumps(to_match_json(result), indent=indent)


def activity_json(activity: RecordedActivity) -> dict:
    """Activity summary as listed in the match view and the candidate picker."""
    return {
        "id": activity.activity_id,
        "title": activity.title,
        "distance": activity.total_distance_m,
        "duration": activity.total_duration_s,
        "startDate": activity.start_time.isoformat() if activity.start_time else None,
    }


def match_quality_json(quality: MatchQualityResult) -> dict:
    return {
        "overallScore": quality.overall_score,
        "matchCategory": _CATEGORY_KEYS[match_category(quality.overall_score)],
        "objectiveType": _OBJECTIVE_KEYS[quality.objective_type],
        "objectiveMatch": quality.objective_match_score,
        "distanceMatch": quality.distance_pct_delta,
        "durationMatch": quality.duration_pct_delta,
        "plannedDistance": quality.planned_distance_m,
        "plannedDuration": quality.planned_duration_s,
        "actualDistance": quality.actual_distance_m,
        "actualDuration": quality.actual_duration_s,
    }


def matched_lap_json(lap: MatchedLap) -> dict:
    return {
        "lapIndex": lap.lap_index,
        "stepIndex": lap.step_index,
        "stepLabel": lap.step_label,
        "stepType": _STEP_KIND_KEYS[lap.step_kind],
        "confidence": lap.confidence,
        "variance": lap.variance_pct,
        "matched": lap.matched,
    }


def block_comparison_json(block: BlockComparison) -> dict:
    planned: dict = {
        "duration": block.planned_duration_s,
        "distance": block.planned_distance_m,
        "targetType": block.target_type,
    }
    if block.target_type == "pace":
        planned["targetPace"] = {"min": block.pace_min, "max": block.pace_max}
    return {
        "blockId": block.block_id,
        "blockName": block.block_name,
        "blockType": _STEP_KIND_KEYS[block.step_kind],
        "planned": planned,
    }


def flat_step_json(step: FlatStep) -> dict:
    """Flattened step as shown in the step-by-step view."""
    return {
        "stepIndex": step.step_index,
        "name": step.source_block_label,
        "targetType": _DURATION_KEYS[step.target_type],
        "targetValue": step.target_value,
        "stepType": _STEP_KIND_KEYS[step.step_kind],
        "repeatIndex": step.repeat_index,
        "totalRepeats": step.total_repeats,
    }
