"""Planned distance and duration derived from a workout's block structure.

Works on the raw (non-flattened) block sequence. Repeat groups are
gathered by a full scan of the plan, so a group still counts correctly
even if its members were not stored contiguously.

Known limitation: a TIME block contributes no planned distance, because
distance cannot be inferred from time without a pace assumption.
"""

from __future__ import annotations

from typing import Sequence

from match_engine.math.pace import parse_pace
from match_engine.models.enums import (
    DEFAULT_PACE_S_PER_KM,
    DurationType,
    ObjectiveType,
    TargetType,
)
from match_engine.models.results import PlannedMetrics
from match_engine.models.workout import WorkoutBlock


def block_metrics(
    block: WorkoutBlock, default_pace_s_per_km: int = DEFAULT_PACE_S_PER_KM
) -> tuple[float, float]:
    """Planned (distance_m, duration_s) contribution of a single block.

    DISTANCE blocks estimate duration from the pace target's ``min`` bound
    when present, else from ``default_pace_s_per_km``. TIME blocks
    contribute their seconds and zero distance.
    """
    if block.duration.duration_type == DurationType.DISTANCE:
        distance = block.duration.value or 0.0
        pace_s = default_pace_s_per_km
        target = block.target
        if target is not None and target.target_type == TargetType.PACE and target.min_value:
            pace_s = parse_pace(target.min_value, default=default_pace_s_per_km)
        return distance, (distance / 1000.0) * pace_s

    if block.duration.duration_type == DurationType.TIME:
        return 0.0, block.duration.value or 0.0

    return 0.0, 0.0


def calculate_planned_metrics(
    blocks: Sequence[WorkoutBlock],
    default_pace_s_per_km: int = DEFAULT_PACE_S_PER_KM,
) -> PlannedMetrics:
    """Total planned distance (m) and duration (s) of a workout.

    Each repeat group contributes ``repeat_count × sum(member metrics)``,
    using the repeat count of the group's first occurrence.

    Args:
        blocks: Plan blocks in execution order.
        default_pace_s_per_km: Pace assumed for distance blocks without a
            pace target.

    Returns:
        PlannedMetrics with unrounded totals.
    """
    total_distance = 0.0
    total_duration = 0.0
    processed_group_ids: set[str] = set()

    for block in blocks:
        group = block.group
        if group is None:
            distance, duration = block_metrics(block, default_pace_s_per_km)
            total_distance += distance
            total_duration += duration
            continue

        if group.group_id in processed_group_ids:
            continue
        processed_group_ids.add(group.group_id)

        members = [b for b in blocks if b.group is not None and b.group.group_id == group.group_id]
        for member in members:
            distance, duration = block_metrics(member, default_pace_s_per_km)
            total_distance += distance * group.repeat_count
            total_duration += duration * group.repeat_count

    return PlannedMetrics(
        planned_distance_m=total_distance,
        planned_duration_s=total_duration,
    )


def objective_type_for(blocks: Sequence[WorkoutBlock]) -> ObjectiveType:
    """DISTANCE if any block is distance-based, otherwise DURATION."""
    if any(b.duration.duration_type == DurationType.DISTANCE for b in blocks):
        return ObjectiveType.DISTANCE
    return ObjectiveType.DURATION


def estimate_workout_duration(blocks: Sequence[WorkoutBlock]) -> float:
    """Builder-side duration estimate in seconds.

    Unlike :func:`calculate_planned_metrics`, pace targets are ignored:
    every distance block is costed at the flat 5:00/km used by the
    workout builder's running total.
    """
    flat_blocks = [
        WorkoutBlock(
            block_id=b.block_id,
            step_kind=b.step_kind,
            duration=b.duration,
            group=b.group,
        )
        for b in blocks
    ]
    return calculate_planned_metrics(flat_blocks).planned_duration_s
