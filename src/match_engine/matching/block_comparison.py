"""Per-block planned breakdown shown next to the match score."""

from __future__ import annotations

from typing import Sequence

from match_engine.math.planned_metrics import block_metrics
from match_engine.math.rounding import round_int
from match_engine.models.enums import DEFAULT_PACE_S_PER_KM, TargetType
from match_engine.models.results import BlockComparison
from match_engine.models.workout import WorkoutBlock

_TARGET_TYPE_KEYS = {
    TargetType.PACE: "pace",
    TargetType.HEART_RATE: "heart_rate",
    TargetType.RPE: "rpe",
}


def compare_blocks(
    blocks: Sequence[WorkoutBlock],
    default_pace_s_per_km: int = DEFAULT_PACE_S_PER_KM,
) -> list[BlockComparison]:
    """One planned entry per source block, in plan order (no repeat expansion)."""
    comparisons: list[BlockComparison] = []
    for index, block in enumerate(blocks):
        distance, duration = block_metrics(block, default_pace_s_per_km)
        target = block.target
        is_pace = target is not None and target.target_type == TargetType.PACE
        comparisons.append(
            BlockComparison(
                block_id=block.block_id or f"block-{index}",
                block_name=block.display_label,
                step_kind=block.step_kind,
                planned_distance_m=round_int(distance),
                planned_duration_s=round_int(duration),
                target_type=_TARGET_TYPE_KEYS.get(target.target_type) if target else None,
                pace_min=_as_text(target.min_value) if is_pace else None,
                pace_max=_as_text(target.max_value) if is_pace else None,
            )
        )
    return comparisons


def _as_text(value: object) -> str | None:
    return None if value is None else str(value)
