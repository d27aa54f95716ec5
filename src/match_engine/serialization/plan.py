"""Workout builder JSON → WorkoutBlock conversion and plan validation.

Raw blocks follow the builder's wire shape::

    {"id": "b1", "type": "interval", "stepName": "400s",
     "duration": {"type": "distance", "value": 400},
     "target": {"type": "pace", "min": "3:45", "max": "3:55"},
     "rpe": 8, "notes": "", "group": {"id": "g1", "reps": 6}}

Numeric fields are parsed leniently (bad values become 0 / None); only a
block that is not a mapping or has an unknown duration type is rejected.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence

from match_engine.exceptions import PlanStructureError
from match_engine.models.enums import DurationType, StepKind, TargetType
from match_engine.models.workout import (
    BlockDuration,
    RepeatGroup,
    StepTarget,
    WorkoutBlock,
    WorkoutPlan,
)

_STEP_KINDS = {
    "warmup": StepKind.WARMUP,
    "interval": StepKind.INTERVAL,
    "active": StepKind.INTERVAL,
    "recovery": StepKind.RECOVERY,
    "cooldown": StepKind.COOLDOWN,
    "other": StepKind.OTHER,
}

_DURATION_TYPES = {
    "distance": DurationType.DISTANCE,
    "time": DurationType.TIME,
}

_TARGET_TYPES = {
    "pace": TargetType.PACE,
    "heart_rate": TargetType.HEART_RATE,
    "hr_zone": TargetType.HEART_RATE,
    "rpe": TargetType.RPE,
}


def parse_plan(
    raw_blocks: Iterable[Any],
    plan_id: str | None = None,
    title: str = "",
) -> WorkoutPlan:
    """Build a WorkoutPlan from raw builder blocks, preserving order."""
    blocks = tuple(parse_block(raw, index) for index, raw in enumerate(raw_blocks))
    return WorkoutPlan(blocks=blocks, plan_id=plan_id, title=title)


def parse_block(raw: Any, index: int = 0) -> WorkoutBlock:
    """Convert one raw block dict.

    Raises:
        PlanStructureError: ``raw`` is not a mapping, or its duration type
            is neither "distance" nor "time".
    """
    if not isinstance(raw, Mapping):
        raise PlanStructureError(
            f"Block {index} is not an object", [f"block {index}: not an object"]
        )

    duration_raw = raw.get("duration")
    duration_type = None
    if isinstance(duration_raw, Mapping):
        duration_type = _DURATION_TYPES.get(str(duration_raw.get("type", "")).lower())
    if duration_type is None:
        raise PlanStructureError(
            f"Block {index} has no distance/time duration",
            [f"block {index}: duration type must be 'distance' or 'time'"],
        )

    rpe = _to_float(raw.get("rpe"))
    return WorkoutBlock(
        block_id=str(raw.get("id") or f"block-{index}"),
        step_kind=_STEP_KINDS.get(str(raw.get("type", "")).lower(), StepKind.OTHER),
        duration=BlockDuration(
            duration_type=duration_type,
            value=_to_float(duration_raw.get("value")) or 0.0,
        ),
        target=_parse_target(raw.get("target"), rpe),
        label=raw.get("stepName") or None,
        group=_parse_group(raw.get("group")),
        rpe=rpe,
        notes=str(raw.get("notes") or ""),
    )


def validate_plan(plan: WorkoutPlan | Sequence[WorkoutBlock]) -> None:
    """Check the structural preconditions the engine relies on.

    Checks: repeat count >= 1, one repeat count per group, contiguous
    group members, non-negative durations, unique block ids.

    Raises:
        PlanStructureError: with every problem found listed in ``problems``.
    """
    blocks = plan.blocks if isinstance(plan, WorkoutPlan) else tuple(plan)
    problems: list[str] = []
    seen_ids: set[str] = set()
    group_counts: dict[str, int] = {}
    closed_groups: set[str] = set()
    previous_group: Optional[str] = None

    for index, block in enumerate(blocks):
        if block.block_id in seen_ids:
            problems.append(f"block {index}: duplicate id {block.block_id!r}")
        seen_ids.add(block.block_id)

        if block.duration.value < 0:
            problems.append(f"block {index}: negative duration {block.duration.value}")

        group_id = block.group.group_id if block.group is not None else None
        if previous_group is not None and group_id != previous_group:
            closed_groups.add(previous_group)

        if block.group is not None:
            count = block.group.repeat_count
            if count < 1:
                problems.append(f"block {index}: group {group_id!r} repeat count {count} < 1")
            expected = group_counts.setdefault(group_id, count)
            if count != expected:
                problems.append(
                    f"block {index}: group {group_id!r} repeat count {count} != {expected}"
                )
            if group_id in closed_groups:
                problems.append(f"block {index}: group {group_id!r} is not contiguous")
        previous_group = group_id

    if problems:
        raise PlanStructureError(f"Invalid workout plan ({len(problems)} problems)", problems)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _parse_target(data: Any, rpe: Optional[float]) -> Optional[StepTarget]:
    """Pace/HR target from the builder, else an RPE target from ``rpe``."""
    if isinstance(data, Mapping):
        target_type = _TARGET_TYPES.get(str(data.get("type", "")).lower())
        if target_type == TargetType.RPE:
            return StepTarget(target_type=TargetType.RPE, value=_to_float(data.get("value")) or rpe)
        if target_type is not None:
            return StepTarget(
                target_type=target_type,
                min_value=_blank_to_none(data.get("min")),
                max_value=_blank_to_none(data.get("max")),
            )
    if rpe:
        return StepTarget(target_type=TargetType.RPE, value=rpe)
    return None


def _parse_group(data: Any) -> Optional[RepeatGroup]:
    if not isinstance(data, Mapping) or not data.get("id"):
        return None
    reps = _to_float(data.get("reps"))
    return RepeatGroup(group_id=str(data["id"]), repeat_count=int(reps) if reps else 1)


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _blank_to_none(value: Any) -> Any:
    if value is None or value == "":
        return None
    return value
