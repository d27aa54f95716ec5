"""Workout flattener — expands repeat groups into the literal step sequence.

Grouping is by contiguous run: a group ends at the first block whose
``group_id`` differs. Source blocks are visited once; expansion happens
only in the output.
"""

from __future__ import annotations

from typing import Sequence

from match_engine.models.enums import StepKind
from match_engine.models.workout import FlatStep, WorkoutBlock

_REPEAT_LABELS: dict[StepKind, str] = {
    StepKind.INTERVAL: "Interval",
    StepKind.RECOVERY: "Recovery",
}


def flatten_workout(blocks: Sequence[WorkoutBlock]) -> list[FlatStep]:
    """Expand a plan's blocks into an ordered list of FlatSteps.

    Args:
        blocks: Plan blocks in execution order.

    Returns:
        Fully materialized steps with ``step_index`` 0..N-1. Steps from a
        repeat group carry ``repeat_index`` (1-based) and ``total_repeats``.
    """
    steps: list[FlatStep] = []
    i = 0
    while i < len(blocks):
        block = blocks[i]
        if block.group is None:
            steps.append(_make_step(block, len(steps)))
            i += 1
            continue

        group_id = block.group.group_id
        run_end = i
        while (
            run_end < len(blocks)
            and blocks[run_end].group is not None
            and blocks[run_end].group.group_id == group_id
        ):
            run_end += 1
        run = blocks[i:run_end]

        total = block.group.repeat_count
        for repeat_index in range(1, total + 1):
            for member in run:
                steps.append(_make_step(member, len(steps), repeat_index, total))
        i = run_end

    return steps


def generate_step_label(step: FlatStep) -> str:
    """Human-readable label for a step, e.g. "Interval 3/6 @ RPE 8".

    Interval and recovery steps inside a repeat group are numbered;
    anything else keeps its block label.
    """
    label = step.source_block_label
    if step.repeat_index is not None and step.total_repeats:
        prefix = _REPEAT_LABELS.get(step.step_kind)
        if prefix is not None:
            label = f"{prefix} {step.repeat_index}/{step.total_repeats}"

    if step.rpe:
        label += f" @ RPE {step.rpe:g}"
    return label


def _make_step(
    block: WorkoutBlock,
    step_index: int,
    repeat_index: int | None = None,
    total_repeats: int | None = None,
) -> FlatStep:
    return FlatStep(
        step_index=step_index,
        source_block_label=block.display_label,
        target_type=block.duration.duration_type,
        target_value=block.duration.value,
        step_kind=block.step_kind,
        repeat_index=repeat_index,
        total_repeats=total_repeats,
        rpe=block.rpe_value,
        source_block_id=block.block_id,
    )
