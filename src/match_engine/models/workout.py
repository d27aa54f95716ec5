"""Planned workout models — blocks, repeat groups and flattened steps."""

from __future__ import annotations

from dataclasses import dataclass

from match_engine.models.enums import DurationType, StepKind, TargetType


@dataclass(frozen=True)
class BlockDuration:
    """Length of a block: meters if DISTANCE, seconds if TIME."""

    duration_type: DurationType
    value: float = 0.0

    @property
    def meters(self) -> float:
        return self.value if self.duration_type == DurationType.DISTANCE else 0.0

    @property
    def seconds(self) -> float:
        return self.value if self.duration_type == DurationType.TIME else 0.0


@dataclass(frozen=True)
class StepTarget:
    """Intensity target for a block.

    Pace targets keep the coach's raw "mm:ss" per km strings in
    ``min_value``/``max_value``; heart-rate targets keep bpm bounds there.
    RPE targets use ``value`` (1-10).
    """

    target_type: TargetType
    min_value: str | float | None = None
    max_value: str | float | None = None
    value: float | None = None


@dataclass(frozen=True)
class RepeatGroup:
    """Membership of a block in a repeat unit.

    Every block of a group carries the same ``group_id`` and
    ``repeat_count``; members are contiguous in the plan.
    """

    group_id: str
    repeat_count: int = 1


@dataclass(frozen=True)
class WorkoutBlock:
    """One atomic instruction, possibly a member of a repeat group."""

    block_id: str
    step_kind: StepKind
    duration: BlockDuration
    target: StepTarget | None = None
    label: str | None = None
    group: RepeatGroup | None = None
    rpe: float | None = None
    notes: str = ""

    @property
    def display_label(self) -> str:
        """Coach-supplied label, or the capitalized step kind."""
        return self.label or step_kind_label(self.step_kind)

    @property
    def rpe_value(self) -> float | None:
        """RPE from an RPE target, else from the loose ``rpe`` field."""
        if self.target is not None and self.target.target_type == TargetType.RPE:
            return self.target.value
        return self.rpe


@dataclass(frozen=True)
class WorkoutPlan:
    """Ordered block sequence; order is execution order."""

    blocks: tuple[WorkoutBlock, ...]
    plan_id: str | None = None
    title: str = ""


@dataclass(frozen=True)
class FlatStep:
    """A single step of a flattened workout, after repeat expansion.

    ``target_value`` is meters for DISTANCE steps and seconds for TIME.
    ``repeat_index`` is 1-based and only set for steps from a repeat group.
    """

    step_index: int
    source_block_label: str
    target_type: DurationType
    target_value: float
    step_kind: StepKind
    repeat_index: int | None = None
    total_repeats: int | None = None
    rpe: float | None = None
    source_block_id: str = ""


_STEP_KIND_LABELS: dict[StepKind, str] = {
    StepKind.WARMUP: "Warmup",
    StepKind.INTERVAL: "Interval",
    StepKind.RECOVERY: "Recovery",
    StepKind.COOLDOWN: "Cooldown",
    StepKind.OTHER: "Other",
}


def step_kind_label(kind: StepKind) -> str:
    """Capitalized display name of a step kind."""
    return _STEP_KIND_LABELS.get(kind, "Other")
