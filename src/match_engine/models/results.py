"""Computed results of the match engine. Never persisted by the engine."""

from __future__ import annotations

from dataclasses import dataclass

from match_engine.models.activity import RecordedActivity
from match_engine.models.enums import ObjectiveType, StepKind
from match_engine.models.workout import FlatStep


@dataclass(frozen=True)
class PlannedMetrics:
    """Planned totals derived from a block structure."""

    planned_distance_m: float = 0.0
    planned_duration_s: float = 0.0


@dataclass(frozen=True)
class MatchQualityResult:
    """Planned vs. actual comparison of one activity.

    Deltas are signed percentages rounded to one decimal; scores and
    aggregate values are rounded to integers.
    """

    overall_score: int
    objective_type: ObjectiveType
    objective_match_score: int
    distance_pct_delta: float
    duration_pct_delta: float
    planned_distance_m: int
    planned_duration_s: int
    actual_distance_m: int
    actual_duration_s: int


@dataclass(frozen=True)
class MatchedLap:
    """Attribution of one recorded lap to a flattened step (or to none)."""

    lap_index: int
    step_index: int | None
    step_label: str
    step_kind: StepKind
    confidence: int          # 0-100
    variance_pct: float      # signed, one decimal
    matched: bool


@dataclass(frozen=True)
class BlockComparison:
    """Planned breakdown of one source block (not repeat-expanded)."""

    block_id: str
    block_name: str
    step_kind: StepKind
    planned_distance_m: int
    planned_duration_s: int
    target_type: str | None = None
    pace_min: str | None = None
    pace_max: str | None = None


@dataclass(frozen=True)
class AssignmentMatch:
    """Full analysis of one scheduled workout against its activities."""

    matched: bool
    planned: PlannedMetrics
    activity: RecordedActivity | None = None
    quality: MatchQualityResult | None = None
    block_comparison: tuple[BlockComparison, ...] = ()
    steps: tuple[FlatStep, ...] = ()
    laps: tuple[MatchedLap, ...] = ()
    manual: bool = False
