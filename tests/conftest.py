"""Shared test fixtures: block factories, interval plans and recorded activities."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

import pytest

from match_engine.models.activity import Lap, RecordedActivity
from match_engine.models.enums import DurationType, StepKind, TargetType
from match_engine.models.workout import (
    BlockDuration,
    RepeatGroup,
    StepTarget,
    WorkoutBlock,
    WorkoutPlan,
)


@pytest.fixture
def block_factory() -> Callable[..., WorkoutBlock]:
    """Factory fixture for WorkoutBlocks.

    Usage:
        b = block_factory("b1", StepKind.INTERVAL, meters=400, group=("g1", 6))
        b = block_factory("wu", StepKind.WARMUP, seconds=600, pace=("4:30", "5:00"))
    """

    def factory(
        block_id: str,
        kind: StepKind = StepKind.INTERVAL,
        meters: float | None = None,
        seconds: float | None = None,
        group: tuple[str, int] | None = None,
        pace: tuple[str, str] | None = None,
        rpe: float | None = None,
        label: str | None = None,
    ) -> WorkoutBlock:
        if meters is not None:
            duration = BlockDuration(DurationType.DISTANCE, meters)
        else:
            duration = BlockDuration(DurationType.TIME, seconds or 0.0)
        target = None
        if pace is not None:
            target = StepTarget(TargetType.PACE, min_value=pace[0], max_value=pace[1])
        elif rpe is not None:
            target = StepTarget(TargetType.RPE, value=rpe)
        return WorkoutBlock(
            block_id=block_id,
            step_kind=kind,
            duration=duration,
            target=target,
            label=label,
            group=RepeatGroup(group[0], group[1]) if group else None,
        )

    return factory


@pytest.fixture
def interval_plan(block_factory) -> WorkoutPlan:
    """The 2× 400m session: 600 s warmup, 2× [400m @ pace 1:30/400m, 200m], 300 s cooldown.

    Flattens to 6 steps; planned distance 1200 m. Pace strings are costed
    per km, so the "1:30" rep target contributes 400 m at 90 s/km = 36 s and
    the untargeted recovery 200 m at 300 s/km = 60 s: planned duration
    600 + 2×(36 + 60) + 300 = 1092 s.
    """
    return WorkoutPlan(
        blocks=(
            block_factory("wu", StepKind.WARMUP, seconds=600),
            block_factory("rep", StepKind.INTERVAL, meters=400, group=("g1", 2), pace=("1:30", "1:35")),
            block_factory("rec", StepKind.RECOVERY, meters=200, group=("g1", 2)),
            block_factory("cd", StepKind.COOLDOWN, seconds=300),
        ),
        plan_id="plan-1",
        title="Short reps",
    )


@pytest.fixture
def interval_laps() -> tuple[Lap, ...]:
    """Six laps, each within tolerance of the interval_plan steps."""
    return (
        Lap(distance_m=1800.0, elapsed_s=610.0, moving_s=600.0),  # warmup +1.7%
        Lap(distance_m=405.0, elapsed_s=37.0),                    # rep 1 +1.25%
        Lap(distance_m=198.0, elapsed_s=70.0),                    # rec 1 -1%
        Lap(distance_m=395.0, elapsed_s=38.0),                    # rep 2 -1.25%
        Lap(distance_m=202.0, elapsed_s=72.0),                    # rec 2 +1%
        Lap(distance_m=900.0, elapsed_s=290.0, moving_s=285.0),   # cooldown -3.3%
    )


@pytest.fixture
def interval_activity(interval_laps) -> RecordedActivity:
    return RecordedActivity(
        total_distance_m=3900.0,
        total_duration_s=1117.0,
        start_time=datetime(2026, 10, 1, 7, 30),
        laps=interval_laps,
        activity_id="act-1",
        title="Morning Run",
    )


@pytest.fixture
def activity_factory() -> Callable[..., RecordedActivity]:
    """Factory fixture for RecordedActivity without laps."""

    def factory(
        activity_id: str,
        distance: float,
        duration: float,
        start: datetime | None = None,
    ) -> RecordedActivity:
        return RecordedActivity(
            total_distance_m=distance,
            total_duration_s=duration,
            start_time=start,
            activity_id=activity_id,
        )

    return factory
