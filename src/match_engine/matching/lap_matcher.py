"""Lap-to-step matcher — attributes recorded laps to flattened steps.

Greedy single pass with one cursor over the steps. The cursor advances
only when a lap lands inside the step's tolerance band; an out-of-band
lap is reported as unmatched and the next lap is tried against the same
step. Once every step is consumed, remaining laps are "Extra".
"""

from __future__ import annotations

from typing import Sequence

from match_engine.config import DEFAULT_CONFIG, MatchingConfig
from match_engine.matching.flattener import generate_step_label
from match_engine.matching.quality import percent_delta
from match_engine.math.rounding import round_half_up, round_int
from match_engine.models.activity import Lap
from match_engine.models.enums import (
    EXTRA_LAP_LABEL,
    LOOSE_TOLERANCE_KINDS,
    UNMATCHED_LAP_LABEL,
    DurationType,
    StepKind,
)
from match_engine.models.results import MatchedLap
from match_engine.models.workout import FlatStep


def step_tolerance(step: FlatStep, config: MatchingConfig = DEFAULT_CONFIG) -> float:
    """Allowed deviation as a fraction: 0.20 for warmup/cooldown, else 0.10."""
    if step.step_kind in LOOSE_TOLERANCE_KINDS:
        return config.warmup_cooldown_tolerance
    return config.step_tolerance


def lap_value_for(lap: Lap, step: FlatStep) -> float:
    """Lap metric comparable to the step target (meters or seconds)."""
    if step.target_type == DurationType.DISTANCE:
        return lap.distance_m or 0.0
    return lap.duration_s


def match_laps_to_steps(
    laps: Sequence[Lap],
    steps: Sequence[FlatStep],
    config: MatchingConfig = DEFAULT_CONFIG,
) -> list[MatchedLap]:
    """Attribute each lap to a step, in order.

    Args:
        laps: Recorded laps, chronological.
        steps: Output of :func:`flatten_workout`.
        config: Tolerance bands.

    Returns:
        Exactly one MatchedLap per input lap, in lap order.
    """
    results: list[MatchedLap] = []
    step_index = 0

    for lap_index, lap in enumerate(laps):
        if step_index >= len(steps):
            results.append(_unmatched(lap_index, EXTRA_LAP_LABEL, 0.0))
            continue

        step = steps[step_index]
        tolerance = step_tolerance(step, config)
        variance = percent_delta(lap_value_for(lap, step), step.target_value)
        abs_variance = abs(variance)

        if abs_variance > tolerance * 100:
            results.append(_unmatched(lap_index, UNMATCHED_LAP_LABEL, variance))
            continue

        # 100 at 0% variance, falling linearly to 0 at the band edge
        confidence = max(0.0, 100.0 - abs_variance / tolerance)
        results.append(
            MatchedLap(
                lap_index=lap_index,
                step_index=step_index,
                step_label=generate_step_label(step),
                step_kind=step.step_kind,
                confidence=round_int(confidence),
                variance_pct=round_half_up(variance, 1),
                matched=True,
            )
        )
        step_index += 1

    return results


def _unmatched(lap_index: int, label: str, variance: float) -> MatchedLap:
    return MatchedLap(
        lap_index=lap_index,
        step_index=None,
        step_label=label,
        step_kind=StepKind.OTHER,
        confidence=0,
        variance_pct=round_half_up(variance, 1),
        matched=False,
    )
