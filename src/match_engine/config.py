"""Tunable matching parameters."""

from __future__ import annotations

from dataclasses import dataclass

from match_engine.models.enums import (
    DEFAULT_PACE_S_PER_KM,
    MANUAL_MATCH_WINDOW_DAYS,
    OBJECTIVE_WEIGHT,
    SECONDARY_SENSITIVITY,
    SECONDARY_WEIGHT,
    STEP_TOLERANCE,
    WARMUP_COOLDOWN_TOLERANCE,
)


@dataclass(frozen=True)
class MatchingConfig:
    """Knobs for the match engine. Defaults reproduce the standard grading."""

    default_pace_s_per_km: int = DEFAULT_PACE_S_PER_KM
    step_tolerance: float = STEP_TOLERANCE
    warmup_cooldown_tolerance: float = WARMUP_COOLDOWN_TOLERANCE
    objective_weight: float = OBJECTIVE_WEIGHT
    secondary_weight: float = SECONDARY_WEIGHT
    secondary_sensitivity: float = SECONDARY_SENSITIVITY
    candidate_window_days: int = MANUAL_MATCH_WINDOW_DAYS


DEFAULT_CONFIG = MatchingConfig()
