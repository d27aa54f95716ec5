"""Environment-variable-based configuration for the batch re-scoring job."""

from __future__ import annotations

import os

from match_engine.config import MatchingConfig
from match_engine.models.enums import (
    DEFAULT_PACE_S_PER_KM,
    MANUAL_MATCH_WINDOW_DAYS,
    STEP_TOLERANCE,
    WARMUP_COOLDOWN_TOLERANCE,
)

WINDOW_DAYS: int = int(os.environ.get("MATCH_WINDOW_DAYS", str(MANUAL_MATCH_WINDOW_DAYS)))
STEP_TOLERANCE_PCT: float = float(os.environ.get("MATCH_STEP_TOLERANCE", str(STEP_TOLERANCE)))
WARMUP_TOLERANCE_PCT: float = float(
    os.environ.get("MATCH_WARMUP_TOLERANCE", str(WARMUP_COOLDOWN_TOLERANCE))
)
DEFAULT_PACE_S: int = int(os.environ.get("MATCH_DEFAULT_PACE", str(DEFAULT_PACE_S_PER_KM)))
LOG_LEVEL: str = os.environ.get("MATCH_LOG_LEVEL", "INFO").upper()
JSON_INDENT: int = int(os.environ.get("MATCH_JSON_INDENT", "2"))


def matching_config(window_days: int | None = None) -> MatchingConfig:
    """MatchingConfig built from the environment, with an optional window override."""
    return MatchingConfig(
        default_pace_s_per_km=DEFAULT_PACE_S,
        step_tolerance=STEP_TOLERANCE_PCT,
        warmup_cooldown_tolerance=WARMUP_TOLERANCE_PCT,
        candidate_window_days=WINDOW_DAYS if window_days is None else window_days,
    )
