"""Workout plan matching and analysis engine."""

from match_engine.config import MatchingConfig
from match_engine.engine import WorkoutMatchEngine
from match_engine.exceptions import (
    ActivityDataError,
    MatchEngineError,
    PlanStructureError,
)

__all__ = [
    "ActivityDataError",
    "MatchEngineError",
    "MatchingConfig",
    "PlanStructureError",
    "WorkoutMatchEngine",
]
