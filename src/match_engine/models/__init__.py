"""Data models for the workout match engine."""

from match_engine.models.activity import Lap, RecordedActivity
from match_engine.models.enums import (
    DurationType,
    MatchCategory,
    ObjectiveType,
    StepKind,
    TargetType,
)
from match_engine.models.results import (
    AssignmentMatch,
    BlockComparison,
    MatchedLap,
    MatchQualityResult,
    PlannedMetrics,
)
from match_engine.models.workout import (
    BlockDuration,
    FlatStep,
    RepeatGroup,
    StepTarget,
    WorkoutBlock,
    WorkoutPlan,
)

__all__ = [
    "AssignmentMatch",
    "BlockComparison",
    "BlockDuration",
    "DurationType",
    "FlatStep",
    "Lap",
    "MatchCategory",
    "MatchedLap",
    "MatchQualityResult",
    "ObjectiveType",
    "PlannedMetrics",
    "RecordedActivity",
    "RepeatGroup",
    "StepKind",
    "StepTarget",
    "TargetType",
    "WorkoutBlock",
    "WorkoutPlan",
]
