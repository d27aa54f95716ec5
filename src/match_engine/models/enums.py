"""Enumerations and matching constants for the workout match engine.

Wire names for each enumeration live next to the serializers; the values
here are internal only.
"""

from enum import IntEnum, auto


class StepKind(IntEnum):
    """Kind of a planned workout step."""

    WARMUP = 1
    INTERVAL = 2     # Main-set work rep ("active" in lap labels)
    RECOVERY = 3     # Jog/rest between intervals
    COOLDOWN = 4
    OTHER = 5


class DurationType(IntEnum):
    """How a block's length is measured."""

    DISTANCE = auto()
    TIME = auto()


class TargetType(IntEnum):
    """Intensity target attached to a block."""

    PACE = auto()
    HEART_RATE = auto()
    RPE = auto()


class ObjectiveType(IntEnum):
    """Primary goal of a workout: cover a distance or run for a duration."""

    DISTANCE = auto()
    DURATION = auto()


class MatchCategory(IntEnum):
    """Coarse grade of an overall match score, best first."""

    EXCELLENT = auto()
    GOOD = auto()
    FAIR = auto()
    LOW = auto()


# ---------------------------------------------------------------------------
# Planned metrics
# ---------------------------------------------------------------------------
# Fallback pace for distance blocks without a usable pace target (5:00/km)
DEFAULT_PACE_S_PER_KM = 300

# ---------------------------------------------------------------------------
# Lap-to-step tolerance bands (fraction of the step target)
# ---------------------------------------------------------------------------
WARMUP_COOLDOWN_TOLERANCE = 0.20
STEP_TOLERANCE = 0.10

# Step kinds that get the wider band
LOOSE_TOLERANCE_KINDS = frozenset({StepKind.WARMUP, StepKind.COOLDOWN})

# ---------------------------------------------------------------------------
# Match quality weighting
# ---------------------------------------------------------------------------
OBJECTIVE_WEIGHT = 0.7
SECONDARY_WEIGHT = 0.3
SECONDARY_SENSITIVITY = 0.5  # Secondary delta counts half as much

# Minimum overall score per category
MATCH_CATEGORY_THRESHOLDS = {
    MatchCategory.EXCELLENT: 85,
    MatchCategory.GOOD: 70,
    MatchCategory.FAIR: 50,
    MatchCategory.LOW: 0,
}

# ---------------------------------------------------------------------------
# Candidate search
# ---------------------------------------------------------------------------
AUTO_MATCH_WINDOW_DAYS = 0     # Same calendar day
MANUAL_MATCH_WINDOW_DAYS = 2   # +/- 2 days for the manual picker

# Lap labels for laps that were not attributed to a step
UNMATCHED_LAP_LABEL = "Unmatched"
EXTRA_LAP_LABEL = "Extra"
