"""Recorded activity models supplied by the activity store."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Lap:
    """One recorded segment of an activity, in chronological order."""

    distance_m: float = 0.0
    elapsed_s: float | None = None
    moving_s: float | None = None

    @property
    def duration_s(self) -> float:
        """Elapsed time, falling back to moving time, else 0."""
        return self.elapsed_s or self.moving_s or 0.0


@dataclass(frozen=True)
class RecordedActivity:
    """Aggregate metrics and laps of one recorded session."""

    total_distance_m: float = 0.0
    total_duration_s: float = 0.0
    start_time: datetime | None = None
    laps: tuple[Lap, ...] = ()
    activity_id: str | None = None
    title: str = ""
