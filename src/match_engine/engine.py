"""WorkoutMatchEngine — compares a scheduled workout with recorded activities."""

from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from match_engine.config import DEFAULT_CONFIG, MatchingConfig
from match_engine.matching.block_comparison import compare_blocks
from match_engine.matching.flattener import flatten_workout
from match_engine.matching.lap_matcher import match_laps_to_steps
from match_engine.matching.quality import score_match_quality
from match_engine.matching.resolver import candidates_in_window, resolve_activity
from match_engine.math.planned_metrics import calculate_planned_metrics, objective_type_for
from match_engine.models.activity import RecordedActivity
from match_engine.models.results import AssignmentMatch
from match_engine.models.workout import WorkoutPlan

logger = logging.getLogger(__name__)


class WorkoutMatchEngine:
    """Runs planned metrics, activity resolution, scoring and lap matching.

    Holds only its configuration, so one engine can serve concurrent
    callers. Inputs are never mutated.

    Usage:
        engine = WorkoutMatchEngine()
        result = engine.match_assignment(plan, same_day_activities)
        result = engine.match_assignment(plan, candidates, manual_activity_id="a42")
    """

    def __init__(self, config: MatchingConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def match_assignment(
        self,
        plan: WorkoutPlan,
        candidates: Sequence[RecordedActivity],
        manual_activity_id: str | None = None,
    ) -> AssignmentMatch:
        """Analyse one scheduled workout.

        Args:
            plan: The assigned workout.
            candidates: Activities captured in the search window.
            manual_activity_id: Activity chosen explicitly by the user;
                bypasses automatic selection.

        Returns:
            An AssignmentMatch. ``matched`` is False when no activity was
            resolved; ``laps`` is empty when the activity has no laps.
        """
        blocks = plan.blocks
        planned = calculate_planned_metrics(blocks, self.config.default_pace_s_per_km)
        activity = resolve_activity(candidates, planned, manual_activity_id)

        if activity is None:
            logger.info(
                "No activity matched plan %s (%d candidates)", plan.plan_id, len(candidates)
            )
            return AssignmentMatch(matched=False, planned=planned)

        quality = score_match_quality(
            planned, activity, objective_type_for(blocks), self.config
        )
        steps = flatten_workout(blocks)
        laps = match_laps_to_steps(activity.laps, steps, self.config) if activity.laps else []

        logger.info(
            "Plan %s matched activity %s: score %d",
            plan.plan_id,
            activity.activity_id,
            quality.overall_score,
        )
        return AssignmentMatch(
            matched=True,
            planned=planned,
            activity=activity,
            quality=quality,
            block_comparison=tuple(compare_blocks(blocks, self.config.default_pace_s_per_km)),
            steps=tuple(steps),
            laps=tuple(laps),
            manual=manual_activity_id is not None,
        )

    def match_scheduled(
        self,
        plan: WorkoutPlan,
        activities: Sequence[RecordedActivity],
        scheduled_date: date,
        manual_activity_id: str | None = None,
    ) -> AssignmentMatch:
        """Match a plan against the activities of its scheduled day.

        Automatic matching only looks at the scheduled calendar day. A
        manual choice is authoritative: it is looked up by id across all of
        ``activities`` regardless of date, including undated ones.
        """
        if manual_activity_id is not None:
            return self.match_assignment(plan, activities, manual_activity_id)
        candidates = candidates_in_window(activities, scheduled_date)
        return self.match_assignment(plan, candidates)

    def candidate_activities(
        self, activities: Sequence[RecordedActivity], scheduled_date: date
    ) -> list[RecordedActivity]:
        """Activities offered to the manual-matching picker, newest first."""
        candidates = candidates_in_window(
            activities, scheduled_date, self.config.candidate_window_days
        )
        return list(reversed(candidates))
