"""End-to-end tests for WorkoutMatchEngine."""

from __future__ import annotations

import dataclasses
from datetime import date, datetime

import pytest

from match_engine.config import MatchingConfig
from match_engine.engine import WorkoutMatchEngine
from match_engine.models.enums import ObjectiveType
from match_engine.serialization.activity import map_activities


@pytest.fixture
def engine() -> WorkoutMatchEngine:
    return WorkoutMatchEngine()


class TestMatchAssignment:
    def test_no_candidates(self, engine, interval_plan) -> None:
        result = engine.match_assignment(interval_plan, [])
        assert result.matched is False
        assert result.activity is None
        assert result.quality is None
        assert result.planned.planned_distance_m == 1200

    def test_end_to_end(self, engine, interval_plan, interval_activity) -> None:
        result = engine.match_assignment(interval_plan, [interval_activity])
        assert result.matched is True
        assert result.activity is interval_activity
        assert result.quality.objective_type == ObjectiveType.DISTANCE
        assert result.quality.planned_distance_m == 1200
        assert len(result.steps) == 6
        assert [lap.step_index for lap in result.laps] == [0, 1, 2, 3, 4, 5]
        assert all(lap.matched for lap in result.laps)
        assert len(result.block_comparison) == 4
        assert result.manual is False

    def test_activity_without_laps(self, engine, interval_plan, interval_activity) -> None:
        bare = dataclasses.replace(interval_activity, laps=())
        result = engine.match_assignment(interval_plan, [bare])
        assert result.matched is True
        assert result.laps == ()
        assert len(result.steps) == 6

    def test_picks_best_of_several(self, engine, interval_plan, activity_factory) -> None:
        commute = activity_factory("commute", 6000, 1800)
        session = activity_factory("session", 1300, 1100)
        result = engine.match_assignment(interval_plan, [commute, session])
        assert result.activity.activity_id == "session"

    def test_manual_override(self, engine, interval_plan, activity_factory) -> None:
        commute = activity_factory("commute", 6000, 1800)
        session = activity_factory("session", 1300, 1100)
        result = engine.match_assignment(
            interval_plan, [commute, session], manual_activity_id="commute"
        )
        assert result.activity.activity_id == "commute"
        assert result.manual is True

    def test_inputs_not_mutated(self, engine, interval_plan, interval_activity) -> None:
        before = (interval_plan, interval_activity)
        engine.match_assignment(interval_plan, [interval_activity])
        engine.match_assignment(interval_plan, [interval_activity])
        assert (interval_plan, interval_activity) == before

    def test_repeat_scoring_is_deterministic(self, engine, interval_plan, interval_activity) -> None:
        first = engine.match_assignment(interval_plan, [interval_activity])
        second = engine.match_assignment(interval_plan, [interval_activity])
        assert first == second


class TestMatchScheduled:
    def test_auto_match_same_day_only(self, engine, interval_plan, activity_factory) -> None:
        day_before = activity_factory("early", 1200, 1092, datetime(2026, 9, 30, 7, 0))
        same_day = activity_factory("today", 5000, 1500, datetime(2026, 10, 1, 7, 0))
        result = engine.match_scheduled(interval_plan, [day_before, same_day], date(2026, 10, 1))
        assert result.activity.activity_id == "today"

    def test_auto_match_mixed_timezone_exports(self, engine, interval_plan) -> None:
        activities = map_activities([
            {"id": "a", "distance": 5000, "moving_time": 1500,
             "start_date": "2026-10-01T07:00:00Z"},
            {"id": "b", "distance": 1250, "moving_time": 1100,
             "start_date": "2026-10-01T18:00:00"},
        ])
        result = engine.match_scheduled(interval_plan, activities, date(2026, 10, 1))
        assert result.activity.activity_id == "b"

    def test_manual_pick_from_previous_day(self, engine, interval_plan, activity_factory) -> None:
        day_before = activity_factory("early", 1200, 1092, datetime(2026, 9, 30, 7, 0))
        result = engine.match_scheduled(
            interval_plan, [day_before], date(2026, 10, 1), manual_activity_id="early"
        )
        assert result.matched is True
        assert result.manual is True

    def test_manual_pick_ignores_window(self, interval_plan, activity_factory) -> None:
        engine = WorkoutMatchEngine(MatchingConfig(candidate_window_days=0))
        far = activity_factory("far", 1200, 1092, datetime(2026, 9, 20, 7, 0))
        result = engine.match_scheduled(
            interval_plan, [far], date(2026, 10, 1), manual_activity_id="far"
        )
        assert result.matched is True
        assert result.activity is far

    def test_manual_pick_without_start_time(self, engine, interval_plan, activity_factory) -> None:
        undated = activity_factory("undated", 1200, 1092)
        result = engine.match_scheduled(
            interval_plan, [undated], date(2026, 10, 1), manual_activity_id="undated"
        )
        assert result.matched is True

    def test_manual_pick_unknown_id(self, engine, interval_plan, activity_factory) -> None:
        today = activity_factory("today", 1200, 1092, datetime(2026, 10, 1, 7, 0))
        result = engine.match_scheduled(
            interval_plan, [today], date(2026, 10, 1), manual_activity_id="missing"
        )
        assert result.matched is False


class TestCandidateActivities:
    def test_newest_first(self, engine, activity_factory) -> None:
        acts = [
            activity_factory("a", 1, 1, datetime(2026, 9, 29, 7, 0)),
            activity_factory("b", 1, 1, datetime(2026, 10, 3, 7, 0)),
            activity_factory("c", 1, 1, datetime(2026, 10, 4, 7, 0)),
        ]
        result = engine.candidate_activities(acts, date(2026, 10, 1))
        assert [a.activity_id for a in result] == ["b", "a"]
