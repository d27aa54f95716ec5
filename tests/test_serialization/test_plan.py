"""Tests for builder JSON → WorkoutBlock parsing and plan validation."""

from __future__ import annotations

import pytest

from match_engine.exceptions import PlanStructureError
from match_engine.math.planned_metrics import calculate_planned_metrics
from match_engine.matching.flattener import flatten_workout
from match_engine.models.enums import DurationType, StepKind, TargetType
from match_engine.serialization.plan import parse_block, parse_plan, validate_plan


def _raw_plan() -> list[dict]:
    return [
        {"id": "wu", "type": "warmup", "duration": {"type": "time", "value": 600},
         "target": {"type": "no_target", "min": "", "max": ""}},
        {"id": "rep", "type": "interval", "duration": {"type": "distance", "value": 400},
         "target": {"type": "pace", "min": "3:45", "max": "3:55"}, "rpe": 8,
         "group": {"id": "g1", "reps": 6}},
        {"id": "rec", "type": "recovery", "duration": {"type": "distance", "value": 200},
         "target": {"type": "pace", "min": "", "max": ""}, "group": {"id": "g1", "reps": 6}},
        {"id": "cd", "type": "cooldown", "stepName": "Easy jog",
         "duration": {"type": "time", "value": "300"}},
    ]


class TestParseBlock:
    def test_distance_block_with_pace(self) -> None:
        block = parse_block(_raw_plan()[1])
        assert block.block_id == "rep"
        assert block.step_kind == StepKind.INTERVAL
        assert block.duration.duration_type == DurationType.DISTANCE
        assert block.duration.meters == 400
        assert block.target.target_type == TargetType.PACE
        assert block.target.min_value == "3:45"
        assert block.group.group_id == "g1"
        assert block.group.repeat_count == 6
        assert block.rpe_value == 8

    def test_no_target(self) -> None:
        assert parse_block(_raw_plan()[0]).target is None

    def test_string_numbers_and_label(self) -> None:
        block = parse_block(_raw_plan()[3])
        assert block.duration.seconds == 300
        assert block.display_label == "Easy jog"

    def test_unknown_kind_is_other(self) -> None:
        block = parse_block({"type": "drills", "duration": {"type": "time", "value": 60}}, 4)
        assert block.step_kind == StepKind.OTHER
        assert block.block_id == "block-4"

    def test_bad_value_becomes_zero(self) -> None:
        block = parse_block({"type": "interval", "duration": {"type": "distance", "value": "far"}})
        assert block.duration.value == 0.0

    def test_rpe_only_becomes_rpe_target(self) -> None:
        block = parse_block({"type": "interval", "rpe": 7, "duration": {"type": "time", "value": 60}})
        assert block.target.target_type == TargetType.RPE
        assert block.target.value == 7

    def test_missing_reps_defaults_to_one(self) -> None:
        block = parse_block(
            {"type": "interval", "duration": {"type": "time", "value": 60}, "group": {"id": "g"}}
        )
        assert block.group.repeat_count == 1

    def test_not_a_mapping_raises(self) -> None:
        with pytest.raises(PlanStructureError):
            parse_block(["interval"], 2)

    def test_unknown_duration_type_raises(self) -> None:
        with pytest.raises(PlanStructureError) as exc_info:
            parse_block({"type": "interval", "duration": {"type": "lap_button", "value": 0}}, 1)
        assert exc_info.value.problems == ["block 1: duration type must be 'distance' or 'time'"]


class TestParsePlan:
    def test_order_and_metadata(self) -> None:
        plan = parse_plan(_raw_plan(), plan_id="t1", title="6x400")
        assert [b.block_id for b in plan.blocks] == ["wu", "rep", "rec", "cd"]
        assert plan.plan_id == "t1"
        assert plan.title == "6x400"

    def test_parsed_plan_through_engine_pieces(self) -> None:
        plan = parse_plan(_raw_plan())
        assert len(flatten_workout(plan.blocks)) == 1 + 2 * 6 + 1
        metrics = calculate_planned_metrics(plan.blocks)
        assert metrics.planned_distance_m == 3600
        # 600 + 6 × (0.4 × 225 + 0.2 × 300) + 300
        assert metrics.planned_duration_s == pytest.approx(600 + 6 * (90 + 60) + 300)


class TestValidatePlan:
    def test_valid_plan_passes(self) -> None:
        validate_plan(parse_plan(_raw_plan()))

    def test_reports_every_problem(self, block_factory) -> None:
        blocks = [
            block_factory("a", meters=400, group=("g", 0)),
            block_factory("a", meters=200, group=("g", 2)),
            block_factory("c", seconds=-5),
            block_factory("d", meters=400, group=("g", 0)),
        ]
        with pytest.raises(PlanStructureError) as exc_info:
            validate_plan(blocks)
        problems = exc_info.value.problems
        assert "block 0: group 'g' repeat count 0 < 1" in problems
        assert "block 1: duplicate id 'a'" in problems
        assert "block 1: group 'g' repeat count 2 != 0" in problems
        assert "block 2: negative duration -5" in problems
        assert "block 3: group 'g' is not contiguous" in problems
