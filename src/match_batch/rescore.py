"""Batch re-scoring — match one assignment's plan against exported activities.

Usage:
    python -m match_batch.rescore --plan plan.json --activities acts.json \
        --scheduled-date 2026-10-01
    python -m match_batch.rescore ... --activity-id 123456 --output match.json
    python -m match_batch.rescore --activities acts.json \
        --scheduled-date 2026-10-01 --list-candidates --window-days 3
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Sequence

from match_batch.config import JSON_INDENT, LOG_LEVEL, matching_config
from match_engine.engine import WorkoutMatchEngine
from match_engine.exceptions import MatchEngineError
from match_engine.math.pace import format_pace
from match_engine.math.planned_metrics import estimate_workout_duration
from match_engine.matching.quality import match_category
from match_engine.models.results import AssignmentMatch
from match_engine.reporting import (
    category_label,
    format_difference,
    format_distance,
    format_duration,
    laps_to_frame,
    summarize_laps,
)
from match_engine.serialization import (
    map_activities,
    parse_plan,
    to_match_json,
    validate_plan,
)
from match_engine.serialization.results import activity_json

logger = logging.getLogger(__name__)


def _load_json(path: Path) -> Any:
    with open(path) as f:
        return json.load(f)


def _plan_blocks(raw: Any) -> tuple[list, str | None, str]:
    """Accept either a bare block list or a training object with ``blocks``."""
    if isinstance(raw, dict):
        return list(raw.get("blocks") or []), raw.get("id"), str(raw.get("title") or "")
    if isinstance(raw, list):
        return raw, None, ""
    raise MatchEngineError("Plan file must contain a block list or an object with 'blocks'")


def _log_result(result: AssignmentMatch) -> None:
    if not result.matched or result.quality is None:
        logger.info("No activity matched")
        return

    quality = result.quality
    activity = result.activity
    pace = (
        format_pace(activity.total_duration_s / (activity.total_distance_m / 1000))
        if activity.total_distance_m > 0
        else "-"
    )
    logger.info(
        "Matched activity %s (%s in %s, %s/km): %s match, score %d, distance %s, duration %s",
        activity.activity_id,
        format_distance(activity.total_distance_m),
        format_duration(activity.total_duration_s),
        pace,
        category_label(match_category(quality.overall_score)),
        quality.overall_score,
        format_difference(quality.distance_pct_delta),
        format_difference(quality.duration_pct_delta),
    )
    if result.laps:
        summary = summarize_laps(result.laps, len(result.steps))
        logger.info(
            "Laps: %d matched, %d unmatched, %d extra (mean confidence %.1f)",
            summary["matched"],
            summary["unmatched"],
            summary["extra"],
            summary["mean_confidence"],
        )
        logger.debug("Lap breakdown:\n%s", laps_to_frame(result.laps).to_string(index=False))


def rescore(
    plan_path: Path,
    activities_path: Path,
    scheduled_date: date,
    activity_id: str | None = None,
) -> dict:
    """Run one match from files and return the JSON-ready result.

    Without ``activity_id`` only activities of ``scheduled_date`` are
    considered; an explicit id is matched wherever it falls in the file.
    """
    blocks, plan_id, title = _plan_blocks(_load_json(plan_path))
    plan = parse_plan(blocks, plan_id=plan_id, title=title)
    validate_plan(plan)

    activities = map_activities(_load_json(activities_path))
    logger.info(
        "Loaded plan %s (%d blocks, about %s) and %d activities",
        plan_id,
        len(plan.blocks),
        format_duration(estimate_workout_duration(plan.blocks)),
        len(activities),
    )

    engine = WorkoutMatchEngine(matching_config())
    result = engine.match_scheduled(plan, activities, scheduled_date, activity_id)
    _log_result(result)

    payload = to_match_json(result)
    payload["scheduledDate"] = scheduled_date.isoformat()
    if plan_id is not None:
        payload["planId"] = plan_id
    return payload


def list_candidates(
    activities_path: Path,
    scheduled_date: date,
    window_days: int | None = None,
) -> dict:
    """Activities a user could pick manually for ``scheduled_date``, newest first."""
    activities = map_activities(_load_json(activities_path))
    config = matching_config(window_days)
    candidates = WorkoutMatchEngine(config).candidate_activities(activities, scheduled_date)
    logger.info(
        "%d of %d activities within %d days of %s",
        len(candidates),
        len(activities),
        config.candidate_window_days,
        scheduled_date,
    )
    return {
        "scheduledDate": scheduled_date.isoformat(),
        "windowDays": config.candidate_window_days,
        "activities": [activity_json(a) for a in candidates],
    }


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Re-score a workout assignment")
    parser.add_argument("--plan", type=Path, help="Plan JSON file")
    parser.add_argument("--activities", type=Path, required=True, help="Activities JSON file")
    parser.add_argument(
        "--scheduled-date",
        type=date.fromisoformat,
        required=True,
        help="Scheduled date (YYYY-MM-DD)",
    )
    parser.add_argument("--activity-id", help="Match this activity instead of auto-selecting")
    parser.add_argument(
        "--list-candidates",
        action="store_true",
        help="List activities available for manual matching instead of scoring",
    )
    parser.add_argument("--window-days", type=int, help="Candidate window in days (with --list-candidates)")
    parser.add_argument("--output", type=Path, help="Write JSON here instead of stdout")
    args = parser.parse_args(argv)
    if not args.list_candidates and args.plan is None:
        parser.error("--plan is required unless --list-candidates is given")

    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        if args.list_candidates:
            payload = list_candidates(args.activities, args.scheduled_date, args.window_days)
        else:
            payload = rescore(
                args.plan,
                args.activities,
                args.scheduled_date,
                activity_id=args.activity_id,
            )
    except (MatchEngineError, OSError, json.JSONDecodeError) as exc:
        logger.error("Re-scoring failed: %s", exc)
        problems = getattr(exc, "problems", [])
        for problem in problems:
            logger.error("  - %s", problem)
        return 1

    text = json.dumps(payload, indent=JSON_INDENT)
    if args.output:
        args.output.write_text(text + "\n")
        logger.info("Wrote result to %s", args.output)
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
