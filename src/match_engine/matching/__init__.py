"""Matching components — flattening, activity resolution, scoring, lap attribution."""

from match_engine.matching.block_comparison import compare_blocks
from match_engine.matching.flattener import flatten_workout, generate_step_label
from match_engine.matching.lap_matcher import match_laps_to_steps
from match_engine.matching.quality import match_category, score_match_quality
from match_engine.matching.resolver import candidates_in_window, resolve_activity

__all__ = [
    "candidates_in_window",
    "compare_blocks",
    "flatten_workout",
    "generate_step_label",
    "match_category",
    "match_laps_to_steps",
    "resolve_activity",
    "score_match_quality",
]
