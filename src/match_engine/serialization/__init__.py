"""Serialization module — builder/activity payloads in, match JSON out."""

from match_engine.serialization.activity import map_activities, map_activity
from match_engine.serialization.plan import parse_plan, validate_plan
from match_engine.serialization.results import to_match_json, to_match_json_string

__all__ = [
    "map_activities",
    "map_activity",
    "parse_plan",
    "to_match_json",
    "to_match_json_string",
    "validate_plan",
]
