"""Reporting helpers — lap tables, summaries and display formatting."""

from match_engine.reporting.summary import (
    category_label,
    format_difference,
    format_distance,
    format_duration,
    laps_to_frame,
    summarize_laps,
)

__all__ = [
    "category_label",
    "format_difference",
    "format_distance",
    "format_duration",
    "laps_to_frame",
    "summarize_laps",
]
