"""Lap-level reporting and human-readable formatting of match results."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from match_engine.models.enums import EXTRA_LAP_LABEL, MatchCategory
from match_engine.models.results import MatchedLap

_LAP_COLUMNS = [
    "lap_index",
    "step_index",
    "step_label",
    "step_kind",
    "confidence",
    "variance_pct",
    "matched",
]

_CATEGORY_LABELS: dict[MatchCategory, str] = {
    MatchCategory.EXCELLENT: "Excellent",
    MatchCategory.GOOD: "Good",
    MatchCategory.FAIR: "Fair",
    MatchCategory.LOW: "Low",
}


def laps_to_frame(matched_laps: Sequence[MatchedLap]) -> pd.DataFrame:
    """One row per lap, in lap order. ``step_kind`` holds the enum name."""
    rows = [
        {
            "lap_index": lap.lap_index,
            "step_index": lap.step_index,
            "step_label": lap.step_label,
            "step_kind": lap.step_kind.name.lower(),
            "confidence": lap.confidence,
            "variance_pct": lap.variance_pct,
            "matched": lap.matched,
        }
        for lap in matched_laps
    ]
    return pd.DataFrame(rows, columns=_LAP_COLUMNS)


def summarize_laps(matched_laps: Sequence[MatchedLap], step_count: int) -> dict:
    """Aggregate counts for a lap breakdown.

    Args:
        matched_laps: Output of :func:`match_laps_to_steps`.
        step_count: Number of flattened steps in the plan.

    Returns:
        Dict with ``matched``, ``unmatched``, ``extra`` lap counts,
        ``mean_confidence`` over matched laps (0.0 if none) and
        ``step_coverage``: fraction of steps that received a lap.
    """
    matched = [lap for lap in matched_laps if lap.matched]
    extra = sum(1 for lap in matched_laps if not lap.matched and lap.step_label == EXTRA_LAP_LABEL)
    confidences = np.array([lap.confidence for lap in matched], dtype=np.float64)
    mean_confidence = float(np.mean(confidences)) if confidences.size else 0.0
    return {
        "matched": len(matched),
        "unmatched": len(matched_laps) - len(matched) - extra,
        "extra": extra,
        "mean_confidence": round(mean_confidence, 1),
        "step_coverage": len(matched) / step_count if step_count > 0 else 0.0,
    }


def category_label(category: MatchCategory) -> str:
    return _CATEGORY_LABELS.get(category, "Low")


def format_distance(meters: float) -> str:
    """Format meters as km with two decimals: 10500 → "10.50 km"."""
    return f"{meters / 1000:.2f} km"


def format_duration(seconds: float) -> str:
    """Format seconds as "1h 5m" (with hours) or "42m 7s"."""
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m {secs}s"


def format_difference(pct: float) -> str:
    """Signed one-decimal percentage: 4.25 → "+4.2%", -3 → "-3.0%"."""
    sign = "+" if pct >= 0 else ""
    return f"{sign}{pct:.1f}%"
