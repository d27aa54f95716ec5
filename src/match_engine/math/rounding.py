"""Half-up rounding, matching how the web client rounds scores.

Python's ``round`` uses banker's rounding (2.5 → 2); match scores are
graded with ties rounded toward +inf (2.5 → 3, -2.5 → -2).
"""

from __future__ import annotations

import math


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round ``value`` to ``ndigits`` decimals, ties toward +inf."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    """Half-up rounding to an integer."""
    return int(math.floor(value + 0.5))
