"""Numeric helpers shared by the aggregator and the tick planners."""

from __future__ import annotations

import math


def round_half_up(x: float, digits: int = 0) -> float:
    """Round to `digits` decimals with ties going up (0.125 -> 0.13, 2.5 -> 3).

    Python's round() sends ties to the even neighbour; bucket means and tick
    counts round ties up instead.
    """
    scale = 10 ** digits
    return math.floor(x * scale + 0.5) / scale


def round_index(x: float) -> int:
    """round_half_up() to an int, for index and count arithmetic."""
    return int(math.floor(x + 0.5))
