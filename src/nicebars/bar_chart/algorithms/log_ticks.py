"""
Logarithmic (base 10) tick planner.

Major ticks:
  1. Clamp min to >= 1; if max <= min afterwards, max = 10 * min.
  2. Decades floor(log10(min)) .. ceil(log10(max)), stepped by
     max(1, ceil(decade_range / tick_count)); the top decade is always kept.
  3. Fewer than 3 majors over a decade range >= 1: use {1, 2, 5} x 10^d
     across the span instead, subsampled evenly to at most tick_count + 1.
  4. The domain is reset to the first and last major.

Minor ticks taper from the bottom of the axis to the top:
  - candidates {2..9} x 10^d strictly inside each pair of adjacent majors,
  - interval i of n keeps at most round(4 * (1 - i / max(1, n - 1))), ties up,
  - minors within MINOR_OVERLAP_FRACTION of the axis height of a major are
    dropped.
"""

from __future__ import annotations

import math
from typing import Sequence

from nicebars.bar_chart.algorithms.nice_ticks import trim_float
from nicebars.bar_chart.axis import MINOR_OVERLAP_FRACTION, AxisDomain
from nicebars.utils.logging import get_logger
from nicebars.utils.numeric import round_index

logger = get_logger(__name__)

FINE_MULTIPLIERS = (1, 2, 5)
MINOR_MULTIPLIERS = (2, 3, 4, 5, 6, 7, 8, 9)

# Most minor ticks shown in the bottom interval.
MAX_MINORS_PER_INTERVAL = 4

# Fewer majors than this triggers the finer {1, 2, 5} major set.
MIN_MAJOR_TICKS = 3


def _subsample(values: Sequence[float], count: int) -> list[float]:
    """Pick count values evenly spaced by index, keeping first and last."""
    n = len(values)
    if count <= 0:
        return []
    if n <= count:
        return list(values)
    if count == 1:
        return [values[0]]
    picks = sorted({round_index(i * (n - 1) / (count - 1)) for i in range(count)})
    return [values[i] for i in picks]


def _decade_majors(min_decade: int, max_decade: int, tick_count: int) -> list[float]:
    decade_step = max(1, math.ceil((max_decade - min_decade) / tick_count))
    decades = list(range(min_decade, max_decade + 1, decade_step))
    if decades[-1] != max_decade:
        decades.append(max_decade)
    return [float(10 ** d) for d in decades]


def _fine_majors(min_decade: int, max_decade: int, tick_count: int) -> list[float]:
    lo, hi = 10 ** min_decade, 10 ** max_decade
    candidates = [
        float(m * 10 ** d)
        for d in range(min_decade, max_decade + 1)
        for m in FINE_MULTIPLIERS
        if lo <= m * 10 ** d <= hi
    ]
    n = len(candidates)
    if n <= tick_count + 1:
        return candidates
    picks = sorted({round_index(i * (n - 1) / tick_count) for i in range(tick_count + 1)})
    return [candidates[i] for i in picks]


def plan_log10_majors(min_value: float, max_value: float, tick_count: int = 5) -> list[float]:
    """Ascending major tick values for a log10 axis over [min_value, max_value]."""
    tick_count = max(1, int(tick_count))
    min_value = max(1.0, min_value) if math.isfinite(min_value) else 1.0
    if not math.isfinite(max_value) or max_value <= min_value:
        max_value = min_value * 10.0

    min_decade = math.floor(trim_float(math.log10(min_value)))
    max_decade = math.ceil(trim_float(math.log10(max_value)))

    majors = _decade_majors(min_decade, max_decade, tick_count)
    if len(majors) < MIN_MAJOR_TICKS and max_decade - min_decade >= 1:
        majors = _fine_majors(min_decade, max_decade, tick_count)
        logger.debug(f"narrow log range, using fine majors {majors}")
    return majors


def _log_position(value: float, log_min: float, log_span: float) -> float:
    """Normalized 0..1 position of value on the log axis."""
    return (math.log10(value) - log_min) / log_span


def plan_log10_minors(
    majors: Sequence[float],
    *,
    max_per_interval: int = MAX_MINORS_PER_INTERVAL,
    overlap_fraction: float = MINOR_OVERLAP_FRACTION,
) -> list[float]:
    """Minor tick values between adjacent majors, tapering toward the top.

    Args:
        majors: Ascending major ticks (all > 0).
        max_per_interval: Most minor ticks in the bottom interval.
        overlap_fraction: Minors closer than this fraction of the axis height
            to any major are discarded.

    Returns:
        Ascending minor tick values, disjoint from majors.
    """
    if len(majors) < 2:
        return []

    axis_min, axis_max = majors[0], majors[-1]
    log_min = math.log10(axis_min)
    log_span = math.log10(axis_max) - log_min
    major_positions = [_log_position(m, log_min, log_span) for m in majors]

    n_intervals = len(majors) - 1
    minors: list[float] = []
    for i, (lo, hi) in enumerate(zip(majors[:-1], majors[1:])):
        cap = round_index(max_per_interval * (1 - i / max(1, n_intervals - 1)))
        if cap <= 0:
            continue
        first_decade = math.floor(trim_float(math.log10(lo)))
        last_decade = math.ceil(trim_float(math.log10(hi))) - 1
        candidates = sorted(
            {
                float(m * 10 ** d)
                for d in range(first_decade, max(first_decade, last_decade) + 1)
                for m in MINOR_MULTIPLIERS
                if lo < m * 10 ** d < hi and axis_min <= m * 10 ** d <= axis_max
            }
        )
        minors.extend(_subsample(candidates, cap))

    return [
        v
        for v in minors
        if all(abs(_log_position(v, log_min, log_span) - p) >= overlap_fraction for p in major_positions)
    ]


def plan_log10(min_value: float, max_value: float, tick_count: int = 5) -> AxisDomain:
    """Plan a base-10 logarithmic axis.

    Args:
        min_value: Lower end of the data range; clamped to at least 1.
        max_value: Upper end of the data range.
        tick_count: Desired number of major intervals.

    Returns:
        Logarithmic AxisDomain whose min/max are its first/last major tick.
    """
    majors = plan_log10_majors(min_value, max_value, tick_count)
    minors = plan_log10_minors(majors)
    return AxisDomain(
        min=majors[0],
        max=majors[-1],
        is_logarithmic=True,
        major_ticks=tuple(majors),
        minor_ticks=tuple(minors),
    )
