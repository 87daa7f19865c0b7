"""
Nice-number linear tick planner.

Steps:
  1. raw_step = (max - min) / tick_count. Flat or invalid ranges fall back to
     a raw range of FLAT_RANGE_FALLBACK so an axis is always produced.
  2. nice_step = smallest value in {1, 2, 4, 5, 6, 8, 10} x 10^k that is
     >= raw_step.
  3. A nonzero min snaps down to a multiple of nice_step; a zero min stays 0.
  4. max = min + tick_count * nice_step; tick_count + 1 evenly spaced majors.
"""

from __future__ import annotations

import math

from nicebars.bar_chart.axis import FLAT_RANGE_FALLBACK, AxisDomain
from nicebars.utils.logging import get_logger

logger = get_logger(__name__)

NICE_MULTIPLIERS = (1.0, 2.0, 4.0, 5.0, 6.0, 8.0, 10.0)

# Relative tolerance when comparing a candidate step to the raw step.
_STEP_RTOL = 1e-9


def trim_float(x: float, digits: int = 12) -> float:
    """Remove floating point drift, e.g. 0.30000000000000004 -> 0.3."""
    return float(f"{x:.{digits}g}")


def nice_ceiling(raw_step: float) -> float:
    """Smallest member of {1,2,4,5,6,8,10} x 10^k that is >= raw_step.

    Non-positive or non-finite input returns 1.0.
    """
    if raw_step <= 0 or not math.isfinite(raw_step):
        return 1.0
    exp = math.floor(math.log10(raw_step))
    base = 10.0 ** exp
    for m in NICE_MULTIPLIERS:
        candidate = m * base
        if candidate >= raw_step * (1.0 - _STEP_RTOL):
            return trim_float(candidate)
    return trim_float(10.0 * base)


def plan_linear(min_value: float, max_value: float, tick_count: int = 5) -> AxisDomain:
    """Plan a linear axis with evenly spaced nice ticks.

    Args:
        min_value: Lower end of the data range.
        max_value: Upper end of the data range.
        tick_count: Number of tick intervals; values below 1 are treated as 1.

    Returns:
        Linear AxisDomain with tick_count + 1 major ticks and no minor ticks.
    """
    tick_count = max(1, int(tick_count))
    if not math.isfinite(min_value):
        min_value = 0.0

    raw_range = max_value - min_value
    raw_step = raw_range / tick_count if math.isfinite(raw_range) else 0.0
    if raw_step <= 0:
        logger.debug(f"flat range [{min_value}, {max_value}], using fallback range {FLAT_RANGE_FALLBACK}")
        raw_step = FLAT_RANGE_FALLBACK / tick_count

    step = nice_ceiling(raw_step)
    axis_min = 0.0 if min_value == 0 else trim_float(math.floor(min_value / step) * step)
    ticks = tuple(trim_float(axis_min + i * step) for i in range(tick_count + 1))

    return AxisDomain(
        min=ticks[0],
        max=ticks[-1],
        is_logarithmic=False,
        major_ticks=ticks,
    )
