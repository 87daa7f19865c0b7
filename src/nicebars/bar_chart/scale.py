"""Scale functions mapping data values to pixel offsets.

Offsets are inverted: domain.min maps to pixel_extent (the bottom of the
plot area) and domain.max maps to 0, so larger values are drawn higher.
"""

from __future__ import annotations

import math
from typing import Callable

from nicebars.bar_chart.axis import MIN_DENOMINATOR, AxisDomain

ScaleFunction = Callable[[float], float]


def _denominator(span: float) -> float:
    return span if span != 0 else MIN_DENOMINATOR


def build_scale(domain: AxisDomain, pixel_extent: float) -> ScaleFunction:
    """Build a pure value -> pixel offset function for the domain.

    Args:
        domain: Axis domain; captured as an immutable snapshot.
        pixel_extent: Height of the plot area in pixels (1.0 for a
            normalized 0..1 offset).

    Returns:
        Function mapping a data value to its offset from the top.
    """
    if domain.is_logarithmic:
        log_min = math.log10(domain.min)
        log_span = _denominator(math.log10(domain.max) - log_min)

        def log_scale(value: float) -> float:
            v = max(value, domain.min)
            return pixel_extent - ((math.log10(v) - log_min) / log_span) * pixel_extent

        return log_scale

    lin_min = domain.min
    lin_span = _denominator(domain.max - domain.min)

    def linear_scale(value: float) -> float:
        return pixel_extent - ((value - lin_min) / lin_span) * pixel_extent

    return linear_scale
