"""Axis domain value object and value-range policy.

Single source of truth for the numeric policy constants shared by the tick
planners, the scale builder and the chart pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union

from nicebars.bar_chart.aggregator import AggregatedRecord

# Raw range used by the linear planner when the data is flat (max == min).
FLAT_RANGE_FALLBACK = 10.0

# Headroom added above (and, for high-low bars, below) the data range.
VALUE_PADDING_FRACTION = 0.1
# Padding used instead when the data range is zero.
FLAT_PADDING_FALLBACK = 10.0

# Minor log ticks closer than this fraction of the axis height to a major
# tick are dropped so their gridlines do not crowd the labeled ones.
MINOR_OVERLAP_FRACTION = 0.02

# Denominator substituted for a zero-width domain in scale functions.
MIN_DENOMINATOR = 1e-9


class RenderType(Enum):
    """How each bucket is drawn."""
    BAR = "bar"
    HIGH_LOW = "high-low"

    @classmethod
    def parse(cls, value: Union[str, "RenderType"]) -> "RenderType":
        if isinstance(value, RenderType):
            return value
        s = str(value).strip().lower().replace("_", "-")
        try:
            return cls(s)
        except ValueError:
            raise ValueError(f"Unknown render type {value!r}") from None


@dataclass(frozen=True)
class AxisDomain:
    """Value axis bounds and ticks.

    major_ticks are labeled and ascending; minor_ticks are unlabeled
    gridline positions and never affect min/max. For logarithmic domains
    min and max are both tick values and min > 0.
    """
    min: float
    max: float
    is_logarithmic: bool
    major_ticks: tuple[float, ...]
    minor_ticks: tuple[float, ...] = ()

    @property
    def span(self) -> float:
        return self.max - self.min


def resolve_value_range(
    records: Sequence[AggregatedRecord],
    render_type: RenderType = RenderType.BAR,
) -> tuple[float, float]:
    """Padded (min, max) value range to feed a tick planner.

    BAR charts start at zero and end above the largest value. HIGH_LOW charts
    span the lowest low to the highest high, with the bottom padded but never
    below zero.

    Args:
        records: Aggregated records.
        render_type: Chart render type.

    Returns:
        (min_value, max_value) including padding; (0, FLAT_PADDING_FALLBACK)
        when records is empty.
    """
    if not records:
        return 0.0, FLAT_PADDING_FALLBACK

    if render_type is RenderType.HIGH_LOW:
        min_value = min(r.low_value for r in records)
        max_value = max(r.high_value for r in records)
    else:
        min_value = 0.0
        max_value = max(r.value for r in records)

    return pad_value_range(min_value, max_value, pad_bottom=render_type is RenderType.HIGH_LOW)


def pad_value_range(min_value: float, max_value: float, *, pad_bottom: bool = False) -> tuple[float, float]:
    """Add VALUE_PADDING_FRACTION of the range above max (and below min, clamped at 0)."""
    padding = (max_value - min_value) * VALUE_PADDING_FRACTION or FLAT_PADDING_FALLBACK
    if pad_bottom:
        min_value = max(0.0, min_value - padding)
    return float(min_value), float(max_value + padding)
