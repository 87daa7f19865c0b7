"""Horizontal bar layout and bar geometry.

plan_layout() decides the bar pitch and width for a number of buckets. When
min_bar_width cannot be honored inside the visible width, the inner width
grows past the viewport and the renderer is expected to scroll.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from nicebars.bar_chart.aggregator import AggregatedRecord
from nicebars.bar_chart.axis import RenderType
from nicebars.bar_chart.scale import ScaleFunction
from nicebars.bar_chart.series import MultiSeriesRecord, stack_segments
from nicebars.utils.logging import get_logger

logger = get_logger(__name__)

# Fraction of each bar step left empty between bars.
DEFAULT_BAR_PADDING = 0.2

# Minimum horizontal room per x-axis label before labels are thinned.
DEFAULT_MIN_LABEL_SPACING = 60.0

# Bars and bar segments are never thinner or shorter than this.
MIN_BAR_PIXELS = 1.0


@dataclass(frozen=True)
class Margins:
    """Space around the plot area, in pixels."""
    top: float = 40.0
    right: float = 30.0
    bottom: float = 60.0
    left: float = 60.0


@dataclass(frozen=True)
class LayoutPlan:
    """Horizontal geometry shared by all bars of a panel."""
    bucket_count: int
    bar_step: float
    bar_width: float
    inner_width: float

    def bar_x(self, index: int) -> float:
        """Left edge of bar index, centered within its step."""
        return index * self.bar_step + (self.bar_step - self.bar_width) / 2

    def bar_center(self, index: int) -> float:
        return index * self.bar_step + self.bar_step / 2

    def scrolls(self, visible_inner_width: float) -> bool:
        """True when the content is wider than the visible plot area."""
        return self.inner_width > visible_inner_width


@dataclass(frozen=True)
class BarGeometry:
    """Pixel rectangle of one bar, or one series segment of a bar.

    x/y are relative to the top-left corner of the plot area. marker_y is
    the average marker of a high-low bar and None otherwise.
    """
    bucket_key: str
    series_index: int
    x: float
    width: float
    y: float
    height: float
    marker_y: Optional[float] = None


def plan_layout(
    bucket_count: int,
    visible_width: float,
    margins: Margins,
    min_bar_width: float,
    bar_padding_fraction: float = DEFAULT_BAR_PADDING,
) -> Optional[LayoutPlan]:
    """Compute bar pitch and width.

    Args:
        bucket_count: Number of bars.
        visible_width: Total width of the chart viewport.
        margins: Plot margins; left and right are subtracted from visible_width.
        min_bar_width: Narrowest acceptable bar.
        bar_padding_fraction: Fraction of each step left as gap, in [0, 1).

    Returns:
        LayoutPlan, or None when bucket_count is 0 (no data to lay out).

    Raises:
        ValueError: If bar_padding_fraction is outside [0, 1).
    """
    if not 0.0 <= bar_padding_fraction < 1.0:
        raise ValueError(f"bar_padding_fraction must be in [0, 1), got {bar_padding_fraction!r}")
    if bucket_count <= 0:
        logger.debug("no buckets, skipping layout")
        return None

    fill = 1.0 - bar_padding_fraction
    min_content_width = bucket_count * min_bar_width / fill
    inner_width = max(visible_width - margins.left - margins.right, min_content_width)
    bar_step = inner_width / bucket_count
    bar_width = max(MIN_BAR_PIXELS, bar_step * fill)
    return LayoutPlan(
        bucket_count=bucket_count,
        bar_step=bar_step,
        bar_width=bar_width,
        inner_width=inner_width,
    )


def label_step(plan: LayoutPlan, min_label_spacing: float = DEFAULT_MIN_LABEL_SPACING) -> int:
    """Label every n-th bucket so labels are at least min_label_spacing apart."""
    max_labels = math.floor(plan.inner_width / min_label_spacing)
    if max_labels <= 0:
        return plan.bucket_count
    return max(1, math.ceil(plan.bucket_count / max_labels))


def bar_geometry(
    records: Sequence[AggregatedRecord],
    plan: LayoutPlan,
    scale: ScaleFunction,
    baseline: float,
    render_type: RenderType = RenderType.BAR,
) -> list[BarGeometry]:
    """Rectangles for single-series bars.

    BAR rectangles run from the value down to baseline. HIGH_LOW rectangles
    run from high_value to low_value and carry the average as marker_y.
    """
    bars = []
    for i, r in enumerate(records):
        x = plan.bar_x(i)
        if render_type is RenderType.HIGH_LOW:
            y_high = scale(r.high_value)
            y_low = scale(r.low_value)
            bars.append(
                BarGeometry(
                    bucket_key=r.bucket_key,
                    series_index=0,
                    x=x,
                    width=plan.bar_width,
                    y=y_high,
                    height=max(MIN_BAR_PIXELS, y_low - y_high),
                    marker_y=scale(r.value),
                )
            )
        else:
            y = scale(r.value)
            bars.append(
                BarGeometry(
                    bucket_key=r.bucket_key,
                    series_index=0,
                    x=x,
                    width=plan.bar_width,
                    y=y,
                    height=max(MIN_BAR_PIXELS, baseline - y),
                )
            )
    return bars


def series_bar_geometry(
    records: Sequence[MultiSeriesRecord],
    plan: LayoutPlan,
    scale: ScaleFunction,
    baseline: float,
    *,
    stacked: bool,
) -> list[BarGeometry]:
    """Rectangles for multi-series bars.

    Stacked: one segment per present value, piled bottom to top within the
    bar. Staggered: the bar is split into equal-width side-by-side sub-bars,
    one slot per series, so absent values leave a gap.
    """
    bars = []
    for i, r in enumerate(records):
        x0 = plan.bar_x(i)
        if stacked:
            for series_index, segment in enumerate(stack_segments(r.values)):
                if segment is None:
                    continue
                base, top = segment
                y_top = scale(top)
                bars.append(
                    BarGeometry(
                        bucket_key=r.bucket_key,
                        series_index=series_index,
                        x=x0,
                        width=plan.bar_width,
                        y=y_top,
                        height=max(MIN_BAR_PIXELS, scale(base) - y_top),
                    )
                )
            continue

        sub_width = plan.bar_width / max(1, len(r.values))
        for series_index, value in enumerate(r.values):
            if value is None:
                continue
            y = scale(value)
            bars.append(
                BarGeometry(
                    bucket_key=r.bucket_key,
                    series_index=series_index,
                    x=x0 + series_index * sub_width,
                    width=sub_width,
                    y=y,
                    height=max(MIN_BAR_PIXELS, baseline - y),
                )
            )
    return bars
