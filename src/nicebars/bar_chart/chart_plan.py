"""Chart planning pipeline.

plan_chart() runs the whole core for one chart:

    observations -> aggregate / passthrough / align_series
                 -> value range -> plan_linear / plan_log10
                 -> build_scale (inner height)
                 -> plan_layout (inner width)
                 -> bar geometry

The resulting ChartPlan holds everything a renderer needs. Every panel owns
its own domain and scale function.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from nicebars.bar_chart.aggregator import AggregatedRecord, aggregate, passthrough
from nicebars.bar_chart.algorithms.log_ticks import plan_log10
from nicebars.bar_chart.algorithms.nice_ticks import plan_linear
from nicebars.bar_chart.axis import AxisDomain, pad_value_range, resolve_value_range
from nicebars.bar_chart.config import BarChartConfig, SeriesConfig, SeriesKind, SeriesSpec, resolve_series_config
from nicebars.bar_chart.layout import (
    BarGeometry,
    LayoutPlan,
    bar_geometry,
    label_step,
    plan_layout,
    series_bar_geometry,
)
from nicebars.bar_chart.scale import ScaleFunction, build_scale
from nicebars.bar_chart.series import MultiSeriesRecord, align_series, stacked_max, staggered_max
from nicebars.utils.logging import get_logger

logger = get_logger(__name__)

PanelRecord = Union[AggregatedRecord, MultiSeriesRecord]


@dataclass(frozen=True)
class PanelPlan:
    """Everything needed to draw one chart panel."""
    name: str
    series_names: tuple[str, ...]
    records: tuple[PanelRecord, ...]
    domain: AxisDomain
    scale: ScaleFunction
    layout: LayoutPlan
    bars: tuple[BarGeometry, ...]
    label_step: int
    inner_height: float
    stacked: Optional[bool] = None  # None for single-series panels

    @property
    def bucket_keys(self) -> list[str]:
        return [r.bucket_key for r in self.records]


@dataclass(frozen=True)
class ChartPlan:
    """Planned chart: one panel, or one per series for multi-panel input."""
    config: BarChartConfig
    kind: SeriesKind
    stacked: bool
    panels: tuple[PanelPlan, ...]

    def scrolls(self) -> bool:
        """True when any panel is wider than the visible plot area."""
        return any(p.layout.scrolls(self.config.visible_inner_width) for p in self.panels)


def plan_domain(min_value: float, max_value: float, config: BarChartConfig) -> AxisDomain:
    """Plan the value axis for a range using the configured axis type."""
    if config.log_scale:
        return plan_log10(min_value, max_value, config.tick_count)
    return plan_linear(min_value, max_value, config.tick_count)


def _finish_panel(
    name: str,
    series_names: tuple[str, ...],
    records: list[Any],
    domain: AxisDomain,
    config: BarChartConfig,
    *,
    stacked: Optional[bool] = None,
) -> Optional[PanelPlan]:
    layout = plan_layout(
        len(records),
        config.width,
        config.margins,
        config.min_bar_width,
        config.bar_padding,
    )
    if layout is None:
        return None

    inner_height = config.inner_height
    scale = build_scale(domain, inner_height)
    baseline = scale(domain.min)
    if stacked is None:
        bars = bar_geometry(records, layout, scale, baseline, config.render_type)
    else:
        bars = series_bar_geometry(records, layout, scale, baseline, stacked=stacked)

    return PanelPlan(
        name=name,
        series_names=series_names,
        records=tuple(records),
        domain=domain,
        scale=scale,
        layout=layout,
        bars=tuple(bars),
        label_step=label_step(layout, config.min_label_spacing),
        inner_height=inner_height,
        stacked=stacked,
    )


def plan_single_panel(spec: SeriesSpec, config: BarChartConfig) -> Optional[PanelPlan]:
    """Plan a panel for one series; None when it has no valid observations."""
    if config.aggregates:
        records = aggregate(spec.observations, config.mode)
    else:
        records = passthrough(spec.observations)
    if not records:
        return None

    min_value, max_value = resolve_value_range(records, config.render_type)
    domain = plan_domain(min_value, max_value, config)
    logger.debug(f"panel {spec.name!r}: {len(records)} buckets, domain [{domain.min}, {domain.max}]")
    return _finish_panel(spec.name, (spec.name,), records, domain, config)


def plan_multi_series_panel(
    specs: tuple[SeriesSpec, ...],
    config: BarChartConfig,
    *,
    stacked: bool,
) -> Optional[PanelPlan]:
    """Plan one panel holding several day-aligned series.

    The axis top is the tallest stack when stacked, and the largest single
    value when staggered.
    """
    records = align_series([s.observations for s in specs])
    if not records:
        return None

    top = stacked_max(records) if stacked else staggered_max(records)
    min_value, max_value = pad_value_range(0.0, top)
    domain = plan_domain(min_value, max_value, config)
    names = tuple(s.name for s in specs)
    label = "stacked" if stacked else "staggered"
    logger.debug(f"{label} panel: {len(names)} series, {len(records)} days, top {top}")
    return _finish_panel(label, names, records, domain, config, stacked=stacked)


def plan_chart(
    data: Any,
    config: Optional[Union[BarChartConfig, dict[str, Any]]] = None,
) -> Optional[ChartPlan]:
    """Plan a bar chart from raw input.

    Args:
        data: Observations in any shape accepted by resolve_series_config().
        config: BarChartConfig, a config dict, or None for defaults.

    Returns:
        ChartPlan, or None when no panel has valid data.

    Raises:
        ValueError: If data or config has an unsupported shape or value.
    """
    if config is None:
        config = BarChartConfig()
    elif not isinstance(config, BarChartConfig):
        config = BarChartConfig.from_dict(config)

    series_config: SeriesConfig = resolve_series_config(data)

    if series_config.kind is SeriesKind.STAGGERED_OR_STACKED:
        panel = plan_multi_series_panel(series_config.series, config, stacked=series_config.stacked)
        panels = [panel] if panel is not None else []
    else:
        panels = [p for p in (plan_single_panel(s, config) for s in series_config.series) if p is not None]

    if not panels:
        logger.warning("No valid data points provided")
        return None

    return ChartPlan(
        config=config,
        kind=series_config.kind,
        stacked=series_config.stacked,
        panels=tuple(panels),
    )
