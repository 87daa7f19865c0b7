"""Bar chart core: calendar aggregation, axis planning and bar layout."""

from nicebars.bar_chart.aggregator import AggregatedRecord, Observation, aggregate, passthrough
from nicebars.bar_chart.algorithms.log_ticks import plan_log10
from nicebars.bar_chart.algorithms.nice_ticks import nice_ceiling, plan_linear
from nicebars.bar_chart.axis import AxisDomain, RenderType, resolve_value_range
from nicebars.bar_chart.calendar_keys import AggregationMode, bucket_key, bucket_start, iso_week
from nicebars.bar_chart.chart_plan import ChartPlan, PanelPlan, plan_chart
from nicebars.bar_chart.config import BarChartConfig, SeriesConfig, SeriesKind, resolve_series_config
from nicebars.bar_chart.layout import BarGeometry, LayoutPlan, Margins, label_step, plan_layout
from nicebars.bar_chart.scale import build_scale
from nicebars.bar_chart.series import MultiSeriesRecord, align_series, stacked_max, staggered_max

__all__ = [
    "AggregatedRecord",
    "AggregationMode",
    "AxisDomain",
    "BarChartConfig",
    "BarGeometry",
    "ChartPlan",
    "LayoutPlan",
    "Margins",
    "MultiSeriesRecord",
    "Observation",
    "PanelPlan",
    "RenderType",
    "SeriesConfig",
    "SeriesKind",
    "aggregate",
    "align_series",
    "bucket_key",
    "bucket_start",
    "build_scale",
    "iso_week",
    "label_step",
    "nice_ceiling",
    "passthrough",
    "plan_chart",
    "plan_layout",
    "plan_linear",
    "plan_log10",
    "resolve_series_config",
    "resolve_value_range",
    "stacked_max",
    "staggered_max",
]
