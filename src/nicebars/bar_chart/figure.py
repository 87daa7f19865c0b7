"""Plotly figure for a planned chart panel.

Returns Plotly figure dicts (never go.Figure) so the result can be handed to
any Plotly front end as-is. Bars are placed at the planned pixel centers and
widths on an x axis spanning [0, inner_width]; y values stay in data units on
the planned domain. Styling is left to the caller.
"""

from __future__ import annotations

import math
from typing import Any

import plotly.graph_objects as go

from nicebars.bar_chart.aggregator import AggregatedRecord
from nicebars.bar_chart.axis import AxisDomain
from nicebars.bar_chart.chart_plan import ChartPlan, PanelPlan
from nicebars.bar_chart.series import MultiSeriesRecord, stack_segments


def _yaxis(domain: AxisDomain) -> dict[str, Any]:
    if domain.is_logarithmic:
        axis_range = [math.log10(domain.min), math.log10(domain.max)]
    else:
        axis_range = [domain.min, domain.max]
    return dict(
        type="log" if domain.is_logarithmic else "linear",
        range=axis_range,
        tickmode="array",
        tickvals=list(domain.major_ticks),
        minor=dict(tickmode="array", tickvals=list(domain.minor_ticks)),
    )


def _xaxis(panel: PanelPlan) -> dict[str, Any]:
    indices = range(0, panel.layout.bucket_count, panel.label_step)
    keys = panel.bucket_keys
    return dict(
        range=[0.0, panel.layout.inner_width],
        tickmode="array",
        tickvals=[panel.layout.bar_center(i) for i in indices],
        ticktext=[keys[i] for i in indices],
    )


def _add_single_series(fig: go.Figure, panel: PanelPlan) -> None:
    # bar_geometry emits exactly one bar per record, in record order; DAY
    # passthrough can repeat a bucket key.
    rows: list[AggregatedRecord] = list(panel.records)
    centers = [b.x + b.width / 2 for b in panel.bars]
    widths = [b.width for b in panel.bars]
    high_low = any(b.marker_y is not None for b in panel.bars)

    if not high_low:
        fig.add_trace(go.Bar(x=centers, y=[r.value for r in rows], width=widths, name=panel.name))
        return

    fig.add_trace(
        go.Bar(
            x=centers,
            y=[r.high_value - r.low_value for r in rows],
            base=[r.low_value for r in rows],
            width=widths,
            name=panel.name,
        )
    )
    fig.add_trace(
        go.Scatter(
            x=centers,
            y=[r.value for r in rows],
            mode="markers",
            marker=dict(symbol="line-ew-open"),
            name="average",
        )
    )


def _add_multi_series(fig: go.Figure, panel: PanelPlan) -> None:
    records: dict[str, MultiSeriesRecord] = {r.bucket_key: r for r in panel.records}
    for series_index, name in enumerate(panel.series_names):
        bars = [b for b in panel.bars if b.series_index == series_index]
        values = [records[b.bucket_key].values[series_index] for b in bars]
        bases = [stack_segments(records[b.bucket_key].values)[series_index][0] for b in bars]
        fig.add_trace(
            go.Bar(
                x=[b.x + b.width / 2 for b in bars],
                y=values,
                base=bases if panel.stacked else None,
                width=[b.width for b in bars],
                name=name,
            )
        )


def panel_to_plotly(panel: PanelPlan) -> dict:
    """Create a Plotly figure dict for one planned panel.

    Args:
        panel: Panel from a ChartPlan.

    Returns:
        Plotly figure dict with one bar trace per series (plus an average
        marker trace for high-low panels).
    """
    fig = go.Figure()
    if panel.records and isinstance(panel.records[0], MultiSeriesRecord):
        _add_multi_series(fig, panel)
    else:
        _add_single_series(fig, panel)

    fig.update_layout(
        barmode="overlay",
        xaxis=_xaxis(panel),
        yaxis=_yaxis(panel.domain),
        showlegend=len(panel.series_names) > 1,
    )
    return fig.to_dict()


def chart_to_plotly(plan: ChartPlan) -> list[dict]:
    """One Plotly figure dict per panel of the chart."""
    return [panel_to_plotly(p) for p in plan.panels]
