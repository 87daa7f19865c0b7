"""Tests for the Plotly figure-dict bridge."""

from __future__ import annotations

import pandas as pd

from nicebars.bar_chart.chart_plan import plan_chart
from nicebars.bar_chart.figure import chart_to_plotly, panel_to_plotly


def _traces(fig: dict) -> list[dict]:
    return list(fig["data"])


def test_single_series_bar_figure(month_observations) -> None:
    plan = plan_chart(month_observations, {"mode": "byMonth"})
    (fig,) = chart_to_plotly(plan)
    traces = _traces(fig)
    assert len(traces) == 1
    assert traces[0]["type"] == "bar"
    assert list(traces[0]["y"]) == [15.0, 30.0]
    yaxis = fig["layout"]["yaxis"]
    assert yaxis["type"] == "linear"
    assert list(yaxis["range"]) == [0.0, 40.0]
    assert list(fig["layout"]["xaxis"]["ticktext"]) == ["2025-01", "2025-02"]
    assert fig["layout"]["showlegend"] is False


def test_high_low_figure_adds_average_markers(month_observations) -> None:
    plan = plan_chart(month_observations, {"mode": "byMonth", "renderType": "high-low"})
    fig = panel_to_plotly(plan.panels[0])
    bar, marker = _traces(fig)
    assert list(bar["base"]) == [10.0, 30.0]
    assert list(bar["y"]) == [10.0, 0.0]
    assert marker["type"] == "scatter"
    assert marker["name"] == "average"


def test_log_axis_figure(month_observations) -> None:
    plan = plan_chart(month_observations, {"mode": "byMonth", "logScale": True})
    fig = panel_to_plotly(plan.panels[0])
    yaxis = fig["layout"]["yaxis"]
    assert yaxis["type"] == "log"
    assert list(yaxis["range"]) == [0.0, 2.0]
    assert list(yaxis["tickvals"]) == [1.0, 10.0, 100.0]


def test_stacked_figure_has_trace_per_series(series_a, series_b) -> None:
    plan = plan_chart({"series": [series_a, series_b], "stacked": True})
    fig = panel_to_plotly(plan.panels[0])
    first, second = _traces(fig)
    assert len(first["x"]) == 3
    assert len(second["x"]) == 2
    assert list(second["base"]) == [1.0, 3.0]
    assert fig["layout"]["showlegend"] is True


def test_staggered_figure_has_no_base(series_a, series_b) -> None:
    plan = plan_chart({"series": [series_a, series_b]})
    fig = panel_to_plotly(plan.panels[0])
    for trace in _traces(fig):
        assert "base" not in trace


def test_label_thinning_in_ticktext() -> None:
    days = pd.date_range("2024-01-01", periods=365, freq="D")
    plan = plan_chart([{"date": d, "value": 1} for d in days])
    (fig,) = chart_to_plotly(plan)
    ticktext = list(fig["layout"]["xaxis"]["ticktext"])
    assert ticktext[0] == "2024-01-01"
    assert len(ticktext) < 365


def test_day_bars_sharing_a_key_keep_their_own_values() -> None:
    """Raw day charts draw each observation, even two on the same day."""
    observations = [
        {"date": "2025-01-01T06:00", "value": 4},
        {"date": "2025-01-01T18:00", "value": 6},
    ]
    plan = plan_chart(observations)
    (panel,) = plan.panels
    assert [r.value for r in panel.records] == [4.0, 6.0]
    (trace,) = _traces(panel_to_plotly(panel))
    assert list(trace["y"]) == [4.0, 6.0]
    assert trace["x"][0] < trace["x"][1]
