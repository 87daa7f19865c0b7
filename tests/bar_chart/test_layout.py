"""Unit tests for bar layout, label thinning and bar geometry."""

import pytest

from nicebars.bar_chart.aggregator import AggregatedRecord
from nicebars.bar_chart.axis import AxisDomain, RenderType
from nicebars.bar_chart.layout import (
    LayoutPlan,
    Margins,
    bar_geometry,
    label_step,
    plan_layout,
    series_bar_geometry,
)
from nicebars.bar_chart.scale import build_scale
from nicebars.bar_chart.series import MultiSeriesRecord


@pytest.fixture
def linear_scale():
    domain = AxisDomain(min=0.0, max=100.0, is_logarithmic=False, major_ticks=(0.0, 100.0))
    return build_scale(domain, 200.0)


def test_many_buckets_grow_past_viewport():
    plan = plan_layout(700, 800, Margins(), min_bar_width=6)
    assert plan.inner_width == pytest.approx(5250.0)
    assert plan.bar_step == pytest.approx(7.5)
    assert plan.bar_width == pytest.approx(6.0)
    assert plan.scrolls(710.0)


def test_min_content_width_exceeds_viewport_with_uneven_margins():
    plan = plan_layout(700, 800, Margins(left=70, right=10), min_bar_width=6)
    assert plan.inner_width >= 5250.0 - 1e-9
    assert plan.scrolls(800 - 70 - 10)


def test_few_buckets_fill_viewport():
    plan = plan_layout(10, 800, Margins(), min_bar_width=6)
    assert plan.inner_width == pytest.approx(710.0)
    assert plan.bar_step == pytest.approx(71.0)
    assert plan.bar_width == pytest.approx(56.8)
    assert not plan.scrolls(710.0)


def test_bar_width_respects_minimum_when_scrolling():
    for count in (1, 50, 119, 120, 500, 3000):
        plan = plan_layout(count, 800, Margins(), min_bar_width=6)
        assert plan.inner_width >= 710.0
        assert plan.bar_width >= 6.0 - 1e-9
        assert plan.bar_step * count == pytest.approx(plan.inner_width)


def test_bar_width_never_below_one_pixel():
    plan = plan_layout(10, 800, Margins(), min_bar_width=0, bar_padding_fraction=0.9999999)
    assert plan.bar_width == 1.0


def test_zero_buckets_has_no_layout():
    assert plan_layout(0, 800, Margins(), min_bar_width=6) is None


def test_bar_x_centers_bar_in_step():
    plan = LayoutPlan(bucket_count=3, bar_step=10.0, bar_width=8.0, inner_width=30.0)
    assert plan.bar_x(0) == pytest.approx(1.0)
    assert plan.bar_x(2) == pytest.approx(21.0)
    assert plan.bar_center(1) == pytest.approx(15.0)


def test_label_step_thins_crowded_labels():
    crowded = LayoutPlan(bucket_count=100, bar_step=6.6, bar_width=5.28, inner_width=660.0)
    assert label_step(crowded) == 10  # 11 labels fit in 660px
    roomy = LayoutPlan(bucket_count=5, bar_step=142.0, bar_width=113.6, inner_width=710.0)
    assert label_step(roomy) == 1


def test_label_step_narrow_plot_labels_first_only():
    tiny = LayoutPlan(bucket_count=4, bar_step=10.0, bar_width=8.0, inner_width=40.0)
    assert label_step(tiny) == 4


def test_bar_geometry_runs_to_baseline(linear_scale):
    records = [
        AggregatedRecord(bucket_key="2025-01", value=50.0, high_value=80.0, low_value=20.0, count=2),
        AggregatedRecord(bucket_key="2025-02", value=0.0, high_value=0.0, low_value=0.0, count=1),
    ]
    plan = plan_layout(2, 200, Margins(left=0, right=0), min_bar_width=1)
    bars = bar_geometry(records, plan, linear_scale, baseline=200.0)
    assert bars[0].y == pytest.approx(100.0)
    assert bars[0].height == pytest.approx(100.0)
    assert bars[0].marker_y is None
    # A zero value still gets a visible sliver.
    assert bars[1].height == 1.0


def test_high_low_geometry_spans_low_to_high(linear_scale):
    records = [AggregatedRecord(bucket_key="2025-01", value=50.0, high_value=80.0, low_value=20.0, count=2)]
    plan = plan_layout(1, 200, Margins(left=0, right=0), min_bar_width=1)
    (bar,) = bar_geometry(records, plan, linear_scale, baseline=200.0, render_type=RenderType.HIGH_LOW)
    assert bar.y == pytest.approx(40.0)
    assert bar.height == pytest.approx(120.0)
    assert bar.marker_y == pytest.approx(100.0)


def test_stacked_segments_pile_up(linear_scale):
    records = [MultiSeriesRecord(bucket_key="2025-03-01", values=(10.0, None, 30.0))]
    plan = plan_layout(1, 200, Margins(left=0, right=0), min_bar_width=1)
    bars = series_bar_geometry(records, plan, linear_scale, baseline=200.0, stacked=True)
    assert [b.series_index for b in bars] == [0, 2]
    assert bars[0].y == pytest.approx(180.0)
    assert bars[0].height == pytest.approx(20.0)
    assert bars[1].y == pytest.approx(120.0)
    assert bars[1].height == pytest.approx(60.0)
    assert all(b.width == plan.bar_width for b in bars)


def test_staggered_sub_bars_leave_gap_for_absent(linear_scale):
    records = [MultiSeriesRecord(bucket_key="2025-03-01", values=(10.0, None, 30.0))]
    plan = plan_layout(1, 200, Margins(left=0, right=0), min_bar_width=1)
    bars = series_bar_geometry(records, plan, linear_scale, baseline=200.0, stacked=False)
    sub = plan.bar_width / 3
    assert [b.series_index for b in bars] == [0, 2]
    assert bars[0].width == pytest.approx(sub)
    assert bars[1].x == pytest.approx(plan.bar_x(0) + 2 * sub)
    assert bars[1].height == pytest.approx(60.0)


def test_plan_layout_rejects_full_padding():
    with pytest.raises(ValueError):
        plan_layout(10, 800, Margins(), min_bar_width=6, bar_padding_fraction=1.0)
