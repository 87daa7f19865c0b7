"""Unit tests for the nice-number linear tick planner."""

import math

import pytest

from nicebars.bar_chart.algorithms.nice_ticks import nice_ceiling, plan_linear, trim_float


@pytest.mark.parametrize(
    "raw_step, expected",
    [
        (1.4, 2.0),
        (3.0, 4.0),
        (4.5, 5.0),
        (5.5, 6.0),
        (7.0, 8.0),
        (9.0, 10.0),
        (1.0, 1.0),
        (10.0, 10.0),
        (250.0, 400.0),
        (0.03, 0.04),
    ],
)
def test_nice_ceiling(raw_step, expected):
    assert nice_ceiling(raw_step) == pytest.approx(expected)


def test_nice_ceiling_degenerate_input():
    assert nice_ceiling(0.0) == 1.0
    assert nice_ceiling(-3.0) == 1.0
    assert nice_ceiling(float("nan")) == 1.0


def test_plan_linear_zero_to_seven():
    domain = plan_linear(0, 7, 5)
    assert domain.is_logarithmic is False
    assert list(domain.major_ticks[:5]) == [0, 2, 4, 6, 8]
    assert domain.major_ticks == (0.0, 2.0, 4.0, 6.0, 8.0, 10.0)
    assert domain.min == 0.0
    assert domain.max == 10.0
    assert domain.minor_ticks == ()


def test_plan_linear_snaps_nonzero_min_down():
    domain = plan_linear(33, 77, 4)
    assert domain.major_ticks == (20.0, 40.0, 60.0, 80.0, 100.0)


def test_plan_linear_negative_min_snaps_to_step_multiple():
    domain = plan_linear(-7, 3, 5)
    assert domain.min == -8.0
    assert domain.major_ticks[1] - domain.major_ticks[0] == 2.0


def test_plan_linear_flat_data_uses_fallback_range():
    domain = plan_linear(5, 5, 5)
    assert domain.max > domain.min
    assert len(domain.major_ticks) == 6
    assert all(math.isfinite(t) for t in domain.major_ticks)

    zero = plan_linear(0, 0, 5)
    assert zero.major_ticks == (0.0, 2.0, 4.0, 6.0, 8.0, 10.0)


def test_plan_linear_trims_float_drift():
    domain = plan_linear(0, 0.7, 7)
    assert domain.major_ticks[3] == 0.3
    assert domain.max == pytest.approx(0.7)


def test_plan_linear_tick_count_below_one_is_one():
    domain = plan_linear(0, 7, 0)
    assert len(domain.major_ticks) == 2
    assert domain.max >= 7


def test_trim_float():
    assert trim_float(0.1 + 0.2) == 0.3
