"""Tests for nicebars.utils.numeric."""

from __future__ import annotations

import pytest

from nicebars.utils.numeric import round_half_up, round_index


@pytest.mark.parametrize(
    "x, digits, expected",
    [
        (0.125, 2, 0.13),
        (1.665, 1, 1.7),
        (2.5, 0, 3.0),
        (-2.5, 0, -2.0),
        (15.0, 2, 15.0),
        (1.6666666, 2, 1.67),
    ],
)
def test_round_half_up(x: float, digits: int, expected: float) -> None:
    assert round_half_up(x, digits) == expected


def test_round_index_ties_go_up() -> None:
    assert [round_index(v) for v in (0.5, 1.5, 2.5, 3.5)] == [1, 2, 3, 4]
    assert isinstance(round_index(2.4), int)
