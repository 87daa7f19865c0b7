# tests/bar_chart/conftest.py
"""Fixtures for bar chart core tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Ensure nicebars package is importable when running tests from repo root.
    repo_root = Path(__file__).resolve().parents[2]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


@pytest.fixture
def month_observations() -> list[dict]:
    """Three observations over two months."""
    return [
        {"date": "2025-01-01", "value": 10},
        {"date": "2025-01-15", "value": 20},
        {"date": "2025-02-01", "value": 30},
    ]


@pytest.fixture
def series_a() -> list[dict]:
    """Series with values on days 1, 2 and 3."""
    return [
        {"date": "2025-03-01", "value": 1.0},
        {"date": "2025-03-02", "value": 2.0},
        {"date": "2025-03-03", "value": 3.0},
    ]


@pytest.fixture
def series_b() -> list[dict]:
    """Series with values on days 1 and 3 only."""
    return [
        {"date": "2025-03-01", "value": 10.0},
        {"date": "2025-03-03", "value": 30.0},
    ]
