"""Calendar bucket keys for bar chart aggregation.

Maps a timestamp to the canonical bucket key string for each aggregation mode.
The key formats are a binding contract with renderers:

    DAY      YYYY-MM-DD
    WEEK     YYYY-Www   (ISO-8601 week date)
    MONTH    YYYY-MM
    YEAR     YYYY
    WEEKDAY  0-6        (0 = Sunday)

All modes use UTC day boundaries. Naive timestamps are interpreted as UTC and
aware timestamps are converted to UTC before the key is computed.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Union

import pandas as pd

TimestampLike = Union[datetime, pd.Timestamp]


class AggregationMode(Enum):
    """Calendar period an observation is grouped into."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    WEEKDAY = "weekday"

    @classmethod
    def parse(cls, value: Union[str, "AggregationMode"]) -> "AggregationMode":
        """Resolve a mode from its value or a legacy name like 'byMonth'.

        Raises:
            ValueError: If value names no known mode.
        """
        if isinstance(value, AggregationMode):
            return value
        s = str(value).strip().lower()
        if s.startswith("by"):
            s = s[2:]
        try:
            return cls(s)
        except ValueError:
            raise ValueError(f"Unknown aggregation mode {value!r}") from None


def to_utc(timestamp: TimestampLike) -> pd.Timestamp:
    """Return timestamp as a tz-aware UTC pd.Timestamp."""
    ts = pd.Timestamp(timestamp)
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


def iso_week(timestamp: TimestampLike) -> tuple[int, int]:
    """Return (iso_year, week_number) using the nearest-Thursday rule.

    The date is shifted to the Thursday of its Monday-start week; that
    Thursday's calendar year is the ISO year, and the week number is
    ceil((days since Jan 1 of that year + 1) / 7).
    """
    d = to_utc(timestamp).date()
    thursday = d + timedelta(days=3 - d.weekday())
    year_start = date(thursday.year, 1, 1)
    week = math.ceil(((thursday - year_start).days + 1) / 7)
    return thursday.year, week


def weekday_index(timestamp: TimestampLike) -> int:
    """Day of week with 0 = Sunday through 6 = Saturday."""
    return (to_utc(timestamp).weekday() + 1) % 7


def bucket_key(timestamp: TimestampLike, mode: AggregationMode) -> str:
    """Map a timestamp to its bucket key string for the given mode."""
    ts = to_utc(timestamp)
    if mode is AggregationMode.DAY:
        return f"{ts.year:04d}-{ts.month:02d}-{ts.day:02d}"
    if mode is AggregationMode.WEEK:
        iso_year, week = iso_week(ts)
        return f"{iso_year:04d}-W{week:02d}"
    if mode is AggregationMode.MONTH:
        return f"{ts.year:04d}-{ts.month:02d}"
    if mode is AggregationMode.YEAR:
        return f"{ts.year:04d}"
    if mode is AggregationMode.WEEKDAY:
        return str(weekday_index(ts))
    raise ValueError(f"Unsupported aggregation mode {mode!r}")


def bucket_start(timestamp: TimestampLike, mode: AggregationMode) -> pd.Timestamp:
    """Return the UTC instant at which the timestamp's bucket begins.

    DAY and WEEKDAY start at midnight of the same day, WEEK on the Monday of
    the ISO week, MONTH on the first of the month and YEAR on January 1.
    """
    day = to_utc(timestamp).normalize()
    if mode in (AggregationMode.DAY, AggregationMode.WEEKDAY):
        return day
    if mode is AggregationMode.WEEK:
        return day - pd.Timedelta(days=day.weekday())
    if mode is AggregationMode.MONTH:
        return day.replace(day=1)
    if mode is AggregationMode.YEAR:
        return day.replace(month=1, day=1)
    raise ValueError(f"Unsupported aggregation mode {mode!r}")
