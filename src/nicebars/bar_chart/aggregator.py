"""Observation normalization and calendar aggregation for bar charts.

This module turns raw time-stamped observations into one AggregatedRecord per
calendar bucket. Invalid observations (unparseable timestamp, non-finite value)
are dropped silently during normalization; callers never see an error for them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Iterable, Mapping, Optional, Union

import numpy as np
import pandas as pd

from nicebars.bar_chart.calendar_keys import AggregationMode, bucket_key
from nicebars.utils.logging import get_logger
from nicebars.utils.numeric import round_half_up

logger = get_logger(__name__)

NORMALIZED_COLUMNS = ["timestamp", "value", "high_value", "low_value"]


@dataclass(frozen=True)
class Observation:
    """A single raw data point.

    timestamp may be anything pandas can parse (datetime, date, ISO string) or
    a number of epoch milliseconds. high_value/low_value are optional and only
    used by the unaggregated day view.
    """
    timestamp: Any
    value: Any
    high_value: Any = None
    low_value: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Observation":
        """Build an Observation from a mapping.

        Accepts 'timestamp' or 'date' for the instant, and both snake_case and
        camelCase names for the optional high/low values.
        """
        timestamp = data.get("timestamp", data.get("date"))
        high = data.get("high_value", data.get("highValue"))
        low = data.get("low_value", data.get("lowValue"))
        return cls(timestamp=timestamp, value=data.get("value"), high_value=high, low_value=low)


ObservationLike = Union[Observation, Mapping[str, Any]]


@dataclass(frozen=True)
class AggregatedRecord:
    """Summary statistics for one calendar bucket."""
    bucket_key: str
    value: float        # mean, rounded half up to 2 decimals
    high_value: float
    low_value: float
    count: int


def parse_timestamp(value: Any) -> Optional[pd.Timestamp]:
    """Parse value into a UTC pd.Timestamp, or None if it is not a valid instant."""
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float, np.integer, np.floating)):
            if not math.isfinite(value):
                return None
            ts = pd.to_datetime(value, unit="ms", utc=True)
        elif isinstance(value, date) and not isinstance(value, datetime):
            ts = pd.Timestamp(datetime.combine(value, time())).tz_localize("UTC")
        else:
            ts = pd.to_datetime(value, utc=True)
    except (ValueError, TypeError, OverflowError):
        return None
    if not isinstance(ts, pd.Timestamp) or pd.isna(ts):
        return None
    return ts


def parse_number(value: Any) -> Optional[float]:
    """Coerce value to a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def _as_observation(item: Any) -> Optional[Observation]:
    if isinstance(item, Observation):
        return item
    if isinstance(item, Mapping):
        return Observation.from_dict(item)
    return None


def normalize_observations(observations: Optional[Iterable[ObservationLike]]) -> pd.DataFrame:
    """Parse and validate observations into a DataFrame.

    Args:
        observations: Observation objects or mappings.

    Returns:
        DataFrame with columns timestamp (UTC), value, high_value, low_value.
        Rows with an invalid timestamp or value are dropped; high/low are NaN
        when not supplied or not finite.
    """
    rows = []
    n_in = 0
    for item in observations or []:
        n_in += 1
        obs = _as_observation(item)
        if obs is None:
            continue
        ts = parse_timestamp(obs.timestamp)
        value = parse_number(obs.value)
        if ts is None or value is None:
            continue
        high = parse_number(obs.high_value)
        low = parse_number(obs.low_value)
        rows.append((ts, value, np.nan if high is None else high, np.nan if low is None else low))

    n_dropped = n_in - len(rows)
    if n_dropped:
        logger.debug(f"dropped {n_dropped} of {n_in} invalid observations")

    if not rows:
        return pd.DataFrame(columns=NORMALIZED_COLUMNS)
    return pd.DataFrame(rows, columns=NORMALIZED_COLUMNS)


def _with_keys(df: pd.DataFrame, mode: AggregationMode) -> pd.DataFrame:
    keys = [bucket_key(ts, mode) for ts in df["timestamp"]]
    return df.assign(bucket_key=keys)


def aggregate(
    observations: Optional[Iterable[ObservationLike]],
    mode: AggregationMode,
) -> list[AggregatedRecord]:
    """Group observations by calendar bucket and reduce each group.

    Args:
        observations: Raw observations; invalid ones are filtered out.
        mode: Aggregation mode selecting the bucket key.

    Returns:
        One record per distinct bucket key, sorted by ascending key string.
        Empty input yields an empty list.
    """
    df = normalize_observations(observations)
    if df.empty:
        return []

    stats = _with_keys(df, mode).groupby("bucket_key", sort=True)["value"].agg(
        ["mean", "max", "min", "count"]
    )
    records = [
        AggregatedRecord(
            bucket_key=str(key),
            value=round_half_up(float(row["mean"]), 2),
            high_value=float(row["max"]),
            low_value=float(row["min"]),
            count=int(row["count"]),
        )
        for key, row in stats.iterrows()
    ]
    logger.debug(f"aggregated {len(df)} observations into {len(records)} {mode.value} buckets")
    return records


def passthrough(observations: Optional[Iterable[ObservationLike]]) -> list[AggregatedRecord]:
    """One DAY-keyed record per valid observation, without aggregation.

    high_value/low_value come from the observation when supplied, otherwise
    both equal value. Records are sorted by day key; observations sharing a
    day keep their input order.
    """
    df = normalize_observations(observations)
    if df.empty:
        return []

    df = _with_keys(df, AggregationMode.DAY).sort_values("bucket_key", kind="mergesort")
    records = []
    for row in df.itertuples(index=False):
        value = float(row.value)
        high = value if pd.isna(row.high_value) else float(row.high_value)
        low = value if pd.isna(row.low_value) else float(row.low_value)
        records.append(
            AggregatedRecord(bucket_key=row.bucket_key, value=value, high_value=high, low_value=low, count=1)
        )
    return records
