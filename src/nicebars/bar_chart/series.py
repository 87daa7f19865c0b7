"""Multi-series date alignment for stacked and staggered bar charts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from nicebars.bar_chart.aggregator import ObservationLike, normalize_observations
from nicebars.bar_chart.calendar_keys import AggregationMode, bucket_key
from nicebars.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MultiSeriesRecord:
    """Values of every series on one calendar day.

    values[i] always belongs to series i; None marks a day with no
    observation for that series (never coerced to zero).
    """
    bucket_key: str
    values: tuple[Optional[float], ...]

    def present_values(self) -> list[float]:
        return [v for v in self.values if v is not None]


def align_series(series_list: Sequence[Iterable[ObservationLike]]) -> list[MultiSeriesRecord]:
    """Merge several observation series on the union of their days.

    Args:
        series_list: One iterable of observations per series.

    Returns:
        One record per distinct day key appearing in any series, sorted by
        ascending key. Within a series the last observation for a day wins.
    """
    n_series = len(series_list)
    slots: dict[str, list[Optional[float]]] = {}
    for index, observations in enumerate(series_list):
        df = normalize_observations(observations)
        for ts, value in zip(df["timestamp"], df["value"]):
            key = bucket_key(ts, AggregationMode.DAY)
            if key not in slots:
                slots[key] = [None] * n_series
            slots[key][index] = float(value)

    records = [MultiSeriesRecord(bucket_key=key, values=tuple(slots[key])) for key in sorted(slots)]
    logger.debug(f"aligned {n_series} series onto {len(records)} days")
    return records


def stacked_max(records: Iterable[MultiSeriesRecord]) -> float:
    """Largest per-day sum of present values (height of the tallest stack)."""
    return max((sum(r.present_values()) for r in records), default=0.0)


def staggered_max(records: Iterable[MultiSeriesRecord]) -> float:
    """Largest single present value across all series and days."""
    return max((v for r in records for v in r.present_values()), default=0.0)


def stack_segments(values: Sequence[Optional[float]]) -> list[Optional[tuple[float, float]]]:
    """Cumulative (base, top) pair for each series slot, bottom to top.

    Absent slots yield None and do not advance the stack.
    """
    segments: list[Optional[tuple[float, float]]] = []
    base = 0.0
    for v in values:
        if v is None:
            segments.append(None)
            continue
        segments.append((base, base + v))
        base += v
    return segments
