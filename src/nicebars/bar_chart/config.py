"""Bar chart configuration.

BarChartConfig holds every tunable of the chart pipeline as an explicit field
with a documented default. Defaults are substituted per field when a config is
built from a dict; there is no deep merging.

SeriesConfig is the single normalized shape of chart input. The legacy call
shapes (plain observation list, multi-panel dict, stacked/staggered dict) are
resolved once by resolve_series_config() so the pipeline only sees one shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from nicebars.bar_chart.aggregator import ObservationLike
from nicebars.bar_chart.axis import RenderType
from nicebars.bar_chart.calendar_keys import AggregationMode
from nicebars.bar_chart.layout import DEFAULT_BAR_PADDING, DEFAULT_MIN_LABEL_SPACING, Margins
from nicebars.utils.logging import get_logger

logger = get_logger(__name__)

# Legacy camelCase config keys -> BarChartConfig field names.
LEGACY_KEYS = {
    "chartType": "mode",
    "margin": "margins",
    "renderType": "render_type",
    "tickCount": "tick_count",
    "logScale": "log_scale",
    "minBarWidth": "min_bar_width",
    "barPadding": "bar_padding",
    "minLabelSpacing": "min_label_spacing",
}

# Keys owned by the renderer (styling, DOM, labels) or passed to plan_chart
# separately; accepted and ignored.
IGNORED_KEYS = {
    "container",
    "data",
    "barColor",
    "highLowColor",
    "avgMarkerColor",
    "showTooltip",
    "showGrid",
    "title",
    "xAxisLabel",
    "yAxisLabel",
}


@dataclass(frozen=True)
class BarChartConfig:
    """Configuration for one chart.

    Widths and heights are in pixels and include the margins.
    """
    mode: AggregationMode = AggregationMode.DAY
    render_type: RenderType = RenderType.BAR
    width: float = 800.0
    height: float = 400.0
    margins: Margins = field(default_factory=Margins)
    tick_count: int = 5                 # number of major tick intervals
    log_scale: bool = False
    min_bar_width: float = 6.0          # bars narrower than this force horizontal scrolling
    bar_padding: float = DEFAULT_BAR_PADDING
    min_label_spacing: float = DEFAULT_MIN_LABEL_SPACING

    def __post_init__(self) -> None:
        # bar_padding is the gap share of each bar step; 1 or more leaves no bar.
        if not 0.0 <= self.bar_padding < 1.0:
            raise ValueError(f"bar_padding must be in [0, 1), got {self.bar_padding!r}")

    @property
    def visible_inner_width(self) -> float:
        return self.width - self.margins.left - self.margins.right

    @property
    def inner_height(self) -> float:
        return self.height - self.margins.top - self.margins.bottom

    @property
    def aggregates(self) -> bool:
        """False only for the raw day view (DAY mode drawn as plain bars)."""
        return self.mode is not AggregationMode.DAY or self.render_type is RenderType.HIGH_LOW

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dictionary."""
        return {
            "mode": self.mode.value,
            "render_type": self.render_type.value,
            "width": self.width,
            "height": self.height,
            "margins": {
                "top": self.margins.top,
                "right": self.margins.right,
                "bottom": self.margins.bottom,
                "left": self.margins.left,
            },
            "tick_count": self.tick_count,
            "log_scale": self.log_scale,
            "min_bar_width": self.min_bar_width,
            "bar_padding": self.bar_padding,
            "min_label_spacing": self.min_label_spacing,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BarChartConfig":
        """Build a config from a dictionary.

        Missing keys take their defaults. Legacy camelCase keys (chartType,
        renderType, ...) and legacy mode names (byMonth, ...) are accepted.
        Renderer-only keys are ignored; other unknown keys are ignored with a
        warning.

        Raises:
            ValueError: If mode or render_type names no known value, or
                bar_padding is outside [0, 1).
        """
        d: dict[str, Any] = {}
        for key, value in data.items():
            if key in LEGACY_KEYS:
                d[LEGACY_KEYS[key]] = value
            elif key in IGNORED_KEYS:
                logger.debug(f"ignoring non-layout config key '{key}'")
            else:
                d[key] = value

        known_keys = {f for f in cls.__dataclass_fields__}
        for key in d:
            if key not in known_keys:
                logger.warning(f"Unknown key '{key}' in bar chart config, ignoring")

        defaults = cls()
        margins_raw = d.get("margins")
        margins = defaults.margins
        if isinstance(margins_raw, Mapping):
            margins = Margins(
                top=float(margins_raw.get("top", margins.top)),
                right=float(margins_raw.get("right", margins.right)),
                bottom=float(margins_raw.get("bottom", margins.bottom)),
                left=float(margins_raw.get("left", margins.left)),
            )

        return cls(
            mode=AggregationMode.parse(d.get("mode", defaults.mode)),
            render_type=RenderType.parse(d.get("render_type", defaults.render_type)),
            width=float(d.get("width", defaults.width)),
            height=float(d.get("height", defaults.height)),
            margins=margins,
            tick_count=int(d.get("tick_count", defaults.tick_count)),
            log_scale=bool(d.get("log_scale", defaults.log_scale)),
            min_bar_width=float(d.get("min_bar_width", defaults.min_bar_width)),
            bar_padding=float(d.get("bar_padding", defaults.bar_padding)),
            min_label_spacing=float(d.get("min_label_spacing", defaults.min_label_spacing)),
        )


class SeriesKind(Enum):
    """Shape of the chart input."""
    SINGLE = "single"
    MULTI_PANEL = "multi_panel"
    STAGGERED_OR_STACKED = "staggered_or_stacked"


@dataclass(frozen=True)
class SeriesSpec:
    """One named series of raw observations."""
    name: str
    observations: tuple[ObservationLike, ...]


@dataclass(frozen=True)
class SeriesConfig:
    """Normalized chart input.

    SINGLE has exactly one series. MULTI_PANEL draws each series in its own
    panel with its own axis. STAGGERED_OR_STACKED draws all series in one
    panel, side by side or summed depending on stacked.
    """
    kind: SeriesKind
    series: tuple[SeriesSpec, ...]
    stacked: bool = False


def _series_spec(entry: Any, index: int) -> SeriesSpec:
    default_name = f"series {index + 1}"
    if isinstance(entry, Mapping):
        if "data" not in entry:
            raise ValueError(f"series entry {index} is a mapping without 'data'")
        return SeriesSpec(name=str(entry.get("name", default_name)), observations=tuple(entry["data"] or ()))
    if isinstance(entry, (str, bytes)) or not isinstance(entry, Iterable):
        raise ValueError(f"series entry {index} must be a sequence of observations, got {type(entry).__name__}")
    return SeriesSpec(name=default_name, observations=tuple(entry))


def _series_list(entries: Any, key: str) -> tuple[SeriesSpec, ...]:
    if isinstance(entries, (str, bytes, Mapping)) or not isinstance(entries, Iterable):
        raise ValueError(f"'{key}' must be a list of series")
    return tuple(_series_spec(entry, i) for i, entry in enumerate(entries))


def _resolve_stacked(data: Mapping[str, Any]) -> bool:
    if "stacked" in data:
        return bool(data["stacked"])
    mode = data.get("mode")
    if mode is None:
        return False
    mode = str(mode).lower()
    if mode not in ("stacked", "staggered"):
        raise ValueError(f"Unknown multi-series mode {data['mode']!r}; expected 'stacked' or 'staggered'")
    return mode == "stacked"


def resolve_series_config(data: Optional[Any]) -> SeriesConfig:
    """Resolve any supported input shape into a SeriesConfig.

    Accepted shapes:
        [obs, ...] or {"data": [obs, ...]}         -> SINGLE
        {"panels": [series, ...]}                   -> MULTI_PANEL
        {"series": [series, ...], "stacked": bool}  -> STAGGERED_OR_STACKED
        {"series": [...], "mode": "stacked"}        -> STAGGERED_OR_STACKED

    A series is either a list of observations or {"name": ..., "data": [...]}.

    Raises:
        ValueError: If data matches none of the shapes.
    """
    if data is None:
        return SeriesConfig(kind=SeriesKind.SINGLE, series=(SeriesSpec(name="series 1", observations=()),))
    if isinstance(data, SeriesConfig):
        return data
    if isinstance(data, Mapping):
        if "panels" in data:
            return SeriesConfig(kind=SeriesKind.MULTI_PANEL, series=_series_list(data["panels"], "panels"))
        if "series" in data:
            return SeriesConfig(
                kind=SeriesKind.STAGGERED_OR_STACKED,
                series=_series_list(data["series"], "series"),
                stacked=_resolve_stacked(data),
            )
        if "data" in data:
            return SeriesConfig(kind=SeriesKind.SINGLE, series=(_series_spec(data, 0),))
        raise ValueError("chart input mapping needs one of 'data', 'panels' or 'series'")
    return SeriesConfig(kind=SeriesKind.SINGLE, series=(_series_spec(data, 0),))
