"""
nicebars: time-series aggregation, axis scaling and layout for bar charts.

This package provides:
- Calendar aggregation of time-stamped observations (day/week/month/year/weekday)
- Nice-number linear and tapered log10 axis planning
- Bar layout and geometry for single, multi-panel, stacked and staggered charts
- A Plotly figure-dict bridge for planned panels
- Logging utilities for library and application use

For logging configuration in standalone scripts:
    ```python
    from nicebars.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```

When used as a library, logging is handled by the parent application's
configuration.
"""

import logging

from nicebars.utils.logging import configure_logging, get_logger

from nicebars.bar_chart import (
    AggregationMode,
    BarChartConfig,
    ChartPlan,
    RenderType,
    aggregate,
    align_series,
    plan_chart,
)

# NullHandler so nicebars logs don't reach the root logger's last-resort
# handler when no application has configured logging.
_logger = logging.getLogger("nicebars")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "AggregationMode",
    "BarChartConfig",
    "ChartPlan",
    "RenderType",
    "aggregate",
    "align_series",
    "configure_logging",
    "get_logger",
    "plan_chart",
]

__version__ = "0.1.0"
