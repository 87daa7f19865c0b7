"""
Logging for nicebars.

Modules log through get_logger(__name__) and never configure handlers. The
package logger carries a NullHandler (see nicebars/__init__.py), so records
reach an application's handlers by propagation and are silent otherwise.
Scripts that want the planner's debug output on stderr call configure_logging().
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "nicebars"
LOG_LEVEL_ENV = "NICEBARS_LOG_LEVEL"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"


def _resolve_level(level: Optional[Union[str, int]]) -> int:
    """Level from the argument, else NICEBARS_LOG_LEVEL; unknown names mean INFO."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _stderr_handler(logger: logging.Logger) -> Optional[logging.Handler]:
    for h in logger.handlers:
        if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
            return h
    return None


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """Send nicebars records to stderr. The root logger is left untouched.

    Args:
        level: Level name or number; defaults to $NICEBARS_LOG_LEVEL or INFO.
        fmt: Record format, DEFAULT_FMT when omitted.
        datefmt: Timestamp format, DEFAULT_DATEFMT when omitted.
        force: Drop the package logger's existing handlers first. Without it,
            an already attached stderr handler is kept and only the level changes.
    """
    resolved = _resolve_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)

    if force:
        for h in logger.handlers[:]:
            logger.removeHandler(h)
            h.close()
    elif _stderr_handler(logger) is not None:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FMT, datefmt or DEFAULT_DATEFMT))
    logger.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger `name`, or the package logger when name is None."""
    return logging.getLogger(name or LOGGER_NAME)
