"""Utility functions for nicebars."""

from .logging import configure_logging, get_logger
from .numeric import round_half_up, round_index

__all__ = [
    "configure_logging",
    "get_logger",
    "round_half_up",
    "round_index",
]
