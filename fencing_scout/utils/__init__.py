"""
Utilities package for the Fencing Scout application.

This package contains utility functions and constants used throughout the application.
"""
from .time_utils import fmt_mmss, now_ts, now_iso
from .constants import (
    CLOCK_LENGTH_SECONDS, TICK_INTERVAL_SECONDS, SAVE_DEBOUNCE_SECONDS,
    MAX_ARCHIVED_REPORTS, DEFAULT_ATHLETE_NAMES, ZONES,
    DEFAULT_ZONE_ORDER, TACTICAL_ACTIONS, POINT_LABELS, ACTION_CATEGORIES
)
from .logging_utils import configure_logging, get_logger
from .config import AppConfig

__all__ = [
    "fmt_mmss", "now_ts", "now_iso", "CLOCK_LENGTH_SECONDS",
    "TICK_INTERVAL_SECONDS", "SAVE_DEBOUNCE_SECONDS", "MAX_ARCHIVED_REPORTS",
    "DEFAULT_ATHLETE_NAMES", "ZONES", "DEFAULT_ZONE_ORDER",
    "TACTICAL_ACTIONS", "POINT_LABELS", "ACTION_CATEGORIES",
    "configure_logging", "get_logger", "AppConfig"
]
