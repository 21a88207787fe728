"""
Models package for the Fencing Scout application.

This package contains the core data models used throughout the application.
"""
from .log_entry import Athlete, LogEntry
from .action_log import ActionLog
from .match_state import MatchState
from .clock_state import ClockState
from .analysis_report import AnalysisReport, ZoneBreakdown

__all__ = [
    "Athlete", "LogEntry", "ActionLog", "MatchState", "ClockState",
    "AnalysisReport", "ZoneBreakdown"
]
