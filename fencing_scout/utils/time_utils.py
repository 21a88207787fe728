"""
Utility functions for the Fencing Scout application.

This module contains common time helpers used throughout the application.
"""
import time
from datetime import datetime, timezone


def fmt_mmss(seconds: int) -> str:
    """
    Format seconds as MM:SS string.
    
    Args:
        seconds: Number of seconds to format
        
    Returns:
        Formatted time string in MM:SS format
        
    Example:
        >>> fmt_mmss(60)
        '01:00'
        >>> fmt_mmss(7)
        '00:07'
    """
    m = seconds // 60
    s = seconds % 60
    return f"{m:02d}:{s:02d}"


def now_ts() -> float:
    """
    Get current timestamp in epoch seconds.
    
    Returns:
        Current time as floating point epoch seconds
    """
    return time.time()


def now_iso() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.fromtimestamp(now_ts(), tz=timezone.utc).isoformat(timespec="milliseconds")
