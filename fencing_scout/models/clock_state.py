"""State of the bout countdown clock."""
from dataclasses import dataclass

from ..utils.constants import CLOCK_LENGTH_SECONDS


@dataclass
class ClockState:
    """
    Countdown clock state.

    Attributes:
        remaining_seconds: Seconds left on the countdown, never negative
        is_running: Whether the countdown is ticking
    """
    remaining_seconds: int = CLOCK_LENGTH_SECONDS
    is_running: bool = False

    def to_json(self) -> dict:
        return {
            "remaining_seconds": self.remaining_seconds,
            "is_running": self.is_running,
        }
