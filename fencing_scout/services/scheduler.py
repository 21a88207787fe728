"""
Deferred-call scheduling for the Fencing Scout services.

The clock tick and the debounced save both need a cancellable "run this
later" capability. Services depend on the :class:`Scheduler` protocol so the
real thread-backed implementation can be swapped for a manual one in tests.
"""
import threading
from typing import Callable, Protocol

from ..utils.logging_utils import get_logger

log = get_logger("services.scheduler")


class ScheduledCall(Protocol):
    """Handle to a pending deferred call."""

    def cancel(self) -> None:
        """Prevent the call from running if it has not started yet."""
        ...


class Scheduler(Protocol):
    """Abstract timer capability - supports DIP."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """Run ``callback`` once after ``delay`` seconds."""
        ...


class ThreadingScheduler:
    """Scheduler backed by daemon :class:`threading.Timer` threads."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        def _run() -> None:
            try:
                callback()
            except Exception:
                log.exception("Scheduled callback failed")

        timer = threading.Timer(delay, _run)
        timer.daemon = True
        timer.start()
        return timer
