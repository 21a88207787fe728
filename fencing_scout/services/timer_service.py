"""Countdown clock service for the Fencing Scout application."""

import threading
from typing import Optional

from ..models import ClockState
from ..utils import CLOCK_LENGTH_SECONDS, TICK_INTERVAL_SECONDS, fmt_mmss
from ..utils.logging_utils import get_logger
from .scheduler import ScheduledCall, Scheduler, ThreadingScheduler

log = get_logger("services.timer")


class TimerService:
    """
    Service driving the 60-second bout countdown.

    The clock is either paused or running. While running, exactly one tick
    is scheduled at a time; every transition out of the running state
    cancels it.
    """

    def __init__(
        self,
        clock_state: Optional[ClockState] = None,
        scheduler: Optional[Scheduler] = None,
        lock: Optional[threading.RLock] = None,
    ):
        self.clock_state = clock_state or ClockState()
        self._scheduler = scheduler or ThreadingScheduler()
        self._lock = lock or threading.RLock()
        self._pending: Optional[ScheduledCall] = None
        # Bumped on every schedule/cancel so a tick that already fired
        # before its cancellation cannot decrement the clock.
        self._generation = 0

    # ------------------------------------------------------------------
    # Core timer controls
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Start the countdown. No-op when already running or expired."""

        with self._lock:
            if self.clock_state.is_running:
                return
            if self.clock_state.remaining_seconds <= 0:
                log.debug("Clock expired; reset required before starting")
                return
            self.clock_state.is_running = True
            self._schedule_tick()

    def pause(self) -> None:
        """Pause the countdown, keeping the remaining time."""

        with self._lock:
            self.clock_state.is_running = False
            self._cancel_tick()

    def toggle(self) -> None:
        with self._lock:
            if self.clock_state.is_running:
                self.pause()
            else:
                self.start()

    def reset(self) -> None:
        """Stop the countdown and restore the full period length."""

        with self._lock:
            self.pause()
            self.clock_state.remaining_seconds = CLOCK_LENGTH_SECONDS

    def tick(self) -> None:
        """Advance the countdown by one second."""

        with self._lock:
            if not self.clock_state.is_running:
                return
            self.clock_state.remaining_seconds = max(0, self.clock_state.remaining_seconds - 1)
            if self.clock_state.remaining_seconds == 0:
                log.info("Countdown reached 00:00")
                self.pause()

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self.clock_state.is_running

    @property
    def remaining_seconds(self) -> int:
        return self.clock_state.remaining_seconds

    def display(self) -> str:
        """Return the remaining time as MM:SS."""
        return fmt_mmss(self.clock_state.remaining_seconds)

    def get_clock_data(self) -> dict:
        data = self.clock_state.to_json()
        data["display"] = self.display()
        return data

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _schedule_tick(self) -> None:
        self._cancel_tick()
        generation = self._generation

        def _on_tick() -> None:
            with self._lock:
                if generation != self._generation:
                    return
                self._pending = None
                self.tick()
                if self.clock_state.is_running:
                    self._schedule_tick()

        self._pending = self._scheduler.call_later(TICK_INTERVAL_SECONDS, _on_tick)

    def _cancel_tick(self) -> None:
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
