"""
Match session service for the Fencing Scout application.

This module ties the score tracker, zone selector, action log, clock and
persistence together. Every public operation runs under a single lock, so
API requests and clock ticks are serialized.
"""
import threading
from typing import List, Optional, Union

from ..errors import ArchiveFullError, EmptyLogError
from ..models import AnalysisReport, Athlete, ClockState, LogEntry, MatchState
from ..utils import DEFAULT_ATHLETE_NAMES, MAX_ARCHIVED_REPORTS
from ..utils.logging_utils import get_logger
from .analytics_service import AnalyticsService
from .persistence_service import PersistenceService, SessionIdentity
from .report_service import ReportService
from .scheduler import Scheduler
from .score_service import ScoreService
from .timer_service import TimerService
from .zone_service import ZoneService

log = get_logger("services.match")


class MatchService:
    """
    Owns the live :class:`MatchState` and applies user actions to it.
    
    Mutations of persisted fields schedule a debounced save; the clock is
    not persisted.
    """

    def __init__(
        self,
        match_state: Optional[MatchState] = None,
        persistence_service: Optional[PersistenceService] = None,
        scheduler: Optional[Scheduler] = None,
        report_service: Optional[ReportService] = None,
        analytics_service: Optional[AnalyticsService] = None,
    ):
        self._lock = threading.RLock()
        self.match_state = match_state or MatchState()
        self.persistence_service = persistence_service
        if self.persistence_service is not None and self.persistence_service.on_saved is None:
            self.persistence_service.on_saved = self._on_saved
        self.timer_service = TimerService(ClockState(), scheduler=scheduler, lock=self._lock)
        self.report_service = report_service or ReportService()
        self.analytics_service = analytics_service or AnalyticsService()
        self._reset_services()

    def _reset_services(self) -> None:
        """Rebuild the state-bound services after the state object changes."""
        self.score_service = ScoreService(self.match_state)
        self.zone_service = ZoneService(self.match_state)

    # ------------------------------------------------------------------
    # Session bootstrap
    # ------------------------------------------------------------------
    def bind_identity(self, identity: SessionIdentity) -> bool:
        """
        Attach the user identity and load any previously saved match.

        Returns:
            True if a saved match replaced the local state
        """
        if self.persistence_service is None:
            return False

        self.persistence_service.bind_identity(identity)
        loaded = self.persistence_service.load()
        with self._lock:
            if loaded is None:
                return False
            self.match_state = loaded
            self._reset_services()
            log.info(f"Restored match with {len(loaded.log)} logged actions")
            return True

    @property
    def is_persistence_ready(self) -> bool:
        return self.persistence_service is not None and self.persistence_service.is_ready

    # ------------------------------------------------------------------
    # Scores and actions
    # ------------------------------------------------------------------
    def adjust_score(self, athlete: Union[Athlete, str], delta: int) -> int:
        with self._lock:
            score = self.score_service.adjust(athlete, delta)
            self._changed()
            return score

    def record_action(self, action: str) -> LogEntry:
        """Log a tactical action against the active zone and current score."""
        if not action or not str(action).strip():
            raise ValueError("Action label is required")
        with self._lock:
            state = self.match_state
            entry = state.log.append(str(action).strip(), state.active_zone, state.score_a, state.score_b)
            self._changed()
            return entry

    def record_point(self, athlete: Union[Athlete, str]) -> LogEntry:
        """
        Score a point for ``athlete``.

        The clock is stopped first. The log entry keeps the score from
        before the point, then the athlete's score is incremented.
        """
        athlete = Athlete.parse(athlete)
        with self._lock:
            if self.timer_service.is_running:
                self.timer_service.pause()
            state = self.match_state
            entry = state.log.append(
                athlete.point_label,
                state.active_zone,
                state.score_a,
                state.score_b,
                point_for=athlete,
            )
            self.score_service.adjust(athlete, 1)
            self._changed()
            return entry

    def get_log(self) -> List[LogEntry]:
        with self._lock:
            return list(self.match_state.log.all())

    # ------------------------------------------------------------------
    # Zones and athletes
    # ------------------------------------------------------------------
    def set_active_zone(self, zone: str) -> None:
        with self._lock:
            self.zone_service.set_active(zone)
            self._changed()

    def invert_zones(self) -> List[str]:
        with self._lock:
            self.zone_service.invert()
            self._changed()
            return list(self.match_state.zone_order)

    def rename_athlete(self, athlete: Union[Athlete, str], name: Optional[str]) -> str:
        """
        Set an athlete's display name; blank names restore the default.

        Raises:
            ValueError: If the athlete is unknown or the name is not text
        """
        athlete = Athlete.parse(athlete)
        if name is not None and not isinstance(name, str):
            raise ValueError("Athlete name must be text")
        cleaned = (name or "").strip() or DEFAULT_ATHLETE_NAMES[athlete.value]
        with self._lock:
            if athlete is Athlete.A:
                self.match_state.athlete_a_name = cleaned
            else:
                self.match_state.athlete_b_name = cleaned
            self._changed()
            return cleaned

    # ------------------------------------------------------------------
    # Clock
    # ------------------------------------------------------------------
    def start_clock(self) -> None:
        self.timer_service.start()

    def pause_clock(self) -> None:
        self.timer_service.pause()

    def toggle_clock(self) -> None:
        self.timer_service.toggle()

    def reset_clock(self) -> None:
        self.timer_service.reset()

    # ------------------------------------------------------------------
    # Reports and analysis
    # ------------------------------------------------------------------
    def generate_report(self) -> str:
        with self._lock:
            return self.report_service.generate(self.match_state)

    def analyze(self) -> AnalysisReport:
        with self._lock:
            return self.analytics_service.analyze(self.match_state.log)

    def export_analysis_csv(self) -> str:
        with self._lock:
            return self.analytics_service.export_analysis_csv(self.match_state.log)

    # ------------------------------------------------------------------
    # Archive and reset
    # ------------------------------------------------------------------
    def finalize_and_advance(self) -> str:
        """
        Archive the current match report and start the next match.

        Scores, log and active zone are reset and the clock is stopped;
        athlete names and the zone order carry over.

        Returns:
            The archived report text

        Raises:
            EmptyLogError: If no action has been recorded
            ArchiveFullError: If every archive slot is already used
        """
        with self._lock:
            state = self.match_state
            if not state.log:
                raise EmptyLogError()
            if len(state.archived_reports) >= MAX_ARCHIVED_REPORTS:
                raise ArchiveFullError(MAX_ARCHIVED_REPORTS)

            report = self.report_service.generate(state)
            state.archived_reports.append(report)

            self.score_service.reset()
            state.log.clear()
            self.zone_service.reset_active()
            self.timer_service.reset()
            self._changed()
            log.info(f"Archived match {len(state.archived_reports)} of {MAX_ARCHIVED_REPORTS}")
            return report

    def full_reset(self) -> None:
        """Discard everything: scores, names, log, zone order, archive and clock."""
        with self._lock:
            state = self.match_state
            self.score_service.reset()
            state.athlete_a_name = DEFAULT_ATHLETE_NAMES["A"]
            state.athlete_b_name = DEFAULT_ATHLETE_NAMES["B"]
            state.log.clear()
            self.zone_service.reset_order()
            self.zone_service.reset_active()
            state.archived_reports.clear()
            self.timer_service.reset()
            self._changed()
            log.info("Match session reset to defaults")

    def get_archived_reports(self) -> List[str]:
        with self._lock:
            return list(self.match_state.archived_reports)

    def archived_report(self, index: int) -> str:
        """
        Return one archived report.

        Raises:
            IndexError: If no report is stored in that slot
        """
        with self._lock:
            reports = self.match_state.archived_reports
            if index < 0 or index >= len(reports):
                raise IndexError(f"No archived match in slot {index + 1}")
            return reports[index]

    def shutdown(self) -> None:
        """Stop the clock and write any save still waiting in the debounce window."""
        self.timer_service.pause()
        if self.persistence_service is not None:
            self.persistence_service.flush()

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------
    def get_state_data(self) -> dict:
        """Current session as a JSON-ready dictionary for the UI."""
        with self._lock:
            state = self.match_state
            return {
                "scores": self.score_service.get_scores(),
                "athletes": {"A": state.athlete_a_name, "B": state.athlete_b_name},
                "zones": self.zone_service.get_zone_data(),
                "clock": self.timer_service.get_clock_data(),
                "log_size": len(state.log),
                "archived_count": len(state.archived_reports),
                "archive_capacity": MAX_ARCHIVED_REPORTS,
                "persistence_ready": self.is_persistence_ready,
                "updated_at": state.updated_at,
            }

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _changed(self) -> None:
        if self.persistence_service is not None:
            self.persistence_service.schedule_save(self.match_state)

    def _on_saved(self, updated_at: str) -> None:
        with self._lock:
            self.match_state.updated_at = updated_at
