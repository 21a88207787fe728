"""Plain-text scouting report generation."""

from typing import Iterable, List

from ..models import Athlete, LogEntry, MatchState
from ..utils.constants import REPORT_FOOTER, REPORT_HEADER


class ReportService:
    """
    Render a match as the plain-text transcript users copy and share.

    The line format is a compatibility contract with previously archived
    reports and must not change.
    """

    def generate(self, match_state: MatchState) -> str:
        """Return the scouting report for the match currently in ``match_state``."""

        header = REPORT_HEADER.format(
            name_a=match_state.athlete_a_name,
            name_b=match_state.athlete_b_name,
        )
        # The body is one block, so an empty log leaves a blank line.
        body = "\n".join(self.format_entries(match_state.log, match_state))
        return "\n".join([header, body, REPORT_FOOTER])

    def format_entries(self, entries: Iterable[LogEntry], match_state: MatchState) -> List[str]:
        return [self.format_entry(entry, match_state) for entry in entries]

    @staticmethod
    def format_entry(entry: LogEntry, match_state: MatchState) -> str:
        # Point lines use the current display name, even after a rename.
        if entry.point_for is Athlete.A:
            return f"Point for {match_state.athlete_a_name}"
        if entry.point_for is Athlete.B:
            return f"Point for {match_state.athlete_b_name}"
        return f"{entry.score_a}:{entry.score_b} - {entry.zone} - {entry.action}"
