"""
MatchState model for the Fencing Scout application.

This module contains the MatchState dataclass which represents the complete
persisted state of a scouting session: scores, athlete names, zones, the
action log and the archived reports of finished matches.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from .action_log import ActionLog
from .log_entry import Athlete
from ..utils.constants import DEFAULT_ATHLETE_NAMES, DEFAULT_ZONE_ORDER, ZONES


@dataclass
class MatchState:
    """
    Represents the complete state of a scouting session.
    
    Attributes:
        score_a: Current score of athlete A
        score_b: Current score of athlete B
        athlete_a_name: Display name of athlete A
        athlete_b_name: Display name of athlete B
        active_zone: Zone new actions are tagged with
        zone_order: Current left-to-right order of the zones on the piste
        log: Append-only action log of the current match
        archived_reports: Report texts of finalized matches
        updated_at: ISO timestamp of the last persisted write
    """
    score_a: int = 0
    score_b: int = 0
    athlete_a_name: str = DEFAULT_ATHLETE_NAMES["A"]
    athlete_b_name: str = DEFAULT_ATHLETE_NAMES["B"]
    active_zone: str = DEFAULT_ZONE_ORDER[0]
    zone_order: List[str] = field(default_factory=lambda: list(DEFAULT_ZONE_ORDER))
    log: ActionLog = field(default_factory=ActionLog)
    archived_reports: List[str] = field(default_factory=list)
    updated_at: Optional[str] = None

    def score_of(self, athlete: Athlete) -> int:
        return self.score_a if athlete is Athlete.A else self.score_b

    def name_of(self, athlete: Athlete) -> str:
        return self.athlete_a_name if athlete is Athlete.A else self.athlete_b_name

    def to_json(self) -> dict:
        """
        Convert MatchState to JSON-serializable dictionary.
        
        Returns:
            Flat dictionary representation suitable for the document store
        """
        return {
            "scoreA": self.score_a,
            "scoreB": self.score_b,
            "athleteAName": self.athlete_a_name,
            "athleteBName": self.athlete_b_name,
            "activeZone": self.active_zone,
            "zoneOrder": list(self.zone_order),
            "log": self.log.to_json(),
            "archivedReports": list(self.archived_reports),
            "updatedAt": self.updated_at,
        }

    @staticmethod
    def from_json(data: dict) -> "MatchState":
        """
        Create MatchState from JSON dictionary.
        
        Missing fields fall back to their defaults so that snapshots written
        before archives and zone ordering existed still load.

        Args:
            data: Dictionary with match state data
            
        Returns:
            New MatchState instance
        """
        ms = MatchState()
        ms.score_a = max(0, int(data.get("scoreA") or 0))
        ms.score_b = max(0, int(data.get("scoreB") or 0))
        ms.athlete_a_name = data.get("athleteAName") or DEFAULT_ATHLETE_NAMES["A"]
        ms.athlete_b_name = data.get("athleteBName") or DEFAULT_ATHLETE_NAMES["B"]

        zone_order = data.get("zoneOrder") or []
        if sorted(zone_order) == sorted(ZONES) and len(zone_order) == len(ZONES):
            ms.zone_order = list(zone_order)
        else:
            ms.zone_order = list(DEFAULT_ZONE_ORDER)

        active_zone = data.get("activeZone")
        ms.active_zone = active_zone if active_zone in ms.zone_order else ms.zone_order[0]

        ms.log = ActionLog.from_json(data.get("log"))
        ms.archived_reports = [str(report) for report in (data.get("archivedReports") or [])]
        ms.updated_at = data.get("updatedAt")
        return ms

    def copy(self) -> "MatchState":
        return MatchState.from_json(self.to_json())
