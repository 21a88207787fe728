"""
LogEntry model for the Fencing Scout application.

A log entry records one action taken during the bout, the zone it happened
in and the score pair at the moment it was recorded.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..utils.constants import POINT_LABELS


class Athlete(str, Enum):
    """One of the two athletes on the piste."""

    A = "A"
    B = "B"

    @property
    def point_label(self) -> str:
        """Synthetic log label written when this athlete scores."""
        return POINT_LABELS[self.value]

    @staticmethod
    def parse(value: Union[str, "Athlete"]) -> "Athlete":
        """
        Convert user input into an :class:`Athlete`.

        Raises:
            ValueError: If the value does not name athlete A or B
        """
        if isinstance(value, Athlete):
            return value
        try:
            return Athlete(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown athlete: {value!r}") from None


@dataclass(frozen=True)
class LogEntry:
    """
    A single recorded event.

    Attributes:
        id: 1-based position in the log, assigned on append
        action: Tactical action or synthetic point label
        zone: Zone active when the event was recorded
        score_a: Score of athlete A when the event was recorded
        score_b: Score of athlete B when the event was recorded
        point_for: Athlete who scored, or None for a tactical action
    """
    id: int
    action: str
    zone: str
    score_a: int
    score_b: int
    point_for: Optional[Athlete] = None

    @property
    def is_point(self) -> bool:
        return self.point_for is not None

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "action": self.action,
            "zone": self.zone,
            "scoreA": self.score_a,
            "scoreB": self.score_b,
            "pointFor": self.point_for.value if self.point_for else None,
        }

    @staticmethod
    def from_json(data: dict, position: int = 0) -> "LogEntry":
        """
        Create a LogEntry from its stored dictionary.

        Older snapshots have no ``pointFor`` key; their point entries are
        recognised by the exact synthetic label. A missing or null id
        falls back to ``position``, the entry's 1-based place in the log.
        """
        action = str(data.get("action", ""))
        raw_id = data.get("id")
        raw_point = data.get("pointFor")
        if raw_point:
            point_for: Optional[Athlete] = Athlete.parse(raw_point)
        elif "pointFor" not in data:
            point_for = next(
                (athlete for athlete in Athlete if athlete.point_label == action),
                None,
            )
        else:
            point_for = None

        return LogEntry(
            id=int(raw_id) if raw_id is not None else position,
            action=action,
            zone=str(data.get("zone", "")),
            score_a=int(data.get("scoreA", 0) or 0),
            score_b=int(data.get("scoreB", 0) or 0),
            point_for=point_for,
        )
