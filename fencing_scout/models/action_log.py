"""
ActionLog model for the Fencing Scout application.

The action log is the ordered, append-only record of everything that
happened during the current bout.
"""
from typing import Iterator, List, Optional, Tuple

from .log_entry import Athlete, LogEntry
from ..errors import InvalidZoneError
from ..utils.constants import ZONES


class ActionLog:
    """Ordered sequence of :class:`LogEntry` with sequential 1-based ids."""

    def __init__(self, entries: Optional[List[LogEntry]] = None):
        self._entries: List[LogEntry] = list(entries or [])

    def append(
        self,
        action: str,
        zone: str,
        score_a: int,
        score_b: int,
        point_for: Optional[Athlete] = None,
    ) -> LogEntry:
        """
        Record a new entry at the end of the log.

        Args:
            action: Tactical action or synthetic point label
            zone: Zone active when the action happened
            score_a: Score snapshot for athlete A
            score_b: Score snapshot for athlete B
            point_for: Athlete who scored, for point entries

        Returns:
            The appended entry

        Raises:
            InvalidZoneError: If the zone is not one of the fixed zones
            ValueError: If a score snapshot is negative
        """
        if zone not in ZONES:
            raise InvalidZoneError(zone)
        if score_a < 0 or score_b < 0:
            raise ValueError("Score snapshot cannot be negative")

        previous_id = max((e.id for e in self._entries), default=0)
        entry = LogEntry(
            id=previous_id + 1,
            action=action,
            zone=zone,
            score_a=int(score_a),
            score_b=int(score_b),
            point_for=point_for,
        )
        self._entries.append(entry)
        return entry

    def all(self) -> Tuple[LogEntry, ...]:
        """Return every entry in chronological order."""
        return tuple(self._entries)

    def last(self) -> Optional[LogEntry]:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    def copy(self) -> "ActionLog":
        return ActionLog(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(tuple(self._entries))

    def __bool__(self) -> bool:
        return bool(self._entries)

    def to_json(self) -> List[dict]:
        return [entry.to_json() for entry in self._entries]

    @staticmethod
    def from_json(data: Optional[list]) -> "ActionLog":
        return ActionLog([
            LogEntry.from_json(item, position=index)
            for index, item in enumerate(data or [], start=1)
        ])
