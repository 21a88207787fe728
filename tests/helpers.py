"""Test doubles for the scheduler and the document store."""
from typing import Callable, Dict, List, Optional

from fencing_scout.errors import PersistenceError


class ManualCall:
    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose clock only moves when the test advances it."""

    def __init__(self) -> None:
        self.now = 0.0
        self.calls: List[ManualCall] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualCall:
        call = ManualCall(self.now + delay, callback)
        self.calls.append(call)
        return call

    @property
    def pending(self) -> List[ManualCall]:
        return [call for call in self.calls if not call.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [call for call in self.pending if call.due <= target]
            if not due:
                break
            call = min(due, key=lambda c: c.due)
            self.calls.remove(call)
            self.now = call.due
            call.callback()
        self.now = target


class InMemoryDocumentStore:
    """Document store keeping documents in a dict, with failure switches."""

    def __init__(self, documents: Optional[Dict[str, dict]] = None):
        self.documents: Dict[str, dict] = dict(documents or {})
        self.saves: List[dict] = []
        self.fail_load = False
        self.fail_save = False

    def load(self, path: str) -> Optional[dict]:
        if self.fail_load:
            raise PersistenceError("store unavailable")
        return self.documents.get(path)

    def save(self, path: str, document: dict) -> None:
        if self.fail_save:
            raise PersistenceError("store unavailable")
        self.documents[path] = document
        self.saves.append(document)
