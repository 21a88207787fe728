"""
Persistence service for the Fencing Scout application.

This module handles saving and loading the match state to a document store
addressed by the application and user identity. Saves are debounced so a
burst of mutations results in a single write of the latest snapshot.
"""
import copy
import json
import os
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

import requests

from ..errors import PersistenceError
from ..models import MatchState
from ..utils import SAVE_DEBOUNCE_SECONDS, now_iso
from ..utils.constants import COLLECTION_NAME, DOCUMENT_NAME
from ..utils.logging_utils import get_logger
from .scheduler import ScheduledCall, Scheduler, ThreadingScheduler

log = get_logger("services.persistence")


@dataclass(frozen=True)
class SessionIdentity:
    """Application and user identifiers supplied by the session bootstrap."""

    app_id: str
    user_id: str

    def document_path(self) -> str:
        """Path of the match document for this identity."""
        return (
            f"artifacts/{self.app_id}/users/{self.user_id}/"
            f"{COLLECTION_NAME}/{DOCUMENT_NAME}"
        )


class DocumentStore(Protocol):
    """Abstract document store interface - supports DIP."""

    def load(self, path: str) -> Optional[dict]:
        """Return the stored document, or None when absent."""
        ...

    def save(self, path: str, document: dict) -> None:
        """Replace the stored document. Raises PersistenceError on failure."""
        ...


class JsonFileDocumentStore:
    """Document store keeping one JSON file per document path."""

    def __init__(self, base_dir: str = "data"):
        self.base_dir = base_dir

    def _file_path(self, path: str) -> str:
        parts = [part for part in path.split("/") if part and part not in (".", "..")]
        return os.path.join(self.base_dir, *parts) + ".json"

    def load(self, path: str) -> Optional[dict]:
        """
        Load a document from disk.
        
        Raises:
            PersistenceError: If the file exists but cannot be read or parsed
        """
        file_path = self._file_path(path)
        if not os.path.exists(file_path):
            return None

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Cannot read {file_path}: {e}") from e

    def save(self, path: str, document: dict) -> None:
        """
        Save a document to disk, creating directories as needed.
        
        Raises:
            PersistenceError: If the file cannot be written
        """
        file_path = self._file_path(path)
        directory = os.path.dirname(file_path)
        try:
            if directory and not os.path.exists(directory):
                os.makedirs(directory)
            with open(file_path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
        except OSError as e:
            raise PersistenceError(f"Cannot write {file_path}: {e}") from e


class HttpDocumentStore:
    """Document store backed by a REST document API (GET/PUT of JSON)."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def load(self, path: str) -> Optional[dict]:
        try:
            response = self.session.get(self._url(path), timeout=self.timeout)
            if response.status_code == 404:
                return None
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise PersistenceError(f"Cannot load {path}: {e}") from e

    def save(self, path: str, document: dict) -> None:
        try:
            response = self.session.put(self._url(path), json=document, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise PersistenceError(f"Cannot save {path}: {e}") from e


class DebouncedSaver:
    """
    Single-slot deferred writer.

    Each call to :meth:`schedule` replaces any pending write, so only the
    latest snapshot reaches the store once the quiet period has elapsed.
    """

    def __init__(
        self,
        write: Callable[[dict], None],
        scheduler: Optional[Scheduler] = None,
        delay: float = SAVE_DEBOUNCE_SECONDS,
    ):
        self._write = write
        self._scheduler = scheduler or ThreadingScheduler()
        self.delay = delay
        self._lock = threading.Lock()
        self._pending: Optional[ScheduledCall] = None
        self._pending_snapshot: Optional[dict] = None
        self._generation = 0

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def schedule(self, snapshot: dict) -> None:
        with self._lock:
            self._cancel_locked()
            generation = self._generation
            self._pending_snapshot = snapshot

            def _fire() -> None:
                with self._lock:
                    if generation != self._generation:
                        return
                    pending = self._pending_snapshot
                    self._pending = None
                    self._pending_snapshot = None
                if pending is not None:
                    self._write(pending)

            self._pending = self._scheduler.call_later(self.delay, _fire)

    def flush(self) -> None:
        """Write the pending snapshot immediately, if any."""
        with self._lock:
            pending = self._pending_snapshot
            self._cancel_locked()
        if pending is not None:
            self._write(pending)

    def cancel(self) -> None:
        with self._lock:
            self._cancel_locked()

    def _cancel_locked(self) -> None:
        self._generation += 1
        self._pending_snapshot = None
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None


class PersistenceService:
    """
    Service for persisting match state to a document store.
    
    Until an identity has been bound the service is "not ready" and every
    load or save is a no-op; the in-memory state stays authoritative.
    Store failures are logged and never propagated.
    """

    def __init__(
        self,
        store: DocumentStore,
        scheduler: Optional[Scheduler] = None,
        delay: float = SAVE_DEBOUNCE_SECONDS,
        on_saved: Optional[Callable[[str], None]] = None,
    ):
        self.store = store
        self.identity: Optional[SessionIdentity] = None
        self.on_saved = on_saved
        self._saver = DebouncedSaver(self._write, scheduler=scheduler, delay=delay)

    @property
    def is_ready(self) -> bool:
        return self.identity is not None

    def bind_identity(self, identity: SessionIdentity) -> None:
        """Mark persistence ready for the given identity."""
        self._saver.cancel()
        self.identity = identity
        log.info(f"Persistence ready for user {identity.user_id} of app {identity.app_id}")

    def load(self) -> Optional[MatchState]:
        """
        Load the stored match for the bound identity.
        
        Returns:
            The stored MatchState, or None when not ready, absent or unreadable
        """
        if self.identity is None:
            return None

        path = self.identity.document_path()
        try:
            data = self.store.load(path)
        except Exception as e:
            log.warning(f"Error loading match state, starting fresh: {e}")
            return None

        if not data:
            log.info(f"No saved match at {path}")
            return None

        try:
            return MatchState.from_json(data)
        except (TypeError, ValueError, AttributeError) as e:
            log.warning(f"Stored match at {path} is malformed, starting fresh: {e}")
            return None

    def schedule_save(self, match_state: MatchState) -> None:
        """Queue a debounced write of an immutable snapshot of ``match_state``."""
        if self.identity is None:
            return
        self._saver.schedule(copy.deepcopy(match_state.to_json()))

    def flush(self) -> None:
        self._saver.flush()

    @property
    def has_pending_save(self) -> bool:
        return self._saver.has_pending

    def _write(self, snapshot: dict) -> None:
        identity = self.identity
        if identity is None:
            return

        snapshot["updatedAt"] = now_iso()
        path = identity.document_path()
        try:
            self.store.save(path, snapshot)
        except Exception as e:
            log.error(f"Error saving match state: {e}")
            return

        log.debug(f"Saved match state to {path}")
        if self.on_saved is not None:
            self.on_saved(snapshot["updatedAt"])
