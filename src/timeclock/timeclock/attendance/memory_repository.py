from __future__ import annotations

import threading
from dataclasses import replace
from typing import Optional, Sequence

from .model import ActiveSession, AutoCloseSettings, TimeEntry
from .repository import ActiveSessionRepository, SettingsRepository, TimeEntryRepository


class InMemoryActiveSessionRepository(ActiveSessionRepository):
    def __init__(self, lock: threading.Lock):
        self._lock = lock
        self._sessions: dict[str, ActiveSession] = {}

    def list_all(self) -> Sequence[ActiveSession]:
        with self._lock:
            return list(self._sessions.values())

    def get(self, worker_id: str) -> Optional[ActiveSession]:
        with self._lock:
            return self._sessions.get(str(worker_id))

    def create_if_absent(self, session: ActiveSession) -> bool:
        with self._lock:
            if session.worker_id in self._sessions:
                return False
            self._sessions[session.worker_id] = session
            return True

    def take(self, worker_id: str) -> Optional[ActiveSession]:
        with self._lock:
            return self._sessions.pop(str(worker_id), None)

    def restore(self, session: ActiveSession) -> None:
        with self._lock:
            self._sessions.setdefault(session.worker_id, session)


class InMemoryTimeEntryRepository(TimeEntryRepository):
    """Entries keyed by id, plus an index on (worker_id, date)."""

    def __init__(self, lock: threading.Lock):
        self._lock = lock
        self._entries: dict[str, TimeEntry] = {}
        self._by_worker_date: dict[tuple[str, str], set[str]] = {}
        self._next_id = 0

    def _index_add(self, entry: TimeEntry) -> None:
        self._by_worker_date.setdefault((entry.worker_id, entry.date), set()).add(entry.entry_id)

    def _index_remove(self, entry: TimeEntry) -> None:
        key = (entry.worker_id, entry.date)
        ids = self._by_worker_date.get(key)
        if ids is None:
            return
        ids.discard(entry.entry_id)
        if not ids:
            del self._by_worker_date[key]

    def append(self, entry: TimeEntry) -> str:
        with self._lock:
            self._next_id += 1
            entry_id = str(self._next_id)
            stored = replace(entry, entry_id=entry_id)
            self._entries[entry_id] = stored
            self._index_add(stored)
            return entry_id

    def get(self, entry_id: str) -> Optional[TimeEntry]:
        with self._lock:
            return self._entries.get(str(entry_id))

    def list_all(self) -> Sequence[TimeEntry]:
        with self._lock:
            return list(self._entries.values())

    def exists_for_worker_and_date(self, worker_id: str, date: str) -> bool:
        with self._lock:
            return bool(self._by_worker_date.get((str(worker_id), date)))

    def update(self, entry: TimeEntry) -> bool:
        with self._lock:
            current = self._entries.get(str(entry.entry_id))
            if current is None:
                return False
            self._index_remove(current)
            self._entries[current.entry_id] = entry
            self._index_add(entry)
            return True

    def delete(self, entry_id: str) -> bool:
        with self._lock:
            current = self._entries.pop(str(entry_id), None)
            if current is None:
                return False
            self._index_remove(current)
            return True


class InMemorySettingsRepository(SettingsRepository):
    def __init__(self, lock: threading.Lock):
        self._lock = lock
        self._auto_close: Optional[AutoCloseSettings] = None

    def get_auto_close(self) -> Optional[AutoCloseSettings]:
        with self._lock:
            return self._auto_close

    def save_auto_close(self, settings: AutoCloseSettings) -> None:
        with self._lock:
            self._auto_close = settings


class InMemoryAttendanceStore:
    """Process-local attendance store (development and tests).

    One lock serializes every read-modify-write across the three
    collections, so `take` and `create_if_absent` are atomic per worker.
    """

    def __init__(self):
        lock = threading.Lock()
        self.sessions = InMemoryActiveSessionRepository(lock)
        self.entries = InMemoryTimeEntryRepository(lock)
        self.settings = InMemorySettingsRepository(lock)
