from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ActiveSession, AutoCloseSettings, TimeEntry


class ActiveSessionRepository(Protocol):
    def list_all(self) -> Sequence[ActiveSession]:
        raise NotImplementedError

    def get(self, worker_id: str) -> Optional[ActiveSession]:
        raise NotImplementedError

    def create_if_absent(self, session: ActiveSession) -> bool:
        """Insert the session unless the worker already has one (atomic)."""

        raise NotImplementedError

    def take(self, worker_id: str) -> Optional[ActiveSession]:
        """Atomically read and delete the worker's session.

        Of any number of concurrent callers, exactly one receives the session;
        the others get None. This is what keeps a session from closing into
        more than one time entry.
        """

        raise NotImplementedError

    def restore(self, session: ActiveSession) -> None:
        """Put back a session taken by a close that could not be persisted."""

        raise NotImplementedError


class TimeEntryRepository(Protocol):
    def append(self, entry: TimeEntry) -> str:
        """Persist a new entry and return its fresh unique id."""

        raise NotImplementedError

    def get(self, entry_id: str) -> Optional[TimeEntry]:
        raise NotImplementedError

    def list_all(self) -> Sequence[TimeEntry]:
        raise NotImplementedError

    def exists_for_worker_and_date(self, worker_id: str, date: str) -> bool:
        raise NotImplementedError

    def update(self, entry: TimeEntry) -> bool:
        raise NotImplementedError

    def delete(self, entry_id: str) -> bool:
        raise NotImplementedError


class SettingsRepository(Protocol):
    def get_auto_close(self) -> Optional[AutoCloseSettings]:
        raise NotImplementedError

    def save_auto_close(self, settings: AutoCloseSettings) -> None:
        raise NotImplementedError
