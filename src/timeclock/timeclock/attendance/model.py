from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import DEFAULT_AUTO_CLOSE_ENABLED, DEFAULT_AUTO_CLOSE_TIME
from ..core.enums import EntryOrigin, ResultKind


@dataclass(frozen=True)
class ActiveSession:
    """Open attendance session; at most one per worker.

    worker_name is captured at check-in and never re-resolved.
    """

    worker_id: str
    worker_name: str
    check_in: str
    date: str

    def to_dict(self) -> dict:
        return {
            "worker_id": self.worker_id,
            "worker_name": self.worker_name,
            "check_in": self.check_in,
            "date": self.date,
        }


@dataclass(frozen=True)
class TimeEntry:
    """Finalized attendance record of one worker for one business day."""

    worker_id: str
    worker_name: str
    date: str
    check_in: str
    check_out: Optional[str]
    hours_worked: float
    origin: EntryOrigin = EntryOrigin.NORMAL
    notes: Optional[str] = None
    auto_close_time: Optional[str] = None
    entry_id: Optional[str] = None

    @property
    def is_auto_close(self) -> bool:
        return self.origin == EntryOrigin.AUTO_CLOSED

    @property
    def is_manual_entry(self) -> bool:
        return self.origin == EntryOrigin.MANUAL_ENTRY

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "worker_id": self.worker_id,
            "worker_name": self.worker_name,
            "date": self.date,
            "check_in": self.check_in,
            "check_out": self.check_out,
            "hours_worked": self.hours_worked,
            "origin": self.origin.value,
            "is_auto_close": self.is_auto_close,
            "is_manual_entry": self.is_manual_entry,
            "notes": self.notes,
            "auto_close_time": self.auto_close_time,
        }


@dataclass(frozen=True)
class AutoCloseSettings:
    time: str = DEFAULT_AUTO_CLOSE_TIME
    enabled: bool = DEFAULT_AUTO_CLOSE_ENABLED

    def to_dict(self) -> dict:
        return {"time": self.time, "enabled": self.enabled}


@dataclass(frozen=True)
class SessionResult:
    """Outcome of an engine operation, shown to the user as-is."""

    success: bool
    message: str
    kind: ResultKind = ResultKind.OK
    entry_id: Optional[str] = None

    @classmethod
    def ok(cls, message: str, *, entry_id: Optional[str] = None) -> "SessionResult":
        return cls(success=True, message=message, kind=ResultKind.OK, entry_id=entry_id)

    @classmethod
    def fail(cls, kind: ResultKind, message: str) -> "SessionResult":
        return cls(success=False, message=message, kind=kind)

    def to_dict(self) -> dict:
        return {"success": self.success, "message": self.message, "kind": self.kind.value, "entry_id": self.entry_id}


@dataclass(frozen=True)
class SweepResult:
    """Outcome of an auto-close or force-close pass."""

    closed: int
    message: str
    failed: int = 0
    entry_ids: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "closed": self.closed,
            "message": self.message,
            "failed": self.failed,
            "entry_ids": list(self.entry_ids),
        }
