from __future__ import annotations

from enum import Enum


class EntryOrigin(str, Enum):
    """How a time entry came to exist."""

    NORMAL = "NORMAL"
    AUTO_CLOSED = "AUTO_CLOSED"
    MANUAL_ENTRY = "MANUAL_ENTRY"
    ADMIN_EDITED = "ADMIN_EDITED"
    FORCE_CLOSED = "FORCE_CLOSED"


class ResultKind(str, Enum):
    """Machine-readable outcome kind returned next to the status message."""

    OK = "OK"
    VALIDATION = "VALIDATION"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    INVALID_TIME_RANGE = "INVALID_TIME_RANGE"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_ACTIVE = "ALREADY_ACTIVE"
    NO_SESSION = "NO_SESSION"


class StoreBackend(str, Enum):
    MYSQL = "mysql"
    MEMORY = "memory"
