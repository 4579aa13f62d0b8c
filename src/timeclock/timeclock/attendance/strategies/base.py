from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import EntryOrigin
from ..model import ActiveSession


@dataclass(frozen=True)
class CloseDecision:
    should_close: bool
    check_out: Optional[str] = None
    origin: EntryOrigin = EntryOrigin.AUTO_CLOSED
    note: Optional[str] = None
    auto_close_time: Optional[str] = None
    # A check_out at or before check_in is read on the following day.
    roll_forward: bool = True


class CloseStrategy(ABC):
    """Strategy Pattern: encapsulate whether and when an open session is closed."""

    @abstractmethod
    def decide(self, *, session: ActiveSession, now_time: str, close_time: str) -> CloseDecision:
        """now_time is HH:MM:SS in the fixed zone; close_time is HH:MM."""
        raise NotImplementedError
