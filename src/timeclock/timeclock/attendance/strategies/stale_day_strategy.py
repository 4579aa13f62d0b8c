from __future__ import annotations

from ...core.enums import EntryOrigin
from ..model import ActiveSession
from .base import CloseDecision, CloseStrategy


class StaleDayStrategy(CloseStrategy):
    """Session left open on an earlier day: closed at the cutoff on its own date."""

    def decide(self, *, session: ActiveSession, now_time: str, close_time: str) -> CloseDecision:
        return CloseDecision(
            should_close=True,
            check_out=f"{close_time}:00",
            origin=EntryOrigin.AUTO_CLOSED,
            note=f"Chiusura automatica alle {close_time} (sessione del {session.date} non chiusa)",
            auto_close_time=close_time,
        )
