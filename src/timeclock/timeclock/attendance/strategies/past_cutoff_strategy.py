from __future__ import annotations

from ...core.enums import EntryOrigin
from ..model import ActiveSession
from .base import CloseDecision, CloseStrategy


class PastCutoffStrategy(CloseStrategy):
    """Today's session once the cutoff has passed: closed at the current time."""

    def decide(self, *, session: ActiveSession, now_time: str, close_time: str) -> CloseDecision:
        return CloseDecision(
            should_close=True,
            check_out=now_time,
            origin=EntryOrigin.AUTO_CLOSED,
            note=f"Chiusura automatica (orario limite {close_time})",
            auto_close_time=close_time,
            roll_forward=False,
        )
