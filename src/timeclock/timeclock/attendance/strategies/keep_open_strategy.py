from __future__ import annotations

from ..model import ActiveSession
from .base import CloseDecision, CloseStrategy


class KeepOpenStrategy(CloseStrategy):
    """Today's session before the cutoff."""

    def decide(self, *, session: ActiveSession, now_time: str, close_time: str) -> CloseDecision:
        return CloseDecision(should_close=False)
