from __future__ import annotations

from ...core.enums import EntryOrigin
from ..model import ActiveSession
from .base import CloseDecision, CloseStrategy


class ForceCloseStrategy(CloseStrategy):
    """Administrative close of any session, whatever its date or the settings."""

    def __init__(self, explicit_time: bool = False):
        self._explicit_time = explicit_time

    def decide(self, *, session: ActiveSession, now_time: str, close_time: str) -> CloseDecision:
        check_out = f"{close_time}:00" if self._explicit_time else now_time
        return CloseDecision(
            should_close=True,
            check_out=check_out,
            origin=EntryOrigin.FORCE_CLOSED,
            note=f"Chiusura forzata dall'amministratore alle {check_out[:5]}",
        )
