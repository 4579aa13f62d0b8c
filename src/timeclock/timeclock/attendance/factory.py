from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import minutes_of_day
from .model import ActiveSession
from .strategies.base import CloseStrategy
from .strategies.force_close_strategy import ForceCloseStrategy
from .strategies.keep_open_strategy import KeepOpenStrategy
from .strategies.past_cutoff_strategy import PastCutoffStrategy
from .strategies.stale_day_strategy import StaleDayStrategy


@dataclass
class CloseStrategyFactory:
    """Factory Pattern: choose the close strategy for an open session."""

    def for_sweep(self, *, session: ActiveSession, today: str, now_time: str, close_time: str) -> CloseStrategy:
        # ISO dates: string order is calendar order.
        if session.date < today:
            return StaleDayStrategy()
        if session.date == today and minutes_of_day(now_time) >= minutes_of_day(close_time):
            return PastCutoffStrategy()
        return KeepOpenStrategy()

    def for_force_close(self, *, close_time: Optional[str]) -> CloseStrategy:
        return ForceCloseStrategy(explicit_time=close_time is not None)
