from __future__ import annotations

from typing import Optional

from ...attendance.model import TimeEntry
from ...workers.model import Worker
from .base import EarningsCalculator


class HourlyEarningsCalculator(EarningsCalculator):
    """Standard rule: hours_worked x hourly_rate; 0 when the worker no longer exists."""

    def earnings(self, entry: TimeEntry, worker: Optional[Worker]) -> float:
        if worker is None:
            return 0.0
        return round(max(entry.hours_worked, 0.0) * (worker.hourly_rate or 0.0), 2)
