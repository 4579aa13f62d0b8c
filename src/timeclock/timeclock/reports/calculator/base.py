from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...attendance.model import TimeEntry
from ...workers.model import Worker


class EarningsCalculator(ABC):
    """Calculator interface (Strategy Pattern for pay)."""

    @abstractmethod
    def earnings(self, entry: TimeEntry, worker: Optional[Worker]) -> float:
        raise NotImplementedError
