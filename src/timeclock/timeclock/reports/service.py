from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional, Sequence

from ..attendance.model import TimeEntry
from ..attendance.repository import TimeEntryRepository
from ..common.datetime_utils import month_key
from ..workers.repository import WorkerRepository
from .calculator.base import EarningsCalculator
from .calculator.hourly_calculator import HourlyEarningsCalculator


@dataclass(frozen=True)
class WorkerSummary:
    worker_id: str
    worker_name: str
    hourly_rate: float
    total_hours: float
    total_days: int
    total_entries: int
    avg_hours_per_day: float
    total_earnings: float

    def to_dict(self) -> dict:
        return {
            "worker_id": self.worker_id,
            "worker_name": self.worker_name,
            "hourly_rate": self.hourly_rate,
            "total_hours": self.total_hours,
            "total_days": self.total_days,
            "total_entries": self.total_entries,
            "avg_hours_per_day": self.avg_hours_per_day,
            "total_earnings": self.total_earnings,
        }


@dataclass(frozen=True)
class ReportSummary:
    workers: list[WorkerSummary]
    total_hours: float
    total_earnings: float

    def to_dict(self) -> dict:
        return {
            "workers": [w.to_dict() for w in self.workers],
            "total_hours": self.total_hours,
            "total_earnings": self.total_earnings,
        }


def _sort_desc(entries: Sequence[TimeEntry]) -> list[TimeEntry]:
    return sorted(entries, key=lambda e: e.date, reverse=True)


class ReportService:
    """Read-side queries over finalized time entries."""

    def __init__(
        self,
        entries: TimeEntryRepository,
        workers: WorkerRepository,
        *,
        calculator: Optional[EarningsCalculator] = None,
    ):
        self._entries = entries
        self._workers = workers
        self._calculator = calculator or HourlyEarningsCalculator()

    def get_time_entries(
        self,
        start: Optional[str] = None,
        end: Optional[str] = None,
        worker_id: Optional[str] = None,
    ) -> list[TimeEntry]:
        entries = list(self._entries.list_all())

        # The range applies only when both bounds are given.
        if start and end:
            entries = [e for e in entries if start <= e.date <= end]
        if worker_id:
            entries = [e for e in entries if e.worker_id == str(worker_id)]

        return _sort_desc(entries)

    def get_time_entries_grouped_by_month(self, worker_id: Optional[str] = None) -> "OrderedDict[str, list[TimeEntry]]":
        entries = self.get_time_entries(worker_id=worker_id)

        buckets: dict[str, list[TimeEntry]] = {}
        for e in entries:
            buckets.setdefault(month_key(e.date), []).append(e)

        def _recency(key: str) -> tuple[int, int]:
            month, year = key.split(".")
            return int(year), int(month)

        grouped: OrderedDict[str, list[TimeEntry]] = OrderedDict()
        for key in sorted(buckets, key=_recency, reverse=True):
            grouped[key] = _sort_desc(buckets[key])
        return grouped

    def build_summary(
        self,
        *,
        start: Optional[str] = None,
        end: Optional[str] = None,
        worker_id: Optional[str] = None,
    ) -> ReportSummary:
        entries = self.get_time_entries(start, end, worker_id)
        workers = {w.worker_id: w for w in self._workers.list_all()}

        by_worker: dict[str, list[TimeEntry]] = {}
        for e in entries:
            by_worker.setdefault(e.worker_id, []).append(e)

        summaries: list[WorkerSummary] = []
        for wid, items in by_worker.items():
            worker = workers.get(wid)
            total_hours = round(sum(e.hours_worked for e in items), 2)
            if total_hours <= 0:
                continue
            days = len({e.date for e in items})
            summaries.append(
                WorkerSummary(
                    worker_id=wid,
                    # Orphaned entries keep the name captured when they were written.
                    worker_name=worker.name if worker else items[0].worker_name,
                    hourly_rate=worker.hourly_rate if worker else 0.0,
                    total_hours=total_hours,
                    total_days=days,
                    total_entries=len(items),
                    avg_hours_per_day=round(total_hours / days, 2) if days else 0.0,
                    total_earnings=round(sum(self._calculator.earnings(e, worker) for e in items), 2),
                )
            )

        summaries.sort(key=lambda s: s.total_hours, reverse=True)
        return ReportSummary(
            workers=summaries,
            total_hours=round(sum(s.total_hours for s in summaries), 2),
            total_earnings=round(sum(s.total_earnings for s in summaries), 2),
        )
