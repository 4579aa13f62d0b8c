from __future__ import annotations

from datetime import datetime

import pytest

from src.timeclock.timeclock.attendance.memory_repository import InMemoryAttendanceStore
from src.timeclock.timeclock.attendance.service import AttendanceService
from src.timeclock.timeclock.common.datetime_utils import ZoneClock
from src.timeclock.timeclock.workers.memory_worker_repository import InMemoryWorkerRepository
from src.timeclock.timeclock.workers.model import Worker


@pytest.fixture
def fixed_now() -> datetime:
    # Naive datetimes are read as Europe/Rome local time.
    return datetime(2024, 3, 1, 9, 0, 0)


@pytest.fixture
def clock() -> ZoneClock:
    return ZoneClock("Europe/Rome")


@pytest.fixture
def workers_repo() -> InMemoryWorkerRepository:
    return InMemoryWorkerRepository(
        [
            Worker(worker_id="w1", name="Mario Rossi", hourly_rate=12.5),
            Worker(worker_id="w2", name="Giulia Bianchi", hourly_rate=10.0),
        ]
    )


@pytest.fixture
def store() -> InMemoryAttendanceStore:
    return InMemoryAttendanceStore()


@pytest.fixture
def service(store, workers_repo, clock) -> AttendanceService:
    return AttendanceService(store.sessions, store.entries, store.settings, workers_repo, clock=clock)
