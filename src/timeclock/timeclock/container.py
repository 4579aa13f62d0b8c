from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import CloseStrategyFactory
from .attendance.memory_repository import InMemoryAttendanceStore
from .attendance.mysql_attendance_repository import (
    MySQLActiveSessionRepository,
    MySQLSettingsRepository,
    MySQLTimeEntryRepository,
)
from .attendance.model import AutoCloseSettings
from .attendance.repository import ActiveSessionRepository, SettingsRepository, TimeEntryRepository
from .attendance.service import AttendanceService
from .auth.service import AuthService
from .common.datetime_utils import ZoneClock
from .core.constants import DEFAULT_AUTO_CLOSE_ENABLED, DEFAULT_AUTO_CLOSE_TIME, DEFAULT_TIMEZONE
from .core.enums import StoreBackend
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import ReportService
from .scheduling.scheduler import AutoCloseScheduler, SchedulerConfig
from .workers.memory_worker_repository import InMemoryWorkerRepository
from .workers.mysql_worker_repository import MySQLWorkerRepository
from .workers.repository import WorkerRepository
from .workers.service import WorkerService


@dataclass(frozen=True)
class Container:
    clock: ZoneClock

    workers_repo: WorkerRepository
    sessions_repo: ActiveSessionRepository
    entries_repo: TimeEntryRepository
    settings_repo: SettingsRepository

    auth_service: AuthService
    worker_service: WorkerService
    attendance_service: AttendanceService
    report_service: ReportService

    scheduler_config: SchedulerConfig

    def build_scheduler(self) -> AutoCloseScheduler:
        return AutoCloseScheduler(self.attendance_service, self.scheduler_config, timezone=self.clock.zone)


def build_container(
    *,
    db_config: Optional[dict] = None,
    store_backend: str = StoreBackend.MYSQL.value,
    timezone: str = DEFAULT_TIMEZONE,
    admin_password: str = "",
    auto_close_time: str = DEFAULT_AUTO_CLOSE_TIME,
    auto_close_enabled: bool = DEFAULT_AUTO_CLOSE_ENABLED,
    scheduler_config: Optional[SchedulerConfig] = None,
) -> Container:
    backend = StoreBackend(str(store_backend).lower())

    if backend == StoreBackend.MEMORY:
        store = InMemoryAttendanceStore()
        workers_repo: WorkerRepository = InMemoryWorkerRepository()
        sessions_repo: ActiveSessionRepository = store.sessions
        entries_repo: TimeEntryRepository = store.entries
        settings_repo: SettingsRepository = store.settings
    else:
        if not db_config:
            raise ValueError("db_config is required for the mysql store backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
        workers_repo = MySQLWorkerRepository(conn)
        sessions_repo = MySQLActiveSessionRepository(conn)
        entries_repo = MySQLTimeEntryRepository(conn)
        settings_repo = MySQLSettingsRepository(conn)

    clock = ZoneClock(timezone)
    attendance_service = AttendanceService(
        sessions_repo,
        entries_repo,
        settings_repo,
        workers_repo,
        clock=clock,
        strategy_factory=CloseStrategyFactory(),
        default_settings=AutoCloseSettings(time=auto_close_time, enabled=auto_close_enabled),
    )

    return Container(
        clock=clock,
        workers_repo=workers_repo,
        sessions_repo=sessions_repo,
        entries_repo=entries_repo,
        settings_repo=settings_repo,
        auth_service=AuthService.from_plain_password(admin_password),
        worker_service=WorkerService(workers_repo),
        attendance_service=attendance_service,
        report_service=ReportService(entries_repo, workers_repo),
        scheduler_config=scheduler_config or SchedulerConfig(),
    )
