from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import pytz
from apscheduler.schedulers.background import BackgroundScheduler

from ..attendance.model import SweepResult
from ..attendance.service import AttendanceService
from ..core.constants import DEFAULT_SWEEP_INTERVAL_SECONDS, DEFAULT_TIMEZONE

logger = logging.getLogger(__name__)

JOB_ID = "auto-close-sweep"


@dataclass(frozen=True)
class SchedulerConfig:
    interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS
    run_on_start: bool = True


class AutoCloseScheduler:
    """Runs the auto-close sweep on a fixed interval in a BackgroundScheduler.

    The sweep is idempotent, so several processes may run one each against
    the same store.
    """

    def __init__(
        self,
        service: AttendanceService,
        config: SchedulerConfig | None = None,
        *,
        timezone: str = DEFAULT_TIMEZONE,
    ):
        self._service = service
        self._config = config or SchedulerConfig()
        self._tz = pytz.timezone(timezone)
        self._scheduler = BackgroundScheduler(timezone=self._tz)
        self.runs = 0

    @property
    def config(self) -> SchedulerConfig:
        return self._config

    @property
    def running(self) -> bool:
        return self._scheduler.running

    @property
    def job(self):
        return self._scheduler.get_job(JOB_ID)

    def run_once(self) -> Optional[SweepResult]:
        """Run a single sweep; a failure is logged and the job stays scheduled."""
        self.runs += 1
        try:
            result = self._service.auto_close_sessions()
        except Exception:
            logger.exception("Auto-close sweep failed")
            return None
        if result.closed or result.failed:
            logger.info("Auto-close sweep: %s", result.message)
        else:
            logger.debug("Auto-close sweep: %s", result.message)
        return result

    def start(self) -> None:
        job_options = dict(
            id=JOB_ID,
            seconds=self._config.interval_seconds,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        # Omitting next_run_time lets the trigger pick the first run; None would pause the job.
        if self._config.run_on_start:
            job_options["next_run_time"] = datetime.now(self._tz)
        self._scheduler.add_job(self.run_once, "interval", **job_options)
        self._scheduler.start()
        logger.info("Auto-close scheduler started (every %ss)", self._config.interval_seconds)

    def shutdown(self, wait: bool = True) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=wait)
            logger.info("Auto-close scheduler stopped")
