from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import require_non_empty, require_non_negative_number
from ..core.constants import DEFAULT_IMAGE_URL
from ..core.exceptions import NotFoundError, ValidationError
from .model import Worker
from .repository import WorkerRepository

logger = logging.getLogger(__name__)


class WorkerService:
    """Use case: manage the worker directory (admin)."""

    def __init__(self, workers: WorkerRepository):
        self._workers = workers

    def list_workers(self) -> Sequence[Worker]:
        return self._workers.list_all()

    def get_worker(self, worker_id: str) -> Optional[Worker]:
        return self._workers.get_by_id(worker_id)

    def _clean(self, name: str, image_url: Optional[str], hourly_rate: Any) -> tuple[str, str, float]:
        name = require_non_empty(name, "Nome")
        rate = require_non_negative_number(hourly_rate, "Paga oraria")
        image_url = (image_url or "").strip() or DEFAULT_IMAGE_URL
        return name, image_url, round(rate, 2)

    def create_worker(self, *, name: str, image_url: Optional[str] = None, hourly_rate: Any = 0) -> str:
        name, image_url, rate = self._clean(name, image_url, hourly_rate)
        worker_id = self._workers.create(name=name, image_url=image_url, hourly_rate=rate)
        logger.info("Worker created: %s (%s)", name, worker_id)
        return worker_id

    def update_worker(self, worker_id: str, *, name: str, image_url: Optional[str] = None, hourly_rate: Any = 0) -> None:
        name, image_url, rate = self._clean(name, image_url, hourly_rate)
        if not self._workers.get_by_id(worker_id):
            raise NotFoundError("Lavoratore non trovato")
        if not self._workers.update(Worker(worker_id=str(worker_id), name=name, image_url=image_url, hourly_rate=rate)):
            raise ValidationError("Aggiornamento del lavoratore non riuscito")
        logger.info("Worker updated: %s", worker_id)

    def delete_worker(self, worker_id: str) -> bool:
        # Unconditional: time entries stay in place with the worker's id and name.
        deleted = self._workers.delete_by_id(worker_id)
        if deleted:
            logger.info("Worker deleted: %s", worker_id)
        return deleted
