from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from typing import Optional, Sequence

from .model import Worker
from .repository import WorkerRepository


class InMemoryWorkerRepository(WorkerRepository):
    """Process-local worker directory (development and tests)."""

    def __init__(self, workers: Optional[Sequence[Worker]] = None):
        self._lock = threading.Lock()
        self._by_id: dict[str, Worker] = {w.worker_id: w for w in (workers or [])}

    def list_all(self) -> Sequence[Worker]:
        with self._lock:
            return sorted(self._by_id.values(), key=lambda w: w.name.lower())

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        with self._lock:
            return self._by_id.get(str(worker_id))

    def create(self, *, name: str, image_url: str, hourly_rate: float) -> str:
        worker_id = uuid.uuid4().hex
        with self._lock:
            self._by_id[worker_id] = Worker(worker_id=worker_id, name=name, image_url=image_url, hourly_rate=hourly_rate)
        return worker_id

    def update(self, worker: Worker) -> bool:
        with self._lock:
            if worker.worker_id not in self._by_id:
                return False
            self._by_id[worker.worker_id] = replace(worker)
            return True

    def delete_by_id(self, worker_id: str) -> bool:
        with self._lock:
            return self._by_id.pop(str(worker_id), None) is not None
