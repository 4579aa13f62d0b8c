from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Worker


class WorkerRepository(Protocol):
    """Repository interface for Worker.

    Note (DIP): the service layer depends on this interface, never on a concrete DB.
    """

    def list_all(self) -> Sequence[Worker]:
        raise NotImplementedError

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        raise NotImplementedError

    def create(self, *, name: str, image_url: str, hourly_rate: float) -> str:
        raise NotImplementedError

    def update(self, worker: Worker) -> bool:
        raise NotImplementedError

    def delete_by_id(self, worker_id: str) -> bool:
        raise NotImplementedError
