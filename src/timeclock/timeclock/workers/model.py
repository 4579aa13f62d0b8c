from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_IMAGE_URL


@dataclass(frozen=True)
class Worker:
    """Domain entity: a worker shown on the check-in kiosk.

    Plain data object (no DB access).
    """

    worker_id: str
    name: str
    image_url: str = DEFAULT_IMAGE_URL
    hourly_rate: float = 0.0

    def to_dict(self) -> dict:
        return {
            "id": self.worker_id,
            "name": self.name,
            "image_url": self.image_url,
            "hourly_rate": self.hourly_rate,
        }
