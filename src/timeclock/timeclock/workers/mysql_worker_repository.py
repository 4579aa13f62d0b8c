from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .model import Worker
from .repository import WorkerRepository


def _to_worker(row: dict) -> Worker:
    return Worker(
        worker_id=str(row["worker_id"]),
        name=row["name"],
        image_url=row.get("image_url") or "",
        hourly_rate=float(row.get("hourly_rate") or 0),
    )


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT worker_id, name, image_url, hourly_rate FROM workers ORDER BY name ASC")
            return [_to_worker(r) for r in cur.fetchall()]

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        if not str(worker_id).isdigit():
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT worker_id, name, image_url, hourly_rate FROM workers WHERE worker_id=%s",
                (int(worker_id),),
            )
            row = cur.fetchone()
            return _to_worker(row) if row else None

    def create(self, *, name: str, image_url: str, hourly_rate: float) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO workers(name, image_url, hourly_rate) VALUES(%s,%s,%s)",
                (name, image_url, hourly_rate),
            )
            return str(cur.lastrowid)

    def update(self, worker: Worker) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE workers SET name=%s, image_url=%s, hourly_rate=%s WHERE worker_id=%s",
                (worker.name, worker.image_url, worker.hourly_rate, int(worker.worker_id)),
            )
            if cur.rowcount > 0:
                return True
            # Saving identical values affects no rows.
            cur.execute("SELECT 1 AS found FROM workers WHERE worker_id=%s", (int(worker.worker_id),))
            return cur.fetchone() is not None

    def delete_by_id(self, worker_id: str) -> bool:
        if not str(worker_id).isdigit():
            return False
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM workers WHERE worker_id=%s", (int(worker_id),))
            return cur.rowcount > 0
