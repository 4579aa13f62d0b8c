from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import EntryOrigin
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, normalize_mysql_date, normalize_mysql_time
from .model import ActiveSession, AutoCloseSettings, TimeEntry
from .repository import ActiveSessionRepository, SettingsRepository, TimeEntryRepository

AUTO_CLOSE_KEY = "autoClose"

_ENTRY_COLUMNS = """
    entry_id, worker_id, worker_name, work_date, check_in, check_out,
    hours_worked, origin, notes, auto_close_time
"""


def _to_session(row: dict) -> ActiveSession:
    return ActiveSession(
        worker_id=str(row["worker_id"]),
        worker_name=row["worker_name"],
        check_in=normalize_mysql_time(row["check_in"]),
        date=normalize_mysql_date(row["work_date"]),
    )


def _to_entry(row: dict) -> TimeEntry:
    return TimeEntry(
        entry_id=str(row["entry_id"]),
        worker_id=str(row["worker_id"]),
        worker_name=row["worker_name"],
        date=normalize_mysql_date(row["work_date"]),
        check_in=normalize_mysql_time(row["check_in"]),
        check_out=normalize_mysql_time(row.get("check_out")),
        hours_worked=float(row.get("hours_worked") or 0),
        origin=EntryOrigin(row.get("origin") or EntryOrigin.NORMAL.value),
        notes=row.get("notes"),
        auto_close_time=row.get("auto_close_time"),
    )


class MySQLActiveSessionRepository(ActiveSessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[ActiveSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT worker_id, worker_name, check_in, work_date FROM active_sessions ORDER BY work_date, check_in")
            return [_to_session(r) for r in cur.fetchall()]

    def get(self, worker_id: str) -> Optional[ActiveSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT worker_id, worker_name, check_in, work_date FROM active_sessions WHERE worker_id=%s",
                (str(worker_id),),
            )
            row = cur.fetchone()
            return _to_session(row) if row else None

    def create_if_absent(self, session: ActiveSession) -> bool:
        # worker_id is the primary key: a concurrent second insert is ignored.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT IGNORE INTO active_sessions(worker_id, worker_name, check_in, work_date)
                VALUES(%s,%s,%s,%s)
                """,
                (session.worker_id, session.worker_name, session.check_in, session.date),
            )
            return cur.rowcount > 0

    def take(self, worker_id: str) -> Optional[ActiveSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT worker_id, worker_name, check_in, work_date
                FROM active_sessions
                WHERE worker_id=%s
                FOR UPDATE
                """,
                (str(worker_id),),
            )
            row = cur.fetchone()
            if not row:
                return None
            cur.execute("DELETE FROM active_sessions WHERE worker_id=%s", (str(worker_id),))
            if cur.rowcount == 0:
                return None
            return _to_session(row)

    def restore(self, session: ActiveSession) -> None:
        self.create_if_absent(session)


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, entry: TimeEntry) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries(
                    worker_id, worker_name, work_date, check_in, check_out,
                    hours_worked, origin, notes, auto_close_time
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    entry.worker_id,
                    entry.worker_name,
                    entry.date,
                    entry.check_in,
                    entry.check_out,
                    entry.hours_worked,
                    entry.origin.value,
                    entry.notes,
                    entry.auto_close_time,
                ),
            )
            return str(cur.lastrowid)

    def get(self, entry_id: str) -> Optional[TimeEntry]:
        if not str(entry_id).isdigit():
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_ENTRY_COLUMNS} FROM time_entries WHERE entry_id=%s", (int(entry_id),))
            row = cur.fetchone()
            return _to_entry(row) if row else None

    def list_all(self) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_ENTRY_COLUMNS} FROM time_entries ORDER BY work_date DESC, entry_id DESC")
            return [_to_entry(r) for r in cur.fetchall()]

    def exists_for_worker_and_date(self, worker_id: str, date: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM time_entries WHERE worker_id=%s AND work_date=%s LIMIT 1",
                (str(worker_id), date),
            )
            return cur.fetchone() is not None

    def update(self, entry: TimeEntry) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET work_date=%s, check_in=%s, check_out=%s, hours_worked=%s, origin=%s, notes=%s
                WHERE entry_id=%s
                """,
                (
                    entry.date,
                    entry.check_in,
                    entry.check_out,
                    entry.hours_worked,
                    entry.origin.value,
                    entry.notes,
                    int(entry.entry_id),
                ),
            )
            # rowcount is 0 when the values did not change; only a missing row is a failure.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM time_entries WHERE entry_id=%s", (int(entry.entry_id),))
            return cur.fetchone() is not None

    def delete(self, entry_id: str) -> bool:
        if not str(entry_id).isdigit():
            return False
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM time_entries WHERE entry_id=%s", (int(entry_id),))
            return cur.rowcount > 0


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_auto_close(self) -> Optional[AutoCloseSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT close_time, enabled FROM settings WHERE setting_key=%s", (AUTO_CLOSE_KEY,))
            row = cur.fetchone()
            if not row:
                return None
            return AutoCloseSettings(time=row["close_time"], enabled=bool(row["enabled"]))

    def save_auto_close(self, settings: AutoCloseSettings) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO settings(setting_key, close_time, enabled)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE close_time=VALUES(close_time), enabled=VALUES(enabled)
                """,
                (AUTO_CLOSE_KEY, settings.time, int(bool(settings.enabled))),
            )
