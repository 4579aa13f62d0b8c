from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date, time, timedelta
from typing import Any, Optional

import mysql.connector

from ..common.datetime_utils import DATE_FORMAT, TIME_FORMAT, normalize_time_of_day
from ..core.exceptions import StoreUnavailableError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

_UNAVAILABLE = "Archivio non disponibile"


@contextmanager
def db_cursor(conn_factory: DatabaseConnection):
    """Yield (conn, cursor) for one transaction.

    The cursor is buffered and returns dict rows. Commit on success, rollback
    on error; driver errors surface as StoreUnavailableError.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.error("Database connection failed: %s", e)
        raise StoreUnavailableError(_UNAVAILABLE) from e

    try:
        cur = conn.cursor(dictionary=True, buffered=True)
        try:
            yield conn, cur
        finally:
            cur.close()
        conn.commit()
    except mysql.connector.Error as e:
        conn.rollback()
        logger.error("Database operation failed: %s", e)
        raise StoreUnavailableError(_UNAVAILABLE) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def normalize_mysql_time(value: Any) -> Optional[str]:
    """TIME column -> 'HH:MM:SS'.

    The connector hands TIME back as timedelta (C extension), time, or str.
    """
    if value is None:
        return None
    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % 86400
        value = time(seconds // 3600, (seconds % 3600) // 60, seconds % 60)
    if isinstance(value, time):
        return value.strftime(TIME_FORMAT)
    if isinstance(value, str):
        return normalize_time_of_day(value.strip())
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def normalize_mysql_date(value: Any) -> str:
    if isinstance(value, date):
        return value.strftime(DATE_FORMAT)
    return str(value)
