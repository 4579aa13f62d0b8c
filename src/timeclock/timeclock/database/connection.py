from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Mapping, Optional

from mysql.connector import pooling

POOL_NAME = "timeclock"


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "timeclock"
    connection_timeout: int = 10
    pool_size: int = 5

    @classmethod
    def from_mapping(cls, values: Mapping) -> "DBConfig":
        """Build from a settings DB_CONFIG dict; missing keys keep their defaults."""
        defaults = cls()
        return cls(
            host=str(values.get("host", defaults.host)),
            port=int(values.get("port", defaults.port)),
            user=str(values.get("user", defaults.user)),
            password=str(values.get("password", defaults.password)),
            database=str(values.get("database", defaults.database)),
            connection_timeout=int(values.get("connection_timeout", defaults.connection_timeout)),
            pool_size=int(values.get("pool_size", defaults.pool_size)),
        )

    def connect_kwargs(self, *, with_database: bool = True) -> dict:
        kwargs = dict(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            connection_timeout=self.connection_timeout,
        )
        if with_database:
            kwargs["database"] = self.database
        return kwargs


class DatabaseConnection:
    """Process-wide pooled connection factory.

    Request threads and the auto-close thread each borrow their own
    connection per operation; `close()` on a borrowed connection hands it
    back to the pool. The pool is created lazily on first use.
    """

    _instance: Optional["DatabaseConnection"] = None
    _instance_lock = threading.Lock()

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._pool_lock = threading.Lock()

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = DatabaseConnection(config)
            return cls._instance

    def connect(self):
        with self._pool_lock:
            if self._pool is None:
                self._pool = pooling.MySQLConnectionPool(
                    pool_name=POOL_NAME,
                    pool_size=self._config.pool_size,
                    **self._config.connect_kwargs(),
                )
        return self._pool.get_connection()
