from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from mysql.connector import pooling


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 10


class DatabaseConnection:
    """Singleton-like DB connection factory backed by a connection pool.

    Note: The pool is created lazily on first use so the app can start before MySQL is reachable.
    ``connect()`` hands out a pooled connection; closing it returns it to the pool.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        if self._pool is None:
            self._pool = pooling.MySQLConnectionPool(
                pool_name="time_attendance",
                pool_size=int(self._config.pool_size),
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
            )
        return self._pool

    def connect(self):
        return self._get_pool().get_connection()
