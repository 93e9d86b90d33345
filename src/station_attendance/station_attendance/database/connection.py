from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

import mysql.connector

from ..core.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation, except inside
    ``transaction()`` where one connection is bound to the current thread and
    shared by every repository call until commit/rollback.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._local = threading.local()

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        try:
            return mysql.connector.connect(
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
            )
        except mysql.connector.Error as exc:
            raise StorageUnavailableError("Database is unavailable") from exc

    def current_transaction(self):
        return getattr(self._local, "conn", None)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if self.current_transaction() is not None:
            # Nested: the outermost transaction owns commit/rollback.
            yield
            return

        conn = self.connect()
        self._local.conn = conn
        try:
            yield
            try:
                conn.commit()
            except mysql.connector.Error as exc:
                raise StorageUnavailableError("Could not confirm the write") from exc
        except Exception:
            try:
                conn.rollback()
            except mysql.connector.Error:
                logger.warning("Rollback failed on a broken connection", exc_info=True)
            raise
        finally:
            self._local.conn = None
            conn.close()
