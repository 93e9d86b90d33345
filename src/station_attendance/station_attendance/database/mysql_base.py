from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import StorageUnavailableError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Statement errors that mean the server went away, not that the query was wrong.
_UNAVAILABLE_ERRORS = (mysql.connector.InterfaceError, mysql.connector.OperationalError)
# InnoDB aborted the statement to break a lock cycle or gave up waiting; repeating it is safe.
_LOCK_ERRNOS = (errorcode.ER_LOCK_DEADLOCK, errorcode.ER_LOCK_WAIT_TIMEOUT)


def _is_unavailable(exc: BaseException) -> bool:
    if isinstance(exc, _UNAVAILABLE_ERRORS):
        return True
    return isinstance(exc, mysql.connector.Error) and exc.errno in _LOCK_ERRNOS


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    shared = conn_factory.current_transaction()
    if shared is not None:
        cur = shared.cursor(dictionary=dictionary)
        try:
            yield shared, cur
        except mysql.connector.Error as exc:
            if _is_unavailable(exc):
                raise StorageUnavailableError("Database is unavailable") from exc
            raise
        finally:
            cur.close()
        return

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception as exc:
        try:
            conn.rollback()
        except mysql.connector.Error:
            logger.warning("Rollback failed on a broken connection", exc_info=True)
        if _is_unavailable(exc):
            raise StorageUnavailableError("Database is unavailable") from exc
        raise
    finally:
        conn.close()


def is_duplicate_key(exc: mysql.connector.Error) -> bool:
    return getattr(exc, "errno", None) == errorcode.ER_DUP_ENTRY


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
