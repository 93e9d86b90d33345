from __future__ import annotations

from collections import deque
from typing import Optional


class FakeCursor:
    """DB-API cursor double: records statements and replays scripted results."""

    def __init__(self, rows=(), *, rowcount: int = 1, lastrowid: int = 0, errors=None):
        self.executed: list[tuple[str, tuple]] = []
        self._rows = deque(rows)
        self.rowcount = rowcount
        self.lastrowid = lastrowid
        self._errors = dict(errors or {})
        self.closed = False

    def execute(self, sql: str, params: tuple = ()) -> None:
        self.executed.append((" ".join(sql.split()), params))
        for prefix, exc in list(self._errors.items()):
            if self.executed[-1][0].startswith(prefix):
                del self._errors[prefix]
                raise exc

    def fetchone(self):
        return self._rows.popleft() if self._rows else None

    def fetchall(self):
        rows, self._rows = list(self._rows), deque()
        return rows

    def close(self) -> None:
        self.closed = True


class FakeConnection:
    def __init__(self, cursor: Optional[FakeCursor] = None, *, commit_error: Optional[Exception] = None):
        self.cur = cursor or FakeCursor()
        self.commit_error = commit_error
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self, dictionary: bool = False):
        return self.cur

    def commit(self) -> None:
        if self.commit_error is not None:
            raise self.commit_error
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1

    def close(self) -> None:
        self.closed = True


class FakeFactory:
    """Stands in for DatabaseConnection outside of a transaction."""

    def __init__(self, conn: FakeConnection, shared: Optional[FakeConnection] = None):
        self.conn = conn
        self.shared = shared
        self.connects = 0

    def connect(self):
        self.connects += 1
        return self.conn

    def current_transaction(self):
        return self.shared
