from __future__ import annotations

import mysql.connector
import pytest

from db_fakes import FakeConnection, FakeFactory
from src.station_attendance.station_attendance.core.exceptions import StorageUnavailableError
from src.station_attendance.station_attendance.database.connection import DatabaseConnection, DBConfig
from src.station_attendance.station_attendance.database.mysql_base import db_cursor, is_duplicate_key


def test_db_cursor_commits_and_closes():
    conn = FakeConnection()
    with db_cursor(FakeFactory(conn)) as (_, cur):
        cur.execute("SELECT 1")

    assert conn.commits == 1
    assert conn.rollbacks == 0
    assert conn.closed and conn.cur.closed


def test_db_cursor_rolls_back_and_reraises():
    conn = FakeConnection()
    with pytest.raises(KeyError):
        with db_cursor(FakeFactory(conn)):
            raise KeyError("boom")

    assert conn.commits == 0
    assert conn.rollbacks == 1
    assert conn.closed


def test_lost_server_becomes_storage_unavailable():
    conn = FakeConnection()
    with pytest.raises(StorageUnavailableError) as info:
        with db_cursor(FakeFactory(conn)):
            raise mysql.connector.OperationalError(msg="Lost connection to MySQL server")

    assert info.value.retryable
    assert conn.rollbacks == 1


@pytest.mark.parametrize("errno", [1213, 1205])
def test_lock_aborts_become_storage_unavailable(errno):
    conn = FakeConnection()
    with pytest.raises(StorageUnavailableError):
        with db_cursor(FakeFactory(conn)):
            raise mysql.connector.InternalError(msg="lock aborted", errno=errno)

    assert conn.rollbacks == 1


def test_lock_abort_inside_shared_transaction_is_storage_unavailable():
    shared = FakeConnection()
    with pytest.raises(StorageUnavailableError):
        with db_cursor(FakeFactory(FakeConnection(), shared=shared)):
            raise mysql.connector.InternalError(msg="Deadlock found", errno=1213)

    assert shared.rollbacks == 0
    assert shared.cur.closed


def test_other_statement_errors_propagate_unchanged():
    with pytest.raises(mysql.connector.ProgrammingError):
        with db_cursor(FakeFactory(FakeConnection())):
            raise mysql.connector.ProgrammingError(msg="syntax", errno=1064)


def test_shared_transaction_connection_is_left_to_its_owner():
    own = FakeConnection()
    shared = FakeConnection()
    factory = FakeFactory(own, shared=shared)

    with db_cursor(factory) as (conn, cur):
        assert conn is shared
        cur.execute("SELECT 1")

    assert factory.connects == 0
    assert shared.commits == 0 and not shared.closed
    assert shared.cur.closed


def test_is_duplicate_key():
    assert is_duplicate_key(mysql.connector.IntegrityError(msg="Duplicate entry", errno=1062))
    assert not is_duplicate_key(mysql.connector.IntegrityError(msg="FK fails", errno=1452))


@pytest.fixture
def database(monkeypatch):
    db = DatabaseConnection(DBConfig(host="h", port=3306, user="u", password="p", database="d"))
    opened: list[FakeConnection] = []

    def connect():
        conn = FakeConnection()
        opened.append(conn)
        return conn

    monkeypatch.setattr(db, "connect", connect)
    return db, opened


def test_transaction_shares_one_connection_and_commits(database):
    db, opened = database

    with db.transaction():
        first = db.current_transaction()
        with db.transaction():
            assert db.current_transaction() is first
        with db_cursor(db) as (conn, _):
            assert conn is first

    assert len(opened) == 1
    assert opened[0].commits == 1
    assert opened[0].closed
    assert db.current_transaction() is None


def test_transaction_rolls_back_on_error(database):
    db, opened = database

    with pytest.raises(ValueError):
        with db.transaction():
            raise ValueError("mirror write failed")

    assert opened[0].commits == 0
    assert opened[0].rollbacks == 1
    assert db.current_transaction() is None


def test_failed_commit_is_storage_unavailable(database, monkeypatch):
    db, opened = database
    broken = FakeConnection(commit_error=mysql.connector.OperationalError(msg="gone away"))
    monkeypatch.setattr(db, "connect", lambda: broken)

    with pytest.raises(StorageUnavailableError):
        with db.transaction():
            pass

    assert broken.rollbacks == 1
    assert broken.closed
