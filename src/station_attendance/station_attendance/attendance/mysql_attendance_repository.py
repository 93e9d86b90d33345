from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import from_storage, to_storage
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AlreadyExists, AttendanceRecord, Created, CreateOutcome
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, employee_id, work_date, status, check_in, check_out, comments, created_at, updated_at"


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        check_in=from_storage(r.get("check_in")),
        check_out=from_storage(r.get("check_out")),
        comments=r.get("comments") or "",
        created_at=from_storage(r.get("created_at")),
        updated_at=from_storage(r.get("updated_at")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_one(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select_for_day(cur, employee_id, work_date)

    def create_if_absent(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: Optional[datetime],
        status: AttendanceStatus,
        comments: str = "",
    ) -> CreateOutcome:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, work_date, status, check_in, comments)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (employee_id, work_date, status.value, to_storage(check_in), comments),
                )
            except mysql.connector.IntegrityError as exc:
                if not is_duplicate_key(exc):
                    raise
                # Shared locking read: sees the winner's committed row even inside an
                # older REPEATABLE READ snapshot, and reuses the shared lock the
                # duplicate-key check already took.
                existing = self._select_for_day(cur, employee_id, work_date, locking=True)
                if existing is None:
                    raise
                return AlreadyExists(existing)

            created = self._select_by_id(cur, int(cur.lastrowid))
            return Created(created)

    def mark_checked_in(self, attendance_id: int, *, check_in: datetime) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in=%s, status=%s
                WHERE attendance_id=%s AND check_in IS NULL
                """,
                (to_storage(check_in), AttendanceStatus.PRESENT.value, attendance_id),
            )
            if cur.rowcount == 0:
                return None
            return self._select_by_id(cur, attendance_id)

    def mark_checked_out(self, attendance_id: int, *, check_out: datetime) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out=%s
                WHERE attendance_id=%s AND check_in IS NOT NULL AND check_out IS NULL
                """,
                (to_storage(check_out), attendance_id),
            )
            if cur.rowcount == 0:
                return None
            return self._select_by_id(cur, attendance_id)

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["employee_id=%s"]
        params: list[object] = [employee_id]

        if start_date is not None:
            clauses.append("work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("work_date <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY work_date DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def _select_for_day(self, cur, employee_id: int, work_date: date, *, locking: bool = False):
        lock = " LOCK IN SHARE MODE" if locking else ""
        cur.execute(
            f"""
            SELECT {_COLUMNS}
            FROM attendance_records
            WHERE employee_id=%s AND work_date=%s{lock}
            """,
            (employee_id, work_date),
        )
        r = fetchone(cur)
        return _to_record(r) if r else None

    def _select_by_id(self, cur, attendance_id: int) -> AttendanceRecord:
        cur.execute(
            f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s",
            (attendance_id,),
        )
        return _to_record(fetchone(cur))
