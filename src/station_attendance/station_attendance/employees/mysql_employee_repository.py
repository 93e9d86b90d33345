from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import from_storage, to_storage
from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = (
    "employee_id, first_name, last_name, email, role, status, password_hash, "
    "is_present, last_check_in, last_check_out"
)


def _to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        role=row["role"],
        status=EmployeeStatus(row["status"]),
        password_hash=row.get("password_hash") or "",
        is_present=bool(row.get("is_present", False)),
        last_check_in=from_storage(row.get("last_check_in")),
        last_check_out=from_storage(row.get("last_check_out")),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def update_presence(
        self,
        employee_id: int,
        *,
        is_present: bool,
        last_check_in: Optional[datetime],
        last_check_out: Optional[datetime],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET is_present=%s, last_check_in=%s, last_check_out=%s
                WHERE employee_id=%s
                """,
                (int(is_present), to_storage(last_check_in), to_storage(last_check_out), employee_id),
            )
            # rowcount counts changed rows only; a same-value write still matched.
            return cur.rowcount > 0 or self._exists(cur, employee_id)

    def _exists(self, cur, employee_id: int) -> bool:
        cur.execute("SELECT 1 AS found FROM employees WHERE employee_id=%s", (employee_id,))
        return fetchone(cur) is not None
