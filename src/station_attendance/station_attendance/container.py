from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceLedger
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeAuthService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository

    auth_service: EmployeeAuthService
    attendance_ledger: AttendanceLedger


def build_container(*, db_config: dict, reference_tz: tzinfo) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    return Container(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        auth_service=EmployeeAuthService(employees_repo),
        attendance_ledger=AttendanceLedger(
            attendance_repo,
            employees_repo,
            reference_tz=reference_tz,
            transaction=conn.transaction,
        ),
    )
