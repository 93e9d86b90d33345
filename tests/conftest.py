from __future__ import annotations

from datetime import datetime

import pytest

from fakes import TUNIS, InMemoryAttendance, InMemoryEmployees, make_employee
from src.station_attendance.station_attendance.attendance.service import AttendanceLedger
from src.station_attendance.station_attendance.core.enums import EmployeeStatus


@pytest.fixture
def tunis():
    return TUNIS


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 25, 8, 15, 0, tzinfo=TUNIS)


@pytest.fixture
def employees():
    return InMemoryEmployees(
        make_employee(1),
        make_employee(2),
        make_employee(3),
        make_employee(9, status=EmployeeStatus.INACTIVE),
    )


@pytest.fixture
def attendance():
    return InMemoryAttendance()


@pytest.fixture
def ledger(attendance, employees):
    return AttendanceLedger(attendance, employees, reference_tz=TUNIS)
