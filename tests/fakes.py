from __future__ import annotations

import copy
import threading
from contextlib import contextmanager
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from werkzeug.security import generate_password_hash

from src.station_attendance.station_attendance.attendance.model import AlreadyExists, AttendanceRecord, Created
from src.station_attendance.station_attendance.core.enums import AttendanceStatus, EmployeeStatus
from src.station_attendance.station_attendance.core.exceptions import StorageUnavailableError
from src.station_attendance.station_attendance.employees.model import Employee

TUNIS = ZoneInfo("Africa/Tunis")


def make_employee(employee_id: int, *, status: EmployeeStatus = EmployeeStatus.ACTIVE, password: str = "pw") -> Employee:
    return Employee(
        employee_id=employee_id,
        first_name=f"First{employee_id}",
        last_name=f"Last{employee_id}",
        email=f"e{employee_id}@station.test",
        role="pompiste",
        status=status,
        password_hash=generate_password_hash(password),
    )


class InMemoryEmployees:
    def __init__(self, *employees: Employee):
        self._by_id: dict[int, Employee] = {e.employee_id: e for e in employees}
        self.failing_presence_writes = 0
        self.presence_writes = 0

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.email == email), None)

    def update_presence(self, employee_id: int, *, is_present, last_check_in, last_check_out) -> bool:
        self.presence_writes += 1
        if self.failing_presence_writes:
            self.failing_presence_writes -= 1
            raise StorageUnavailableError("employees table unreachable")
        current = self._by_id.get(employee_id)
        if current is None:
            return False
        self._by_id[employee_id] = replace(
            current,
            is_present=is_present,
            last_check_in=last_check_in,
            last_check_out=last_check_out,
        )
        return True

    def snapshot(self):
        return dict(self._by_id)

    def restore(self, state) -> None:
        self._by_id = state


class InMemoryAttendance:
    """Dict keyed by (employee_id, work_date); the lock plays the unique key."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0
        self.created = 0

    def find_one(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_key.get((employee_id, work_date))

    def create_if_absent(self, *, employee_id, work_date, check_in, status, comments=""):
        with self._lock:
            existing = self._by_key.get((employee_id, work_date))
            if existing is not None:
                return AlreadyExists(existing)
            self._id += 1
            self.created += 1
            rec = AttendanceRecord(
                attendance_id=self._id,
                employee_id=employee_id,
                work_date=work_date,
                status=status,
                check_in=check_in,
                comments=comments,
                created_at=datetime.now(timezone.utc),
            )
            self._by_key[(employee_id, work_date)] = rec
            return Created(rec)

    def mark_checked_in(self, attendance_id: int, *, check_in: datetime) -> Optional[AttendanceRecord]:
        with self._lock:
            key, rec = self._find_by_id(attendance_id)
            if rec is None or rec.check_in is not None:
                return None
            rec = replace(rec, check_in=check_in, status=AttendanceStatus.PRESENT)
            self._by_key[key] = rec
            return rec

    def mark_checked_out(self, attendance_id: int, *, check_out: datetime) -> Optional[AttendanceRecord]:
        with self._lock:
            key, rec = self._find_by_id(attendance_id)
            if rec is None or rec.check_in is None or rec.check_out is not None:
                return None
            rec = replace(rec, check_out=check_out)
            self._by_key[key] = rec
            return rec

    def list_for_employee(self, employee_id: int, *, start_date=None, end_date=None):
        items = [
            r
            for r in self._by_key.values()
            if r.employee_id == employee_id
            and (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
        ]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items

    def add_absent(self, employee_id: int, work_date: date) -> AttendanceRecord:
        """Stand-in for the administrative path that pre-creates absent rows."""
        outcome = self.create_if_absent(
            employee_id=employee_id, work_date=work_date, check_in=None, status=AttendanceStatus.ABSENT
        )
        self.created -= 1
        return outcome.record

    def all_records(self):
        return list(self._by_key.values())

    def snapshot(self):
        return (copy.copy(self._by_key), self._id, self.created)

    def restore(self, state) -> None:
        self._by_key, self._id, self.created = state

    def _find_by_id(self, attendance_id: int):
        for key, rec in self._by_key.items():
            if rec.attendance_id == attendance_id:
                return key, rec
        return None, None


class SnapshotTransaction:
    """All-or-nothing over the in-memory stores, like a DB transaction."""

    def __init__(self, *stores):
        self._stores = stores
        self.opened = 0
        self.rolled_back = 0

    @contextmanager
    def __call__(self):
        self.opened += 1
        states = [s.snapshot() for s in self._stores]
        try:
            yield
        except Exception:
            self.rolled_back += 1
            for store, state in zip(self._stores, states):
                store.restore(state)
            raise
