from __future__ import annotations

import logging
from contextlib import nullcontext
from datetime import date, datetime, tzinfo
from typing import Callable, ContextManager, Optional, Sequence

from ..common.datetime_utils import as_aware, start_of_day, utc_now
from ..common.validators import date_range_or_none
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    EmployeeNotFoundError,
    InactiveEmployeeError,
    NoCheckInFoundError,
)
from ..employees.model import Employee, PresenceSummary
from ..employees.presence import EmployeePresenceView
from ..employees.repository import EmployeeRepository
from .model import AlreadyExists, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceLedger:
    """Use case: daily check-in/check-out, one record per employee per day.

    ``reference_tz`` decides where a calendar day starts for the whole
    deployment. ``transaction`` opens one store transaction around the ledger
    write and the presence mirror write; without it the mirror is written
    after the ledger commit (see ``EmployeePresenceView``).
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        reference_tz: tzinfo,
        transaction: Optional[Callable[[], ContextManager]] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._attendance = attendance
        self._employees = employees
        self._tz = reference_tz
        self._transaction = transaction or nullcontext
        self._clock = clock
        self._presence = EmployeePresenceView(employees, transactional=transaction is not None)

    @property
    def reference_tz(self) -> tzinfo:
        return self._tz

    def today(self, now: Optional[datetime] = None) -> date:
        return start_of_day(self._resolve_now(now), self._tz)

    def check_in(self, employee_id: int, *, now: Optional[datetime] = None) -> PresenceSummary:
        now = self._resolve_now(now)
        day = start_of_day(now, self._tz)

        with self._transaction():
            employee = self._require_active_employee(employee_id)

            record = self._attendance.find_one(employee_id, day)
            if record is None:
                outcome = self._attendance.create_if_absent(
                    employee_id=employee_id,
                    work_date=day,
                    check_in=now,
                    status=AttendanceStatus.PRESENT,
                )
                if isinstance(outcome, AlreadyExists):
                    record = self._check_in_existing(employee_id, outcome.existing, now)
                else:
                    record = outcome.record
            else:
                record = self._check_in_existing(employee_id, record, now)

            employee = self._presence.record_check_in(employee, now)

        logger.info("Employee %s checked in for %s at %s", employee_id, day, record.check_in)
        return employee.presence_summary()

    def check_out(self, employee_id: int, *, now: Optional[datetime] = None) -> PresenceSummary:
        now = self._resolve_now(now)
        day = start_of_day(now, self._tz)

        with self._transaction():
            employee = self._require_active_employee(employee_id)

            record = self._attendance.find_one(employee_id, day)
            if record is None or record.check_in is None:
                raise NoCheckInFoundError(employee_id)
            if record.check_out is not None:
                raise AlreadyCheckedOutError(employee_id)

            updated = self._attendance.mark_checked_out(record.attendance_id, check_out=now)
            if updated is None:
                raise AlreadyCheckedOutError(employee_id)

            employee = self._presence.record_check_out(employee, now)

        logger.info("Employee %s checked out for %s at %s", employee_id, day, updated.check_out)
        return employee.presence_summary()

    def list_attendance(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        start_date, end_date = date_range_or_none(start_date, end_date)
        self._require_employee(employee_id)
        return list(self._attendance.list_for_employee(employee_id, start_date=start_date, end_date=end_date))

    def get_today_record(self, employee_id: int, *, now: Optional[datetime] = None) -> Optional[AttendanceRecord]:
        self._require_employee(employee_id)
        return self._attendance.find_one(employee_id, self.today(now))

    def _check_in_existing(self, employee_id: int, record: AttendanceRecord, now: datetime) -> AttendanceRecord:
        if record.check_in is not None:
            raise AlreadyCheckedInError(employee_id)
        updated = self._attendance.mark_checked_in(record.attendance_id, check_in=now)
        if updated is None:
            raise AlreadyCheckedInError(employee_id)
        return updated

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee

    def _require_active_employee(self, employee_id: int) -> Employee:
        employee = self._require_employee(employee_id)
        if not employee.is_active:
            raise InactiveEmployeeError(employee_id)
        return employee

    def _resolve_now(self, now: Optional[datetime]) -> datetime:
        # Naive values are wall-clock time in the reference timezone.
        return as_aware(now if now is not None else self._clock(), self._tz)
