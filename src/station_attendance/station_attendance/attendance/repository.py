from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, CreateOutcome


class AttendanceRepository(Protocol):
    """Repository interface for daily attendance records.

    Implementations must enforce uniqueness of (employee_id, work_date) in
    the store itself; ``create_if_absent`` reports a lost race as
    ``AlreadyExists`` instead of raising.
    """

    def find_one(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_if_absent(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: Optional[datetime],
        status: AttendanceStatus,
        comments: str = "",
    ) -> CreateOutcome:
        raise NotImplementedError

    def mark_checked_in(self, attendance_id: int, *, check_in: datetime) -> Optional[AttendanceRecord]:
        """Set check_in and status=present only while check_in is still unset.

        Returns None when the guard no longer holds.
        """
        raise NotImplementedError

    def mark_checked_out(self, attendance_id: int, *, check_out: datetime) -> Optional[AttendanceRecord]:
        """Set check_out only while check_in is set and check_out is unset."""
        raise NotImplementedError

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records ordered by work_date descending; bounds are inclusive."""
        raise NotImplementedError
