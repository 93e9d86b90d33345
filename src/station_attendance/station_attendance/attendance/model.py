from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day."""

    attendance_id: int
    employee_id: int
    work_date: date
    status: AttendanceStatus = AttendanceStatus.ABSENT
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    comments: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.check_in is not None and self.check_out is None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "employeeId": self.employee_id,
            "date": self.work_date.isoformat(),
            "status": self.status.value,
            "checkIn": isoformat_or_none(self.check_in),
            "checkOut": isoformat_or_none(self.check_out),
            "comments": self.comments,
            "createdAt": isoformat_or_none(self.created_at),
            "updatedAt": isoformat_or_none(self.updated_at),
        }


@dataclass(frozen=True)
class Created:
    record: AttendanceRecord


@dataclass(frozen=True)
class AlreadyExists:
    """A record for the same (employee, day) was already there, possibly
    committed by a concurrent request a moment earlier."""

    existing: AttendanceRecord


CreateOutcome = Union[Created, AlreadyExists]
