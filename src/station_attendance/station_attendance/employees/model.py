from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: station employee.

    ``is_present``, ``last_check_in`` and ``last_check_out`` mirror the most
    recent attendance transition and are only written by the ledger.
    """

    employee_id: int
    first_name: str
    last_name: str
    email: str
    role: str
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    password_hash: str = ""
    is_present: bool = False
    last_check_in: Optional[datetime] = None
    last_check_out: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE

    def presence_summary(self) -> "PresenceSummary":
        return PresenceSummary(
            employee_id=self.employee_id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            role=self.role,
            is_present=self.is_present,
        )


@dataclass(frozen=True)
class PresenceSummary:
    """What the employee-facing screens get back from check-in/check-out."""

    employee_id: int
    first_name: str
    last_name: str
    email: str
    role: str
    is_present: bool

    def to_dict(self) -> dict:
        return {
            "idEmployee": self.employee_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "role": self.role,
            "isPresent": self.is_present,
        }
