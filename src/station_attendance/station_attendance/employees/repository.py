from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def update_presence(
        self,
        employee_id: int,
        *,
        is_present: bool,
        last_check_in: Optional[datetime],
        last_check_out: Optional[datetime],
    ) -> bool:
        raise NotImplementedError
