from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime

from ..core.constants import MIRROR_WRITE_ATTEMPTS
from ..core.exceptions import StorageUnavailableError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeePresenceView:
    """Denormalized presence flags on the employee row.

    Written only by the attendance ledger, as the second half of a check-in
    or check-out. In transactional mode a failed write propagates so the
    surrounding transaction rolls back the ledger change too. Otherwise the
    ledger change is already committed: the write is retried and, if it
    still fails, the stale mirror is logged and the caller proceeds.
    """

    def __init__(self, employees: EmployeeRepository, *, transactional: bool, attempts: int = MIRROR_WRITE_ATTEMPTS):
        self._employees = employees
        self._transactional = transactional
        self._attempts = max(1, int(attempts))

    def record_check_in(self, employee: Employee, at: datetime) -> Employee:
        mirrored = replace(employee, is_present=True, last_check_in=at)
        self._write(mirrored)
        return mirrored

    def record_check_out(self, employee: Employee, at: datetime) -> Employee:
        mirrored = replace(employee, is_present=False, last_check_out=at)
        self._write(mirrored)
        return mirrored

    def _write(self, employee: Employee) -> None:
        if self._transactional:
            self._apply(employee)
            return

        for attempt in range(1, self._attempts + 1):
            try:
                self._apply(employee)
                return
            except StorageUnavailableError:
                if attempt < self._attempts:
                    logger.warning(
                        "Presence mirror write failed for employee %s (attempt %s/%s), retrying",
                        employee.employee_id,
                        attempt,
                        self._attempts,
                    )
                    continue
                logger.error(
                    "Presence mirror for employee %s is stale: wanted is_present=%s "
                    "last_check_in=%s last_check_out=%s",
                    employee.employee_id,
                    employee.is_present,
                    employee.last_check_in,
                    employee.last_check_out,
                    exc_info=True,
                )

    def _apply(self, employee: Employee) -> None:
        ok = self._employees.update_presence(
            employee.employee_id,
            is_present=employee.is_present,
            last_check_in=employee.last_check_in,
            last_check_out=employee.last_check_out,
        )
        if not ok:
            raise StorageUnavailableError(f"Presence write for employee {employee.employee_id} was not confirmed")
