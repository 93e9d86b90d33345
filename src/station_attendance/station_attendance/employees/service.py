from __future__ import annotations

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.exceptions import AuthenticationError, EmployeeNotFoundError, ValidationError
from .model import PresenceSummary
from .repository import EmployeeRepository


class EmployeeAuthService:
    """Use case: employee login for the check-in screens."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def authenticate(self, email: str, password: str) -> PresenceSummary:
        email = require_non_empty(email, "Email")
        if password is not None and not isinstance(password, str):
            raise ValidationError("Password must be a string")
        employee = self._employees.get_by_email(email)
        if not employee:
            raise AuthenticationError("Wrong email or password")
        if not employee.is_active:
            raise AuthenticationError("Account disabled")

        try:
            ok = check_password_hash(employee.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Wrong email or password")

        return employee.presence_summary()

    def current(self, employee_id: int) -> PresenceSummary:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise EmployeeNotFoundError(employee_id)
        return employee.presence_summary()
