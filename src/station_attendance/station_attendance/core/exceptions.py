from __future__ import annotations

from .enums import FailureKind


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind: FailureKind = FailureKind.VALIDATION
    retryable: bool = False


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    kind = FailureKind.AUTHENTICATION


class NotFoundError(DomainError):
    kind = FailureKind.NOT_FOUND


class EmployeeNotFoundError(NotFoundError):
    def __init__(self, employee_id: int):
        super().__init__(f"Employee {employee_id} not found")
        self.employee_id = employee_id


class ConflictError(DomainError):
    """The requested transition conflicts with today's attendance record."""

    kind = FailureKind.CONFLICT


class AlreadyCheckedInError(ConflictError):
    def __init__(self, employee_id: int):
        super().__init__("You have already checked in today")
        self.employee_id = employee_id


class AlreadyCheckedOutError(ConflictError):
    def __init__(self, employee_id: int):
        super().__init__("You have already checked out today")
        self.employee_id = employee_id


class PreconditionError(DomainError):
    kind = FailureKind.INVALID_PRECONDITION


class NoCheckInFoundError(PreconditionError):
    def __init__(self, employee_id: int):
        super().__init__("You must check in before checking out")
        self.employee_id = employee_id


class InactiveEmployeeError(PreconditionError):
    def __init__(self, employee_id: int):
        super().__init__("Employee account is disabled")
        self.employee_id = employee_id


class StorageUnavailableError(DomainError):
    """The store could not be reached or a write could not be confirmed.

    The only retryable failure: repeating a whole check-in/check-out is safe
    because record creation is guarded by the unique key.
    """

    kind = FailureKind.STORAGE_UNAVAILABLE
    retryable = True
