from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Stored status of a daily attendance record."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class FailureKind(str, Enum):
    """Tag carried by every domain error, used by the HTTP layer."""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID_PRECONDITION = "invalid_precondition"
    STORAGE_UNAVAILABLE = "storage_unavailable"
