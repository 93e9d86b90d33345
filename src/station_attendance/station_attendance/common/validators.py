from __future__ import annotations

from datetime import date
from typing import Optional, Tuple

from ..core.exceptions import ValidationError


def require_non_empty(value: object, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    if not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def date_range_or_none(start: Optional[date], end: Optional[date]) -> Tuple[Optional[date], Optional[date]]:
    """Inclusive range, only when both bounds are given; a lone bound is dropped."""
    if start is None or end is None:
        return None, None
    if start > end:
        raise ValidationError("startDate must not be after endDate")
    return start, end
