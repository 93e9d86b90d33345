from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def load_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown reference timezone: {name!r}")


def utc_now() -> datetime:
    """Current server time, timezone-aware.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def as_aware(value: datetime, tz: tzinfo) -> datetime:
    """Attach ``tz`` to a naive wall-clock value; aware values pass through."""
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value


def start_of_day(value: datetime, tz: tzinfo) -> date:
    """Calendar day of ``value`` as seen in the reference timezone ``tz``."""
    return as_aware(value, tz).astimezone(tz).date()


def to_storage(value: Optional[datetime]) -> Optional[datetime]:
    """MySQL DATETIME columns hold naive UTC."""
    if value is None:
        return None
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_storage(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def isoformat_or_none(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None
