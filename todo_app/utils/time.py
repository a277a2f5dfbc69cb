from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Return an ISO 8601 string for the current UTC time."""
    return utc_now().isoformat()


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_iso_datetime(raw: str) -> datetime:
    """
    Parse an ISO 8601 date or datetime into an aware UTC datetime.

    Date-only input ("2026-10-18") means midnight UTC of that day.
    Raises ValueError for anything else, OverflowError when the UTC
    equivalent falls outside the supported date range.
    """
    return as_utc(datetime.fromisoformat(raw.strip()))
