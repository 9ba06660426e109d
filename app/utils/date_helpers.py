"""
Date/time parsing helpers for provider payloads.
"""

from datetime import date, datetime, time, timezone
from typing import Any


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_date(value: Any) -> date | None:
    """Parse date from string or return None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), "%Y-%m-%d").date()
        except ValueError:
            return None
    return None


def parse_time(value: Any) -> time | None:
    """Parse time from string or return None.

    Accepts "HH:MM:SS" and "HH:MM", with an optional "Z" or "+00:00" suffix.
    """
    if value is None:
        return None
    if isinstance(value, time):
        return value
    if isinstance(value, str):
        text = value.strip().replace("Z", "").replace("+00:00", "")
        try:
            return datetime.strptime(text, "%H:%M:%S").time()
        except ValueError:
            try:
                return datetime.strptime(text, "%H:%M").time()
            except ValueError:
                return None
    return None


def to_utc_datetime(date_value: Any, time_value: Any = None) -> datetime | None:
    """Combine a provider date and time into an aware UTC datetime.

    A missing or unparseable time means midnight; a missing date means None.
    """
    day = parse_date(date_value)
    if day is None:
        return None
    clock = parse_time(time_value) or time(0, 0)
    return datetime.combine(day, clock.replace(tzinfo=None), tzinfo=timezone.utc)
