"""Calendar-day helpers."""

from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo


def as_day(value: date | datetime) -> date:
    """Drop any time-of-day; a ``datetime`` becomes its calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def start_of_day(value: date | datetime) -> datetime:
    """Midnight (naive) of the given calendar day."""
    return datetime.combine(as_day(value), time.min)


def local_timezone() -> tzinfo:
    return datetime.now().astimezone().tzinfo


def utc_to_local(value: datetime) -> datetime:
    """Naive UTC timestamp (``datetime.utcnow`` columns) on the ``date.today()`` clock."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(local_timezone()).replace(tzinfo=None)
