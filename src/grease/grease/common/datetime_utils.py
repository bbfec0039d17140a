from __future__ import annotations

import calendar
from datetime import datetime, timedelta

from ..core.exceptions import ValidationError


def parse_iso_datetime(value: str) -> datetime:
    """Parse a ``YYYY-MM-DDTHH:MM[:SS]`` string into a naive datetime."""
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date/time: {value!r}")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def add_months(value: datetime, months: int) -> datetime:
    """Shift by whole months, clamping the day to the end of the target month."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def add_days(value: datetime, days: int) -> datetime:
    return value + timedelta(days=days)
