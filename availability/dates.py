"""
Calendar helpers shared by the resolver and the timeline builder.

All weekday arithmetic goes through to_monday_based so the
Sunday-based and Monday-based conventions are converted in one place.
"""

import re
from datetime import date as date_type, datetime, timedelta, timezone
from typing import Iterator, Union

from .errors import InvalidDateError

DateLike = Union[str, date_type, datetime]

# Extended YYYY-MM-DD only; basic ("20240115") and week ("2024-W03-1") forms are refused
ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}($|[T ])")


def to_monday_based(native_day: int) -> int:
    """Convert a Sunday=0..Saturday=6 index to Monday=0..Sunday=6."""
    return 6 if native_day == 0 else native_day - 1


def native_day_index(day: date_type) -> int:
    """Sunday=0..Saturday=6."""
    return day.isoweekday() % 7


def parse_date(value: DateLike) -> date_type:
    """
    Read a calendar date from a string, date or datetime.
    Datetimes carrying a timezone are reduced to their UTC calendar date.
    """
    if isinstance(value, datetime):
        return _utc_calendar_date(value)
    if isinstance(value, date_type):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(value)

    text = value.strip()
    if not ISO_DATE.match(text):
        raise InvalidDateError(value)
    if len(text) == 10:
        try:
            return date_type.fromisoformat(text)
        except ValueError:
            raise InvalidDateError(value) from None

    # Full timestamps ("2024-01-15T10:00:00Z")
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise InvalidDateError(value) from None
    return _utc_calendar_date(parsed)


def normalize_date(value: DateLike) -> str:
    """Canonical YYYY-MM-DD form."""
    return parse_date(value).isoformat()


def iter_dates(start: date_type, end: date_type) -> Iterator[date_type]:
    """Every calendar date from start to end inclusive. Empty when end < start."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def _utc_calendar_date(moment: datetime) -> date_type:
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()
