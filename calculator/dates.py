# Date-only normalization applied at the ingestion boundary
from typing import Optional, Union
from datetime import date, datetime, timedelta

from calculator.errors import InvalidDateRange

DateLike = Union[date, datetime, str]

ONE_DAY = timedelta(days=1)


def to_date(value: Optional[DateLike]) -> date:
    """
    Normalize a date, datetime or ISO string to a date-only value.

    Time of day and any UTC offset are dropped without conversion, so
    "2025-07-04T23:30:00-05:00" is July 4th regardless of the server zone.

    Args:
        value: date, datetime or ISO 8601 string

    Returns:
        The calendar date

    Raises:
        InvalidDateRange: If the value is missing or not a valid calendar date
    """
    if value is None or value == "":
        raise InvalidDateRange("Date is required")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateRange(f"Unsupported date value: {value!r}")
    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace("Z", "")).date()
    except ValueError:
        raise InvalidDateRange(f"Invalid date: {value!r}")


def parse_date(value: Optional[DateLike]) -> Optional[date]:
    """Like to_date, but returns None instead of raising."""
    try:
        return to_date(value)
    except InvalidDateRange:
        return None


def to_date_range(start: Optional[DateLike], end: Optional[DateLike]) -> tuple[date, date]:
    """Normalize both ends of an inclusive range and check start <= end."""
    start_day, end_day = to_date(start), to_date(end)
    if start_day > end_day:
        raise InvalidDateRange(
            f"Start date {start_day.isoformat()} is after end date {end_day.isoformat()}"
        )
    return start_day, end_day


def previous_day(day: date) -> Optional[date]:
    """The day before `day`, or None at date.min."""
    try:
        return day - ONE_DAY
    except OverflowError:
        return None


def next_day(day: date) -> Optional[date]:
    """The day after `day`, or None at date.max."""
    try:
        return day + ONE_DAY
    except OverflowError:
        return None
