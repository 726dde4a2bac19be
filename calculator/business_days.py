"""Business-day counting.

A business (working) day is Monday-Friday and not a holiday. All functions
here are pure: they read only their arguments and never do I/O, so callers
may memoize or run them from any request context.

Holiday sets passed in are expected to be already scoped to the user's
province (national + provincial); see utils.nager.filter_holidays_for_province.
"""

import logging
from datetime import date
from typing import AbstractSet, Iterable, Iterator, Optional

from calculator.dates import DateLike, ONE_DAY, parse_date, to_date_range
from calculator.errors import InvalidDateRange
from calculator.vacation_data import BusinessDayResult

logger = logging.getLogger(__name__)

HALF_DAY = 0.5


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5  # Saturday/Sunday


def is_working_day(day: date, holidays: AbstractSet[date] = frozenset()) -> bool:
    """Return True if the given date is NOT a weekend and NOT a holiday."""
    return not is_weekend(day) and day not in holidays


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every calendar day from start to end, inclusive."""
    current = start
    while current <= end:
        yield current
        if current == end:
            break  # end may be date.max
        current += ONE_DAY


def count_calendar_days(start: date, end: date) -> int:
    return (end - start).days + 1


def holiday_date_set(holidays: Optional[Iterable]) -> set[date]:
    """
    Build a lookup set of holiday dates.

    Accepts Holiday models, mappings with a "date" key, or bare dates/ISO
    strings. Entries whose date cannot be parsed are skipped.
    """
    dates: set[date] = set()
    for h in holidays or ():
        if isinstance(h, (date, str)):
            raw = h
        elif isinstance(h, dict):
            raw = h.get("date")
        else:
            raw = getattr(h, "date", None)
        d = parse_date(raw)
        if d is None:
            logger.warning("Skipping holiday with invalid date: %r", raw)
            continue
        dates.add(d)
    return dates


def calculate_business_days(
    start: DateLike,
    end: DateLike,
    holidays: AbstractSet[date] = frozenset(),
    is_half_day: bool = False,
) -> float:
    """
    Count the working days consumed by an inclusive date range.

    Half-day handling:
      - single working day  -> 0.5
      - single non-working day -> 0 (nothing was consumed)
      - multi-day range -> working days - 0.5, never below 0

    Args:
        start: First day of the range
        end: Last day of the range
        holidays: Holiday dates that apply to the user
        is_half_day: Whether the booking is a half-day

    Returns:
        Non-negative number of days in 0.5 increments

    Raises:
        InvalidDateRange: If a date is invalid or start is after end
    """
    start_day, end_day = to_date_range(start, end)

    count = 0
    for day in iter_days(start_day, end_day):
        if is_working_day(day, holidays):
            count += 1

    if not is_half_day:
        return float(count)
    if start_day == end_day:
        return HALF_DAY if count else 0.0
    return max(0.0, count - HALF_DAY)


def try_calculate_business_days(
    start: DateLike,
    end: DateLike,
    holidays: AbstractSet[date] = frozenset(),
    is_half_day: bool = False,
) -> BusinessDayResult:
    """calculate_business_days, reporting range errors in the result instead of raising."""
    try:
        days = calculate_business_days(start, end, holidays, is_half_day)
    except InvalidDateRange as e:
        return BusinessDayResult(ok=False, error=e.message, error_code=e.code)
    return BusinessDayResult(ok=True, days=days)


def booking_business_days(start: date, end: date, holidays: AbstractSet[date], is_half_day: bool) -> float:
    """
    Days a stored booking consumes from the allowance.

    The half-day flag only reduces single-day bookings; a multi-day booking
    flagged half-day counts every working day.
    """
    return calculate_business_days(start, end, holidays, is_half_day and start == end)
