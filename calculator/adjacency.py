"""Long weekend and adjacent-holiday detection for booked vacations.

A booking is "adjacent" to a weekend or holiday that falls exactly one
calendar day before its start or one day after its end. Adjacency turns a
short booking into a long weekend and adds to the extended days off shown
to the user.
"""

import logging
from datetime import date
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from calculator.business_days import booking_business_days, count_calendar_days, holiday_date_set
from calculator.dates import next_day, previous_day
from calculator.errors import InvalidDateRange
from calculator.holiday_data import Holiday
from calculator.vacation_data import EnrichedVacation
from calculator.vacation_stats import BookingLike, coerce_booking, iter_valid_bookings
from utils.datetime_utils import format_days

logger = logging.getLogger(__name__)

SATURDAY = 5
SUNDAY = 6
LONG_WEEKEND_MAX_DAYS = 2


def find_adjacent_holidays(start: date, end: date, holidays: Iterable[Holiday]) -> List[Holiday]:
    """Holidays on the day before start or the day after end."""
    neighbours = {d for d in (previous_day(start), next_day(end)) if d is not None}
    return [h for h in holidays if h.date in neighbours]


def _is_weekend_day(day: Optional[date]) -> bool:
    return day is not None and day.weekday() >= SATURDAY


def weekend_before(start: date) -> bool:
    return _is_weekend_day(previous_day(start))


def weekend_after(end: date) -> bool:
    return _is_weekend_day(next_day(end))


def extended_days_off(start: date, end: date, adjacent_holiday_count: int = 0) -> int:
    """
    Calendar days off including the bordering weekend and holidays.

    A weekend day right before start credits both weekend days. After the
    end, a Saturday credits the whole weekend (+2) but a Sunday only itself
    (+1). Days outside the calendar (before date.min, after date.max) credit
    nothing.
    """
    total = count_calendar_days(start, end)
    if weekend_before(start):
        total += 2
    day_after = next_day(end)
    if day_after is not None and day_after.weekday() == SATURDAY:
        total += 2
    elif day_after is not None and day_after.weekday() == SUNDAY:
        total += 1
    return total + adjacent_holiday_count


def is_long_weekend(total_days: int, near_weekend: bool, near_holiday: bool) -> bool:
    return total_days <= LONG_WEEKEND_MAX_DAYS and (near_weekend or near_holiday)


def time_off_message(
    total_days: int,
    working_days: float,
    extended: int,
    near_weekend: bool,
    near_holiday: bool,
) -> Optional[str]:
    if near_weekend and near_holiday:
        return f"Extended break: {extended} days off in a row including weekends and holidays."
    if near_weekend:
        return f"Long weekend: {extended} days off in a row."
    if near_holiday:
        return f"Extended break: {extended} days off in a row including holidays."
    if total_days > LONG_WEEKEND_MAX_DAYS:
        return f"Total time off: {total_days} days ({format_days(working_days)} working days)."
    return None


def enrich_vacation(vacation: BookingLike, holidays: Optional[Iterable[Any]]) -> EnrichedVacation:
    """
    Add day counts and adjacency details to a booking.

    Raises:
        InvalidDateRange: If the booking's dates are invalid
    """
    booking = coerce_booking(vacation)
    holiday_list = _as_holidays(holidays)
    holiday_dates = holiday_date_set(holiday_list)
    start, end = booking.start_date, booking.end_date

    total = count_calendar_days(start, end)
    working = booking_business_days(start, end, holiday_dates, booking.is_half_day)
    adjacent = find_adjacent_holidays(start, end, holiday_list)
    near_weekend = weekend_before(start) or weekend_after(end)
    near_holiday = bool(adjacent)
    extended = extended_days_off(start, end, len(adjacent))

    return EnrichedVacation(
        **booking.model_dump(),
        total_days_off=total,
        working_days_off=working,
        adjacent_holidays=adjacent,
        weekend_before=weekend_before(start),
        weekend_after=weekend_after(end),
        is_long_weekend=is_long_weekend(total, near_weekend, near_holiday),
        extended_days_off=extended,
        message=time_off_message(total, working, extended, near_weekend, near_holiday),
    )


def enrich_vacations(
    vacations: Optional[Iterable[BookingLike]],
    holidays: Optional[Iterable[Any]],
    upcoming_only: bool = False,
    today: Optional[date] = None,
) -> List[EnrichedVacation]:
    """
    Enrich a list of bookings, sorted by start date.

    Bookings with invalid dates are skipped. With `upcoming_only`, bookings
    that ended before `today` are left out.
    """
    holiday_list = _as_holidays(holidays)
    today = today or date.today()
    enriched = []
    for booking in iter_valid_bookings(vacations or (), "enrich_vacations"):
        if upcoming_only and booking.end_date < today:
            continue
        enriched.append(enrich_vacation(booking, holiday_list))
    enriched.sort(key=lambda v: v.start_date)
    return enriched


def _as_holidays(holidays: Optional[Iterable[Any]]) -> List[Holiday]:
    out: List[Holiday] = []
    for h in holidays or ():
        if isinstance(h, Holiday):
            out.append(h)
            continue
        try:
            out.append(Holiday.model_validate(h))
        except (PydanticValidationError, InvalidDateRange) as e:
            logger.warning("Skipping invalid holiday %r: %s", h, e)
    return out
