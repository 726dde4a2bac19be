# Aggregate vacation statistics
import logging
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from calculator.business_days import booking_business_days, holiday_date_set
from calculator.errors import InvalidDateRange
from calculator.vacation_data import VacationBooking, VacationStatistics

logger = logging.getLogger(__name__)

BookingLike = Union[VacationBooking, Mapping[str, Any]]


def coerce_booking(vacation: BookingLike) -> VacationBooking:
    """
    Accept a VacationBooking or a raw row as stored (snake_case keys).

    Raises:
        InvalidDateRange: If the row is not a mapping, or its dates are
            missing, unparseable or reversed
    """
    if isinstance(vacation, VacationBooking):
        return vacation
    try:
        row = dict(vacation)
    except (TypeError, ValueError):
        raise InvalidDateRange(f"Invalid vacation booking: {vacation!r}")
    try:
        return VacationBooking.model_validate(row)
    except PydanticValidationError as e:
        raise InvalidDateRange(f"Invalid vacation booking: {e.errors()[0].get('msg')}")


def booking_label(vacation: BookingLike) -> str:
    if isinstance(vacation, Mapping):
        return str(vacation.get("id") or "Unknown ID")
    return str(getattr(vacation, "id", None) or "Unknown ID")


def iter_valid_bookings(vacations: Iterable[BookingLike], context: str) -> Iterable[VacationBooking]:
    """Yield parsed bookings, logging and skipping the ones with bad dates."""
    for vacation in vacations:
        try:
            yield coerce_booking(vacation)
        except InvalidDateRange as e:
            logger.warning("[%s] Skipping vacation with invalid dates: %s (%s)", context, booking_label(vacation), e)


def calculate_vacation_stats(
    total_allowance: float,
    vacations: Optional[Iterable[BookingLike]],
    holidays: Optional[Iterable[Any]],
) -> VacationStatistics:
    """
    Used and remaining vacation days against an allowance.

    Weekends and holidays inside a booking are not counted. A single-day
    half-day booking counts 0.5. Bookings with invalid dates are skipped so
    one bad row does not hide the rest of the balance.
    """
    if total_allowance < 0:
        logger.warning("[calculate_vacation_stats] Invalid total_allowance: %s", total_allowance)
        return VacationStatistics(used=0, remaining=0, total=0)
    if vacations is None or holidays is None:
        logger.warning("[calculate_vacation_stats] Missing vacations or holidays data.")
        return VacationStatistics(used=0, remaining=total_allowance, total=total_allowance)

    holiday_dates = holiday_date_set(holidays)
    used = 0.0
    for booking in iter_valid_bookings(vacations, "calculate_vacation_stats"):
        days = booking_business_days(booking.start_date, booking.end_date, holiday_dates, booking.is_half_day)
        logger.debug(
            "[calculate_vacation_stats] %s %s..%s -> %s day(s)",
            booking.id, booking.start_date, booking.end_date, days,
        )
        used += days

    remaining = max(0, total_allowance - used)
    logger.debug("[calculate_vacation_stats] Total used business days: %s", used)
    return VacationStatistics(used=used, remaining=remaining, total=total_allowance)


def date_span(vacations: Iterable[BookingLike]) -> Optional[Tuple[date, date]]:
    """Earliest start and latest end over the valid bookings, or None."""
    bookings = list(iter_valid_bookings(vacations, "date_span"))
    if not bookings:
        return None
    return min(b.start_date for b in bookings), max(b.end_date for b in bookings)
