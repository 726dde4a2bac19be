# Overlapping booking detection
import logging
from typing import Iterable, Optional

from calculator.dates import DateLike, to_date_range
from calculator.errors import OverlappingBooking
from calculator.vacation_data import VacationBooking
from calculator.vacation_stats import BookingLike, iter_valid_bookings

logger = logging.getLogger(__name__)


def find_overlapping_booking(
    bookings: Optional[Iterable[BookingLike]],
    start: DateLike,
    end: DateLike,
    exclude_id: Optional[str] = None,
) -> Optional[VacationBooking]:
    """
    Return the first existing booking whose inclusive range intersects
    [start, end], ignoring the booking with `exclude_id` (the one being
    updated).

    Raises:
        InvalidDateRange: If the requested range itself is invalid
    """
    start_day, end_day = to_date_range(start, end)
    logger.debug("Checking for overlaps with new booking: %s to %s", start_day, end_day)
    for booking in iter_valid_bookings(bookings or (), "find_overlapping_booking"):
        if exclude_id is not None and booking.id == exclude_id:
            continue
        if start_day <= booking.end_date and booking.start_date <= end_day:
            logger.debug("Overlaps existing booking %s: %s to %s", booking.id, booking.start_date, booking.end_date)
            return booking
    return None


def has_overlap(
    bookings: Optional[Iterable[BookingLike]],
    start: DateLike,
    end: DateLike,
    exclude_id: Optional[str] = None,
) -> bool:
    return find_overlapping_booking(bookings, start, end, exclude_id) is not None


def ensure_no_overlap(
    bookings: Optional[Iterable[BookingLike]],
    start: DateLike,
    end: DateLike,
    exclude_id: Optional[str] = None,
) -> None:
    """
    Raises:
        OverlappingBooking: If the range collides with an existing booking
    """
    clash = find_overlapping_booking(bookings, start, end, exclude_id)
    if clash is not None:
        raise OverlappingBooking("This vacation overlaps with an existing booking")
