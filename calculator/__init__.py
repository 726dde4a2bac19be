# Vacation calculator - central import for the date arithmetic
"""
Vacation day calculator: business days, aggregate statistics, adjacency
enrichment and overlap checks. Everything here is pure and synchronous.
"""

from .errors import (
    VacationServiceError,
    InvalidDateRange,
    ValidationError,
    OverlappingBooking,
    HolidayProviderError,
)
from .holiday_data import Holiday, HolidayType
from .vacation_data import (
    VacationBooking,
    HalfDayPortion,
    VacationStatistics,
    BusinessDayResult,
    EnrichedVacation,
)
from .business_days import (
    calculate_business_days,
    try_calculate_business_days,
    holiday_date_set,
    is_weekend,
    is_working_day,
)
from .vacation_stats import calculate_vacation_stats
from .adjacency import enrich_vacation, enrich_vacations, find_adjacent_holidays
from .overlap import find_overlapping_booking, has_overlap, ensure_no_overlap

__all__ = [
    "VacationServiceError",
    "InvalidDateRange",
    "ValidationError",
    "OverlappingBooking",
    "HolidayProviderError",
    "Holiday",
    "HolidayType",
    "VacationBooking",
    "HalfDayPortion",
    "VacationStatistics",
    "BusinessDayResult",
    "EnrichedVacation",
    "calculate_business_days",
    "try_calculate_business_days",
    "holiday_date_set",
    "is_weekend",
    "is_working_day",
    "calculate_vacation_stats",
    "enrich_vacation",
    "enrich_vacations",
    "find_adjacent_holidays",
    "find_overlapping_booking",
    "has_overlap",
    "ensure_no_overlap",
]
