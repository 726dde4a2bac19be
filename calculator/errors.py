# Vacation service exceptions


class VacationServiceError(Exception):
    """Base error for vacation calculations. `code` is stable for API clients."""

    code = "UNKNOWN_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code


class InvalidDateRange(VacationServiceError):
    """Start date after end date, or a date that is not a valid calendar date."""

    code = "INVALID_DATE_RANGE"


class ValidationError(VacationServiceError):
    code = "VALIDATION_ERROR"


class OverlappingBooking(VacationServiceError):
    code = "OVERLAPPING_BOOKING"


class HolidayProviderError(VacationServiceError):
    code = "HOLIDAY_PROVIDER_ERROR"
