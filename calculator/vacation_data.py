# Vacation data models
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from calculator.dates import to_date
from calculator.errors import InvalidDateRange
from calculator.holiday_data import Holiday


class HalfDayPortion(str, Enum):
    AM = "AM"
    PM = "PM"


class VacationBooking(BaseModel):
    """A user's booked vacation, inclusive of both dates."""
    id: Optional[str] = None
    user_id: Optional[str] = None
    start_date: date
    end_date: date
    note: Optional[str] = None
    is_half_day: bool = False
    half_day_portion: Optional[HalfDayPortion] = None
    created_at: Optional[datetime] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _date_only(cls, v):
        return to_date(v)

    @field_validator("is_half_day", mode="before")
    @classmethod
    def _null_is_false(cls, v):
        return False if v is None else v

    @model_validator(mode="after")
    def _check_range(self):
        if self.start_date > self.end_date:
            raise InvalidDateRange(
                f"Start date {self.start_date.isoformat()} is after end date {self.end_date.isoformat()}"
            )
        if not self.is_half_day:
            self.half_day_portion = None
        return self

    @property
    def is_single_day(self) -> bool:
        return self.start_date == self.end_date


class VacationStatistics(BaseModel):
    total: float = 0
    used: float = 0
    remaining: float = 0


class BusinessDayResult(BaseModel):
    """
    Outcome of a single business-day calculation.

    Exactly one of `days` or `error` is set, so callers choose explicitly
    whether a bad range is a validation error, a zero, or a skip.
    """
    ok: bool
    days: Optional[float] = None
    error: Optional[str] = None
    error_code: Optional[str] = None


class EnrichedVacation(VacationBooking):
    """
    Response model for enriched bookings (list/detail views)
    """
    total_days_off: int
    working_days_off: float
    adjacent_holidays: List[Holiday] = Field(default_factory=list)
    weekend_before: bool = False
    weekend_after: bool = False
    is_long_weekend: bool = False
    extended_days_off: int = 0
    message: Optional[str] = None
