# Pydantic models for API requests and responses
from datetime import date
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field

from calculator.holiday_data import Holiday
from calculator.vacation_data import EnrichedVacation, VacationBooking


class BusinessDaysReq(BaseModel):
    start_date: str = Field(..., description="First day, ISO date")
    end_date: str = Field(..., description="Last day, ISO date")
    is_half_day: bool = Field(False, description="Half-day booking")
    holidays: Optional[List[Holiday]] = Field(
        None, description="Holidays that apply; loaded from the holiday API when omitted"
    )
    province: Optional[str] = Field(None, description="Province code used to load holidays")


class BusinessDaysResp(BaseModel):
    start_date: date
    end_date: date
    is_half_day: bool
    business_days: float
    total_days: int
    date_range: str


class VacationStatsReq(BaseModel):
    total_allowance: Optional[float] = Field(None, description="Vacation days per year; DEFAULT_VACATION_DAYS when omitted")
    # Rows as stored; bad rows are skipped, not rejected
    vacations: Optional[List[Dict[str, Any]]] = None
    holidays: Optional[List[Holiday]] = None
    province: Optional[str] = None


class VacationStatsResp(BaseModel):
    total: float
    used: float
    remaining: float


class EnrichReq(BaseModel):
    vacations: List[Dict[str, Any]] = Field(default_factory=list)
    holidays: Optional[List[Holiday]] = None
    province: Optional[str] = None
    upcoming_only: bool = False
    today: Optional[date] = None


class EnrichResp(BaseModel):
    vacations: List[EnrichedVacation]


class OverlapReq(BaseModel):
    start_date: str
    end_date: str
    exclude_id: Optional[str] = Field(None, description="Booking being updated")
    vacations: List[Dict[str, Any]] = Field(default_factory=list)


class OverlapResp(BaseModel):
    overlaps: bool
    booking: Optional[VacationBooking] = None


class BookingCheckReq(OverlapReq):
    is_half_day: bool = False
    holidays: Optional[List[Holiday]] = None
    province: Optional[str] = None


class BookingCheckResp(BaseModel):
    start_date: date
    end_date: date
    is_half_day: bool
    business_days: float


class HolidaysResp(BaseModel):
    year: int
    province: Optional[str] = None
    holidays: List[Holiday]
