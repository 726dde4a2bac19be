import logging
import sys
import uuid
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Body, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

from utils.environment import (
    log_environment_config, validate_required_env, get_app_name, get_debug_mode, get_default_province,
    get_default_vacation_days, PROVINCES,
)
from utils.api_models import (
    BusinessDaysReq, BusinessDaysResp, VacationStatsReq, VacationStatsResp, EnrichReq, EnrichResp,
    OverlapReq, OverlapResp, BookingCheckReq, BookingCheckResp, HolidaysResp,
)
from utils.client_registry import client_registry
from utils.datetime_utils import format_date_range
from utils.nager import (
    MAX_HOLIDAY_YEAR, MIN_HOLIDAY_YEAR, get_holidays_between, get_holidays_for_year, filter_holidays_for_province,
)
from calculator import (
    Holiday, VacationServiceError, InvalidDateRange, ValidationError, OverlappingBooking, HolidayProviderError,
    calculate_business_days, calculate_vacation_stats, enrich_vacations, find_overlapping_booking, ensure_no_overlap,
    holiday_date_set,
)
from calculator.business_days import booking_business_days, count_calendar_days
from calculator.dates import next_day, previous_day, to_date_range
from calculator.vacation_stats import date_span

load_dotenv()


# --- App & Logging ---
app = FastAPI(
    title="Vacation Tracker API",
    version="0.1.0",
    description="Business-day counting, vacation balances and long weekend detection."
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logging.basicConfig(
    level=logging.DEBUG if get_debug_mode() else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(get_app_name())

def _ensure_logger():
    desired_level = logging.DEBUG if get_debug_mode() else logging.INFO
    logger.setLevel(desired_level)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        logger.addHandler(h)
    logger.propagate = False

_ensure_logger()


# --- Config ---

log_environment_config(logger)
validate_required_env()

STATUS_BY_CODE = {
    InvalidDateRange.code: 400,
    ValidationError.code: 400,
    OverlappingBooking.code: 409,
    HolidayProviderError.code: 502,
}


@app.exception_handler(VacationServiceError)
async def _vacation_error_handler(request: Request, exc: VacationServiceError):
    status = STATUS_BY_CODE.get(exc.code, 500)
    logger.warning("%s %s -> %s %s: %s", request.method, request.url.path, status, exc.code, exc.message)
    return JSONResponse(status_code=status, content={"detail": {"error": exc.message, "code": exc.code}})


@app.on_event("shutdown")
async def _shutdown():
    await client_registry.close_all()
    logger.info("All shared clients closed")


def _check_province(province: Optional[str]) -> Optional[str]:
    if province is None:
        return None
    code = province.strip().upper()
    if code not in PROVINCES:
        raise ValidationError(f"Unknown province code: {province!r}")
    return code


async def _resolve_holidays(
    holidays: Optional[List[Holiday]],
    province: Optional[str],
    span,
) -> List[Holiday]:
    """
    Use the caller's holidays when given, otherwise load them for the span.
    A provider failure raises rather than counting holidays as working days.
    """
    province = _check_province(province)
    if holidays is not None:
        return filter_holidays_for_province(holidays, province) if province else holidays
    if span is None:
        return []
    start, end = span
    return await get_holidays_between(start, end, province or get_default_province(), strict=True)


# --- Routes ---

@app.get("/health", summary="Liveness check")
async def health():
    return {"status": "ok", "app": get_app_name()}


@app.post("/business-days", response_model=BusinessDaysResp, summary="Count working days in a date range")
async def business_days(req: BusinessDaysReq = Body(...)):
    """
    Working days a booking from start_date to end_date would consume.
    """
    rid = uuid.uuid4().hex[:8]
    start, end = to_date_range(req.start_date, req.end_date)
    logger.debug("business_days[%s] %s..%s half_day=%s", rid, start, end, req.is_half_day)
    holidays = await _resolve_holidays(req.holidays, req.province, (start, end))
    days = calculate_business_days(start, end, holiday_date_set(holidays), req.is_half_day)
    return {
        "start_date": start,
        "end_date": end,
        "is_half_day": req.is_half_day,
        "business_days": days,
        "total_days": count_calendar_days(start, end),
        "date_range": format_date_range(start, end),
    }


@app.post("/vacation-stats", response_model=VacationStatsResp, summary="Used and remaining vacation days")
async def vacation_stats(req: VacationStatsReq = Body(...)):
    """
    Aggregate used/remaining days for a list of bookings. Bookings with
    invalid dates are skipped.
    """
    rid = uuid.uuid4().hex[:8]
    allowance = req.total_allowance if req.total_allowance is not None else get_default_vacation_days()
    logger.debug("vacation_stats[%s] allowance=%s bookings=%s", rid, allowance, len(req.vacations or []))
    holidays = await _resolve_holidays(req.holidays, req.province, date_span(req.vacations or []))
    stats = calculate_vacation_stats(allowance, req.vacations, holidays)
    return stats.model_dump()


@app.post("/vacations/enrich", response_model=EnrichResp, response_model_exclude_none=True, summary="Add long weekend and adjacent holiday details")
async def vacations_enrich(req: EnrichReq = Body(...)):
    span = date_span(req.vacations)
    if span is not None:
        # Adjacent holidays sit one day outside the bookings
        span = (previous_day(span[0]) or span[0], next_day(span[1]) or span[1])
    holidays = await _resolve_holidays(req.holidays, req.province, span)
    return {"vacations": enrich_vacations(req.vacations, holidays, req.upcoming_only, req.today)}


@app.post("/vacations/overlap", response_model=OverlapResp, response_model_exclude_none=True, summary="Check a range against existing bookings")
async def vacations_overlap(req: OverlapReq = Body(...)):
    clash = find_overlapping_booking(req.vacations, req.start_date, req.end_date, req.exclude_id)
    return {"overlaps": clash is not None, "booking": clash}


@app.post("/vacations/check", response_model=BookingCheckResp, summary="Validate a new or updated booking")
async def vacations_check(req: BookingCheckReq = Body(...)):
    """
    Run the checks a booking must pass before it is saved: a valid range
    that does not overlap the user's other bookings. Answers 409 on overlap,
    otherwise the working days the booking would consume.
    """
    rid = uuid.uuid4().hex[:8]
    start, end = to_date_range(req.start_date, req.end_date)
    logger.debug("vacations_check[%s] %s..%s exclude=%s", rid, start, end, req.exclude_id)
    ensure_no_overlap(req.vacations, start, end, req.exclude_id)
    holidays = await _resolve_holidays(req.holidays, req.province, (start, end))
    return {
        "start_date": start,
        "end_date": end,
        "is_half_day": req.is_half_day,
        "business_days": booking_business_days(start, end, holiday_date_set(holidays), req.is_half_day),
    }


@app.get("/holidays", response_model=HolidaysResp, summary="Holidays for a year and province")
async def holidays(
    year: int = Query(..., ge=MIN_HOLIDAY_YEAR, le=MAX_HOLIDAY_YEAR),
    province: Optional[str] = Query(None, min_length=2, max_length=2),
    bank_only: bool = Query(False),
):
    province = _check_province(province) or get_default_province()
    result = await get_holidays_for_year(year, province, strict=True)
    if not result:
        raise HTTPException(status_code=404, detail=f"No holidays found for {year}")
    if bank_only:
        result = [h for h in result if h.is_bank]
    return {"year": year, "province": province, "holidays": result}
