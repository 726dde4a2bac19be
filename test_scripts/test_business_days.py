#!/usr/bin/env python3
"""
Tests for business-day counting: weekends, holidays, half-days and
date-only normalization.
"""

import sys
import os
from datetime import date, datetime

import pytest

# Add the parent directory to the path so we can import the calculator
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from calculator import InvalidDateRange, calculate_business_days, try_calculate_business_days
from calculator.business_days import holiday_date_set, iter_days, is_working_day, count_calendar_days
from calculator.holiday_data import Holiday

# March 2025: the 3rd is a Monday
MON, TUE, WED, THU, FRI, SAT, SUN = (date(2025, 3, d) for d in range(3, 10))


def test_full_week_without_holidays():
    """Mon-Fri with nothing excluded counts every day."""
    assert calculate_business_days(MON, FRI, set()) == 5
    assert calculate_business_days(TUE, THU) == count_calendar_days(TUE, THU)


def test_weekend_ranges_count_zero():
    assert calculate_business_days(SAT, SAT, set()) == 0
    assert calculate_business_days(SAT, SUN, set()) == 0


def test_weekend_inside_range_is_skipped():
    assert calculate_business_days(THU, date(2025, 3, 11), set()) == 4


def test_holiday_inside_range_excluded():
    assert calculate_business_days(MON, FRI, {WED}, False) == 4


def test_same_inputs_same_result():
    first = calculate_business_days(MON, FRI, {WED}, True)
    second = calculate_business_days(MON, FRI, {WED}, True)
    assert first == second == 3.5


def test_half_day_single_weekday():
    assert calculate_business_days(MON, MON, set(), True) == 0.5


def test_half_day_single_weekend_day():
    assert calculate_business_days(SAT, SAT, set(), True) == 0


def test_half_day_single_holiday():
    assert calculate_business_days(WED, WED, {WED}, True) == 0


def test_half_day_multi_day_deducts_half():
    assert calculate_business_days(MON, FRI, set(), True) == 4.5


def test_half_day_multi_day_never_negative():
    """A half-day flag over a range with no working days stays at zero."""
    result = calculate_business_days(SAT, SUN, set(), True)
    assert result == 0, f"Expected 0, got {result}"


def test_start_after_end_raises():
    with pytest.raises(InvalidDateRange) as exc:
        calculate_business_days(FRI, MON, set())
    assert exc.value.code == "INVALID_DATE_RANGE"


def test_unparseable_date_raises():
    with pytest.raises(InvalidDateRange):
        calculate_business_days("2025-02-30", "2025-03-03")
    with pytest.raises(InvalidDateRange):
        calculate_business_days(None, "2025-03-03")


def test_try_calculate_reports_errors():
    ok = try_calculate_business_days(MON, FRI, {WED})
    assert ok.ok and ok.days == 4 and ok.error is None

    bad = try_calculate_business_days(FRI, MON)
    assert not bad.ok
    assert bad.days is None
    assert bad.error_code == "INVALID_DATE_RANGE"


def test_time_of_day_is_ignored():
    """Late-evening datetimes and offset strings stay on their calendar day."""
    assert calculate_business_days(datetime(2025, 3, 7, 23, 59), datetime(2025, 3, 7, 0, 1)) == 1
    assert calculate_business_days("2025-03-07T23:30:00-05:00", "2025-03-07T23:30:00-05:00") == 1
    assert calculate_business_days("2025-03-03T00:00:00.000Z", "2025-03-09T00:00:00Z") == 5


def test_year_end_range_with_holidays():
    holidays = holiday_date_set([
        Holiday(date="2025-12-25", name="Christmas Day"),
        {"date": "2025-12-26", "name": "Boxing Day"},
        "2026-01-01",
    ])
    assert calculate_business_days("2025-12-24", "2026-01-02", holidays) == 5


def test_holiday_date_set_skips_invalid_entries():
    dates = holiday_date_set([{"date": "nope"}, {"name": "no date"}, date(2025, 7, 1)])
    assert dates == {date(2025, 7, 1)}
    assert holiday_date_set(None) == set()


def test_iter_days_is_inclusive():
    days = list(iter_days(FRI, MON.replace(day=10)))
    assert days[0] == FRI and days[-1] == date(2025, 3, 10)
    assert len(days) == 4
    assert not is_working_day(SAT)
    assert is_working_day(MON, {WED})


def test_ranges_at_the_calendar_limits():
    """Ranges ending on date.max or starting on date.min are counted normally."""
    # 9999-12-31 is a Friday, 0001-01-01 a Monday
    assert calculate_business_days(date.max, date.max) == 1
    assert calculate_business_days("9999-12-27", "9999-12-31") == 5
    assert calculate_business_days(date.min, date.min) == 1
    assert calculate_business_days(date.min, date(1, 1, 7)) == 5
    assert list(iter_days(date(9999, 12, 30), date.max)) == [date(9999, 12, 30), date.max]


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
