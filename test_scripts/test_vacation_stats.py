#!/usr/bin/env python3
"""
Tests for aggregate vacation statistics (used / remaining / total).
"""

import sys
import os
import logging

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from calculator import Holiday, VacationBooking, calculate_vacation_stats
from calculator.vacation_stats import date_span


def _row(start, end, **extra):
    return {"id": extra.pop("id", f"{start}:{end}"), "user_id": "u1", "start_date": start, "end_date": end, **extra}


def test_no_bookings():
    stats = calculate_vacation_stats(20, [], [])
    assert stats.model_dump() == {"total": 20, "used": 0, "remaining": 20}


def test_negative_allowance_is_clamped():
    stats = calculate_vacation_stats(-5, [_row("2025-03-03", "2025-03-07")], [])
    assert (stats.used, stats.remaining, stats.total) == (0, 0, 0)


def test_missing_collections_degrade():
    for vacations, holidays in ((None, []), ([_row("2025-03-03", "2025-03-07")], None)):
        stats = calculate_vacation_stats(20, vacations, holidays)
        assert (stats.used, stats.remaining, stats.total) == (0, 20, 20)


def test_sums_across_bookings():
    vacations = [_row("2025-03-03", "2025-03-07"), _row("2025-03-10", "2025-03-14")]
    stats = calculate_vacation_stats(20, vacations, [])
    assert stats.used == 10
    assert stats.remaining == 10
    assert stats.total == 20


def test_holidays_and_weekends_not_counted():
    # Jun 30 - Jul 6 2025: Canada Day on Tuesday, weekend at the end
    vacations = [VacationBooking(user_id="u1", start_date="2025-06-30", end_date="2025-07-06")]
    holidays = [Holiday(date="2025-07-01", name="Canada Day")]
    stats = calculate_vacation_stats(15, vacations, holidays)
    assert stats.used == 4
    assert stats.remaining == 11


def test_holidays_as_raw_rows():
    stats = calculate_vacation_stats(15, [_row("2025-06-30", "2025-07-04")], [{"date": "2025-07-01T00:00:00Z"}])
    assert stats.used == 4


def test_single_half_day_counts_half():
    vacations = [_row("2025-03-04", "2025-03-04", is_half_day=True, half_day_portion="PM")]
    stats = calculate_vacation_stats(10, vacations, [])
    assert stats.used == 0.5
    assert stats.remaining == 9.5


def test_half_day_on_weekend_counts_nothing():
    stats = calculate_vacation_stats(10, [_row("2025-03-08", "2025-03-08", is_half_day=True)], [])
    assert stats.used == 0


def test_half_day_flag_ignored_on_multi_day_booking():
    stats = calculate_vacation_stats(10, [_row("2025-03-03", "2025-03-07", is_half_day=True)], [])
    assert stats.used == 5


def test_invalid_bookings_are_skipped(caplog):
    vacations = [
        _row("2025-03-07", "2025-03-03", id="reversed"),
        _row("not-a-date", "2025-03-03", id="garbage"),
        {"id": "missing"},
        _row("2025-03-10", "2025-03-11"),
    ]
    with caplog.at_level(logging.WARNING):
        stats = calculate_vacation_stats(20, vacations, [])
    assert stats.used == 2
    assert stats.remaining == 18
    assert "reversed" in caplog.text
    assert "garbage" in caplog.text


def test_rows_that_are_not_mappings_are_skipped(caplog):
    vacations = [None, 42, "2025-03-03", _row("2025-03-10", "2025-03-11")]
    with caplog.at_level(logging.WARNING):
        stats = calculate_vacation_stats(20, vacations, [])
    assert stats.used == 2
    assert "Skipping vacation" in caplog.text


def test_booking_ending_on_last_calendar_day():
    vacations = [_row("2025-03-03", "2025-03-07"), _row("9999-12-30", "9999-12-31")]
    stats = calculate_vacation_stats(20, vacations, [])
    assert stats.used == 7
    assert stats.remaining == 13


def test_remaining_never_negative():
    stats = calculate_vacation_stats(3, [_row("2025-03-03", "2025-03-07")], [])
    assert stats.used == 5
    assert stats.remaining == 0


def test_null_half_day_flag_from_storage():
    stats = calculate_vacation_stats(5, [_row("2025-03-03", "2025-03-03", is_half_day=None)], [])
    assert stats.used == 1


def test_date_span():
    span = date_span([_row("2025-03-10", "2025-03-11"), _row("2025-01-02", "2025-01-03"), _row("x", "y")])
    assert [d.isoformat() for d in span] == ["2025-01-02", "2025-03-11"]
    assert date_span([]) is None


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
