#!/usr/bin/env python3
"""
Tests for overlapping booking detection.
"""

import sys
import os

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from calculator import InvalidDateRange, OverlappingBooking, ensure_no_overlap, find_overlapping_booking, has_overlap

EXISTING = [
    {"id": "march", "start_date": "2025-03-10", "end_date": "2025-03-14"},
    {"id": "july", "start_date": "2025-07-02", "end_date": "2025-07-02"},
    {"id": "broken", "start_date": "2025-05-10", "end_date": "2025-05-01"},
]


def test_detects_partial_and_contained_overlaps():
    assert find_overlapping_booking(EXISTING, "2025-03-07", "2025-03-10").id == "march"
    assert find_overlapping_booking(EXISTING, "2025-03-11", "2025-03-12").id == "march"
    assert find_overlapping_booking(EXISTING, "2025-03-01", "2025-03-31").id == "march"
    assert has_overlap(EXISTING, "2025-07-02", "2025-07-02")


def test_adjacent_ranges_do_not_overlap():
    assert not has_overlap(EXISTING, "2025-03-15", "2025-03-16")
    assert not has_overlap(EXISTING, "2025-07-01", "2025-07-01")


def test_excluded_booking_is_ignored():
    assert not has_overlap(EXISTING, "2025-03-11", "2025-03-12", exclude_id="march")


def test_invalid_existing_rows_are_ignored():
    assert not has_overlap(EXISTING, "2025-05-02", "2025-05-05")
    assert not has_overlap(None, "2025-05-02", "2025-05-05")


def test_invalid_requested_range_raises():
    with pytest.raises(InvalidDateRange):
        has_overlap(EXISTING, "2025-03-12", "2025-03-11")


def test_ensure_no_overlap():
    ensure_no_overlap(EXISTING, "2025-04-01", "2025-04-02")
    with pytest.raises(OverlappingBooking) as exc:
        ensure_no_overlap(EXISTING, "2025-03-14", "2025-03-18")
    assert exc.value.code == "OVERLAPPING_BOOKING"


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
