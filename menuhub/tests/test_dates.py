"""
Tests for date range expansion
"""
from datetime import date

import pytest

from menuhub.services.dates import expand_date_range, weekday_name
from menuhub.utils.exceptions import InvalidRange


def test_full_week_is_ascending_with_weekdays():
    slots = expand_date_range("2025-06-02", "2025-06-08")

    assert [s.key for s in slots] == [f"2025-06-0{d}" for d in range(2, 9)]
    assert [s.weekday for s in slots] == [
        "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
    ]


def test_single_day_range():
    slots = expand_date_range(date(2025, 6, 4), date(2025, 6, 4))

    assert len(slots) == 1
    assert slots[0].date == date(2025, 6, 4)
    assert slots[0].weekday == "wednesday"


def test_range_crosses_month_and_leap_day():
    slots = expand_date_range("2024-02-27", "2024-03-02")

    assert [s.key for s in slots] == [
        "2024-02-27", "2024-02-28", "2024-02-29", "2024-03-01", "2024-03-02",
    ]


def test_leap_year_has_366_slots():
    slots = expand_date_range("2024-01-01", "2024-12-31")

    assert len(slots) == 366
    assert slots[0].weekday == "monday"
    assert slots[-1].weekday == "tuesday"


def test_start_after_end_is_rejected():
    with pytest.raises(InvalidRange, match="must not be after"):
        expand_date_range("2025-06-09", "2025-06-02")


def test_malformed_date_is_rejected():
    with pytest.raises(ValueError, match="YYYY-MM-DD"):
        expand_date_range("06/02/2025", "2025-06-08")


def test_weekday_name_is_lowercase():
    assert weekday_name(date(2025, 6, 8)) == "sunday"
