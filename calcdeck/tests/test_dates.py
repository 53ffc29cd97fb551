"""Tests for calendar-aware date arithmetic."""

from datetime import date, datetime

import pytest

from calcdeck.dates import (
    as_date,
    calculate_age,
    calculate_age_details,
    calculate_date_difference,
    calculate_next_birthday,
)
from calcdeck.errors import InvalidInput

TODAY = date(2026, 10, 19)


# --- Date difference ---

def test_difference_borrows_actual_month_length():
    # Day borrow uses February 2021 (28 days), the month before March
    result = calculate_date_difference(date(2020, 1, 15), date(2021, 3, 10))
    assert (result.years, result.months, result.days) == (1, 1, 23)
    assert result.total_days == (date(2021, 3, 10) - date(2020, 1, 15)).days


def test_difference_borrows_thirty_day_month():
    result = calculate_date_difference(date(2023, 3, 31), date(2023, 5, 15))
    assert (result.years, result.months, result.days) == (0, 1, 14)
    assert result.total_days == 45


def test_difference_across_year_boundary():
    result = calculate_date_difference(date(2022, 12, 20), date(2023, 1, 5))
    assert (result.years, result.months, result.days) == (0, 0, 16)
    assert result.total_days == 16


def test_difference_is_symmetric():
    a, b = date(1999, 8, 31), date(2024, 2, 29)
    assert calculate_date_difference(a, b) == calculate_date_difference(b, a)


def test_difference_same_day():
    result = calculate_date_difference("2024-05-05", "2024-05-05")
    assert (result.years, result.months, result.days, result.total_days) == (0, 0, 0, 0)


# --- Age ---

def test_age():
    result = calculate_age(date(1990, 6, 15), today=TODAY)
    assert (result.years, result.months, result.days) == (36, 4, 4)


def test_age_borrows_from_month_before_today():
    # September has 30 days
    result = calculate_age("2000-05-25", today=TODAY)
    assert (result.years, result.months, result.days) == (26, 4, 24)


def test_age_details():
    details = calculate_age_details(date(1990, 6, 15), today=TODAY)
    assert details.total_days == (TODAY - date(1990, 6, 15)).days
    assert details.total_weeks == details.total_days // 7
    assert details.total_months == 36 * 12 + 4
    assert details.next_birthday.date == date(2027, 6, 15)


# --- Next birthday ---

def test_next_birthday_later_this_year():
    nb = calculate_next_birthday(date(1990, 12, 25), today=TODAY)
    assert nb.date == date(2026, 12, 25)
    assert nb.days_until == 67


def test_next_birthday_already_passed():
    nb = calculate_next_birthday(date(1990, 3, 1), today=TODAY)
    assert nb.date == date(2027, 3, 1)


def test_birthday_today():
    nb = calculate_next_birthday(date(2000, 10, 19), today=TODAY)
    assert nb.date == TODAY
    assert nb.days_until == 0


def test_leap_day_birthday():
    assert calculate_next_birthday(date(2000, 2, 29), today=date(2026, 1, 1)).date == date(2026, 2, 28)
    assert calculate_next_birthday(date(2000, 2, 29), today=date(2027, 12, 1)).date == date(2028, 2, 29)


# --- Coercion ---

def test_as_date():
    assert as_date(datetime(2024, 1, 2, 13, 45)) == date(2024, 1, 2)
    assert as_date("2024-01-02") == date(2024, 1, 2)
    with pytest.raises(InvalidInput):
        as_date("02/01/2024")
