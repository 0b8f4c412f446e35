"""Unit tests for date parsing and month arithmetic"""

import pytest
from datetime import date
from finance_calendar.utils.date_utils import (
    OVERFLOW_DAY,
    add_months_clamped,
    clamp_day,
    days_in_month,
    extract_day,
    month_window,
    parse_date,
)


@pytest.mark.parametrize("value", ["15-03-2024", "15/03/2024", "15.03.2024", "2024-03-15", "2024/03/15", "2024.03.15"])
def test_parse_date_separators_agree(value):
    """Every supported separator and both orders give the same day"""
    assert parse_date(value) == date(2024, 3, 15)


def test_parse_date_drops_time_component():
    assert parse_date("2024-03-15T10:30:00.000Z") == date(2024, 3, 15)
    assert parse_date("  15-03-2024  ") == date(2024, 3, 15)


@pytest.mark.parametrize(
    "value",
    ["", None, "2024-3-15", "15-03-24", "March 15, 2024", "20240315", "15-03-2024 10:00", 20240315],
)
def test_parse_date_rejects_other_shapes(value):
    assert parse_date(value) is None


def test_parse_date_rejects_impossible_days():
    """Invalid calendar days are not rolled into the next month"""
    assert parse_date("31-02-2024") is None
    assert parse_date("2023-02-29") is None
    assert parse_date("2024-02-29") == date(2024, 2, 29)


def test_days_in_month_leap_years():
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2023, 2) == 28
    assert days_in_month(2024, 12) == 31


def test_clamp_day_stays_in_month():
    assert clamp_day(2024, 2, 31) == date(2024, 2, 29)
    assert clamp_day(2024, 4, 0) == date(2024, 4, 1)
    assert clamp_day(2024, 4, 20240315) == date(2024, 4, 30)


def test_month_window_rolls_back_a_year():
    window = month_window(date(2024, 1, 15), past_months=2, future_months=1)
    assert window == [(2023, 11), (2023, 12), (2024, 1), (2024, 2)]


def test_month_window_rolls_forward_a_year():
    window = month_window(date(2024, 11, 3), past_months=0, future_months=3)
    assert window == [(2024, 11), (2024, 12), (2025, 1), (2025, 2)]


def test_month_window_size():
    assert len(month_window(date(2024, 6, 1), 3, 3)) == 7
    assert month_window(date(2024, 6, 1), 0, 0) == [(2024, 6)]


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Ayın 26'sı", 26),
        ("15", 15),
        (15, 15),
        (15.0, 15),
        ("0", 0),
        ("", None),
        (None, None),
        ("her ay", None),
    ],
)
def test_extract_day(value, expected):
    assert extract_day(value) == expected


def test_add_months_clamped():
    assert add_months_clamped(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months_clamped(date(2024, 12, 15), 1) == date(2025, 1, 15)
    assert add_months_clamped(date(2024, 3, 31), 12) == date(2025, 3, 31)


def test_parse_date_rejects_trailing_newline():
    assert parse_date("15-03-2024\nT10:00") is None
    assert parse_date("2024-03-15\nT10:00") is None


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1" * 5000, OVERFLOW_DAY),
        ("Ayın 007'si", 7),
        ("000", 0),
        ("123", OVERFLOW_DAY),
        (1e300, OVERFLOW_DAY),
    ],
    ids=["5000-digits", "zero-padded", "all-zero", "three-digits", "huge-float"],
)
def test_extract_day_long_digit_runs(value, expected):
    assert extract_day(value) == expected


def test_extract_day_huge_int():
    assert extract_day(10 ** 5000) == OVERFLOW_DAY
    assert clamp_day(2024, 2, OVERFLOW_DAY) == date(2024, 2, 29)
