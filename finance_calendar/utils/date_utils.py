"""Date parsing and calendar-month arithmetic"""

import calendar
import re
from datetime import date
from typing import Any, List, Optional, Tuple

from dateutil.relativedelta import relativedelta

# Tried in this order; a value matching neither is unparseable
_DAY_FIRST = re.compile(r"(\d{2})[-/.](\d{2})[-/.](\d{4})", re.ASCII)
_YEAR_FIRST = re.compile(r"(\d{4})[-/.](\d{2})[-/.](\d{2})", re.ASCII)
_NON_DIGITS = re.compile(r"\D", re.ASCII)

# Stand-in for any day number too long to be a real day
OVERFLOW_DAY = 99


def _parse_day_first(core: str) -> Optional[date]:
    match = _DAY_FIRST.fullmatch(core)
    if not match:
        return None
    day, month, year = (int(part) for part in match.groups())
    return _safe_date(year, month, day)


def _parse_year_first(core: str) -> Optional[date]:
    match = _YEAR_FIRST.fullmatch(core)
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    return _safe_date(year, month, day)


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a stored date string, returning None when it cannot be read.

    Accepted shapes (separator may be "-", "/" or "."):
    - DD-MM-YYYY, tried first
    - YYYY-MM-DD

    A trailing time component ("T...") is dropped before matching, and the
    remainder must match a shape exactly (no trailing newline).

    Impossible calendar dates such as 31-02-2024 return None. A JavaScript
    Date built from the same parts would roll over to 2 March; here an
    unreadable date means a missing event, never one on another day.
    """
    if not value or not isinstance(value, str):
        return None
    core = value.strip().split("T")[0]
    for parser in (_parse_day_first, _parse_year_first):
        parsed = parser(core)
        if parsed is not None:
            return parsed
    return None


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month (1-based month)"""
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """Date in the given month with day clamped into [1, days_in_month]"""
    return date(year, month, min(max(1, day), days_in_month(year, month)))


def month_window(today: date, past_months: int, future_months: int) -> List[Tuple[int, int]]:
    """
    (year, month) pairs from past_months before to future_months after today's month.

    Offsets outside the current year roll over with floor division, so
    negative offsets land in the previous year.
    """
    months = []
    for offset in range(-past_months, future_months + 1):
        index = today.month - 1 + offset
        months.append((today.year + index // 12, index % 12 + 1))
    return months


def extract_day(value: Any) -> Optional[int]:
    """
    Day-of-month from free text such as "Ayın 26'sı" (all digits kept).

    Three or more significant digits can only mean a day past month end, so
    they collapse to OVERFLOW_DAY and clamp_day moves them to the last day.
    """
    if not value:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and abs(value) >= 100:
        return OVERFLOW_DAY
    digits = _NON_DIGITS.sub("", str(value))
    if not digits:
        return None
    significant = digits.lstrip("0")
    if len(significant) > 2:
        return OVERFLOW_DAY
    return int(significant or "0")


def add_months_clamped(start: date, months: int) -> date:
    """Shift by whole months, clamping to the target month's last day"""
    return start + relativedelta(months=months)
