"""Date manipulation utilities"""

import calendar
from datetime import date, timedelta
from decimal import Decimal
from typing import Tuple


def current_month_bounds(as_of: date) -> Tuple[date, date]:
    """Calendar month containing as_of as a half-open [start, end) range"""
    start = as_of.replace(day=1)
    return start, add_months(start, 1)


def add_months(from_date: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of the target month"""
    month_index = from_date.month - 1 + months
    year = from_date.year + month_index // 12
    month = month_index % 12 + 1
    day = min(from_date.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def calendar_months_between(start: date, end: date) -> Decimal:
    """
    Months from start to end counted on the calendar.

    Whole months are stepped with add_months; leftover days count as a
    fraction of the month they fall in. Returns 0 when end <= start.
    """
    if end <= start:
        return Decimal(0)

    whole = (end.year - start.year) * 12 + (end.month - start.month)
    if add_months(start, whole) > end:
        whole -= 1

    anchor = add_months(start, whole)
    next_anchor = add_months(start, whole + 1)
    leftover_days = (end - anchor).days
    month_length = (next_anchor - anchor).days
    return Decimal(whole) + Decimal(leftover_days) / Decimal(month_length)


def within_window(day: date, start: date, days: int) -> bool:
    """True when day falls in [start, start + days] (inclusive)"""
    return start <= day <= start + timedelta(days=days)
