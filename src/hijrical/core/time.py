from __future__ import annotations
import calendar as pycal
from datetime import date

from .types import CalendarDate

WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def to_jdn(d: date) -> int:
    """Convert Gregorian date to Julian Day Number (JDN)."""
    y, m, day = d.year, d.month, d.day
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    jdn = day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045
    return jdn

def weekday_index(d: date) -> int:
    """Sunday=0 .. Saturday=6 (JDN 0 fell on a Monday)."""
    return (to_jdn(d) + 1) % 7

def weekday_name(d: date) -> str:
    return WEEKDAY_NAMES[weekday_index(d)]

def to_date(d: CalendarDate) -> date:
    """Gregorian CalendarDate -> datetime.date. Raises ValueError for e.g. 31/02."""
    return date(d.year, d.month, d.day)

def from_date(d: date) -> CalendarDate:
    return CalendarDate(d.year, d.month, d.day)

def days_in_gregorian_month(year: int, month: int) -> int:
    return pycal.monthrange(year, month)[1]
