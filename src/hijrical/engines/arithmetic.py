"""
hijrical.engines.arithmetic
---------------------------
Day stepping in both calendars.

Gregorian stepping is ordinary proleptic arithmetic. Hijri stepping rolls
over against a month length that is NOT uniform: every month's modulus comes
from the table, so anything that walks across a month boundary must re-fetch
it. HijriCursor is the object that does this; step_hijri is the raw
single-modulus primitive underneath.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Callable, Optional, Tuple

from ..core.time import from_date, to_date
from ..core.types import CalendarDate

logger = logging.getLogger(__name__)

# Used when the table has no record for the month being entered (coverage edge).
DEFAULT_MONTH_LENGTH = 30

LengthProvider = Callable[[int, int], Optional[int]]


def step_gregorian(d: CalendarDate, delta_days: int) -> CalendarDate:
    return from_date(to_date(d) + timedelta(days=delta_days))


def next_month(year: int, month: int) -> Tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def prev_month(year: int, month: int) -> Tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def step_hijri(d: CalendarDate, delta_days: int, month_length: int) -> CalendarDate:
    """
    Add delta_days (any sign) to a Hijri date using ONE modulus for every
    month crossed. Only correct while the walk stays inside months of that
    length; use HijriCursor to cross real month boundaries.
    """
    if month_length not in (29, 30):
        raise ValueError(f"Hijri month length must be 29 or 30, got {month_length}")
    day = d.day + delta_days
    year, month = d.year, d.month
    while day > month_length:
        day -= month_length
        year, month = next_month(year, month)
    while day < 1:
        day += month_length
        year, month = prev_month(year, month)
    return CalendarDate(year, month, day)


class HijriCursor:
    """
    Walks Hijri days one at a time, re-fetching the month length from
    `length_of(year, month)` each time a month is entered.
    """

    def __init__(self, start: CalendarDate, capacity: int, length_of: LengthProvider):
        if capacity not in (29, 30):
            raise ValueError(f"Hijri month length must be 29 or 30, got {capacity}")
        if start.day > capacity:
            raise ValueError(f"day {start.day} does not exist in a {capacity}-day month")
        self.current = start
        self.capacity = capacity
        self._length_of = length_of
        self.fallbacks = 0

    def advance(self) -> CalendarDate:
        c = self.current
        if c.day < self.capacity:
            self.current = CalendarDate(c.year, c.month, c.day + 1)
            return self.current

        year, month = next_month(c.year, c.month)
        length = self._length_of(year, month)
        if length is None:
            # Kept for compatibility; may mislabel days past table coverage.
            logger.warning(
                "No table entry for Hijri month %04d-%02d; assuming %d days",
                year, month, DEFAULT_MONTH_LENGTH,
            )
            length = DEFAULT_MONTH_LENGTH
            self.fallbacks += 1
        self.capacity = length
        self.current = CalendarDate(year, month, 1)
        return self.current
