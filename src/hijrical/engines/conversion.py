"""
hijrical.engines.conversion
---------------------------
Gregorian <-> Umm al-Qura conversion over a CalendarTable.

No formula maps one calendar onto the other. Every operation locates a table
anchor and walks day by day from it:

  forward   Gregorian month entry -> walk from firstDay until lastDay
  backward  anchor inside the Hijri month -> step back to day 1 -> walk
            hijri_month_length days

Failures (unparseable input, no covering entry, no such day) come back as
None; nothing here raises for bad dates.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from ..core.codec import DateLike, coerce
from ..core.time import to_date, weekday_name
from ..core.types import Calendar, CalendarDate, DayInfo, MonthBoundary
from ..reference.index import HijriIndex, HijriLookup
from ..reference.table import CalendarTable
from .arithmetic import HijriCursor, step_gregorian

logger = logging.getLogger(__name__)


class ConversionEngine:
    def __init__(self, table: CalendarTable, *, index: Union[bool, HijriIndex] = False):
        self.table = table
        if index is True:
            index = HijriIndex(table)
        self.hijri: HijriLookup = index if isinstance(index, HijriIndex) else table

    def info(self) -> Dict[str, Any]:
        g0, g1 = self.table.coverage
        h0, h1 = self.table.hijri_coverage
        return {
            "source": self.table.source,
            "months": len(self.table),
            "gregorian_coverage": (str(g0), str(g1)),
            "hijri_coverage": (str(h0), str(h1)),
            "indexed": isinstance(self.hijri, HijriIndex),
        }

    # ---------------------------------------------------------
    # Generation
    # ---------------------------------------------------------

    def _generate(self, gregorian: CalendarDate, hijri: CalendarDate, capacity: int, count: int) -> List[DayInfo]:
        cursor = HijriCursor(hijri, capacity, self.hijri.hijri_month_length)
        g = gregorian
        out: List[DayInfo] = []
        for i in range(count):
            out.append(DayInfo(
                gregorian=g,
                hijri=cursor.current,
                weekday=weekday_name(to_date(g)),
                hijri_month_length=cursor.capacity,
            ))
            if i < count - 1:
                g = step_gregorian(g, 1)
                cursor.advance()
        return out

    def _expand_entry(self, b: MonthBoundary) -> Optional[List[DayInfo]]:
        first, last = b.first_day, b.last_day
        count = (to_date(last.gregorian) - to_date(first.gregorian)).days + 1
        days = self._generate(first.gregorian, first.hijri, first.hijri_month_length, count)
        if days[-1].hijri != last.hijri:
            # Cannot happen for a table that passed load-time validation.
            logger.error("Entry %s generated %s, table says %s", b.key, days[-1].hijri, last.hijri)
            return None
        return days

    def gregorian_month_days(self, year: int, month: int) -> Optional[List[DayInfo]]:
        b = self.table.lookup_by_gregorian(year, month)
        if b is None:
            logger.debug("Gregorian month %04d-%02d not in table", year, month)
            return None
        return self._expand_entry(b)

    def hijri_month_days(self, year: int, month: int) -> Optional[List[DayInfo]]:
        anchor = self.hijri.hijri_anchor(year, month)
        if anchor is None:
            return None
        start = step_gregorian(anchor.gregorian, -(anchor.hijri.day - 1))
        length = anchor.hijri_month_length
        return self._generate(start, CalendarDate(year, month, 1), length, length)

    def month_days(self, year: int, month: int, calendar: Union[Calendar, str] = Calendar.GREGORIAN) -> Optional[List[DayInfo]]:
        """All days of a Gregorian or Hijri month, first day first."""
        if Calendar.coerce(calendar) is Calendar.GREGORIAN:
            return self.gregorian_month_days(year, month)
        return self.hijri_month_days(year, month)

    def month_of(self, value: DateLike, calendar: Union[Calendar, str] = Calendar.GREGORIAN) -> Optional[List[DayInfo]]:
        """The month (in `calendar`) that contains the given date of that calendar."""
        d = coerce(value)
        if d is None:
            return None
        return self.month_days(d.year, d.month, calendar)

    # ---------------------------------------------------------
    # Point conversion
    # ---------------------------------------------------------

    def covering_entry(self, d: CalendarDate) -> Optional[MonthBoundary]:
        """The entry whose Gregorian span contains d (inclusive)."""
        # Entries run from day 1 to the last day of their key month, so the
        # keyed lookup finds exactly the entry a chronological scan would.
        b = self.table.lookup_by_gregorian(d.year, d.month)
        if b is None or not b.contains_gregorian(d):
            return None
        return b

    def to_hijri(self, value: DateLike) -> Optional[DayInfo]:
        d = coerce(value)
        if d is None:
            return None
        b = self.covering_entry(d)
        if b is None:
            logger.debug("%s is outside table coverage", d)
            return None
        days = self._expand_entry(b)
        if days is None:
            return None
        for info in days:
            if info.gregorian == d:
                return info
        return None

    def to_gregorian(self, value: DateLike) -> Optional[DayInfo]:
        d = coerce(value)
        if d is None:
            return None
        days = self.hijri_month_days(d.year, d.month)
        if days is None or d.day > len(days):
            return None
        return days[d.day - 1]

    def convert(self, value: DateLike, to_hijri: bool = True) -> Optional[DayInfo]:
        """to_hijri=True: value is Gregorian. to_hijri=False: value is Hijri."""
        return self.to_hijri(value) if to_hijri else self.to_gregorian(value)

    def from_datetime(self, dt: datetime) -> Optional[DayInfo]:
        """Selected DayInfo for dt's calendar date, carrying its hour and minute."""
        info = self.to_hijri(dt.date())
        if info is None:
            return None
        return info.with_selected().with_time(dt.hour, dt.minute)

    def today(self, reference: Optional[date] = None) -> Optional[DayInfo]:
        d = reference if reference is not None else date.today()
        if isinstance(d, datetime):
            d = d.date()
        return self.to_hijri(d)

    def explain(self, value: DateLike, to_hijri: bool = True) -> Dict[str, Any]:
        """Like convert(), but reports why a conversion produced nothing."""
        out: Dict[str, Any] = {"input": value, "direction": "to_hijri" if to_hijri else "to_gregorian"}
        d = coerce(value)
        if d is None:
            out["status"] = "parse_error"
            return out
        out["parsed"] = str(d)

        if to_hijri:
            b = self.covering_entry(d)
            out["entry"] = b.key if b is not None else None
        else:
            anchor = self.hijri.hijri_anchor(d.year, d.month)
            b = self.hijri.lookup_by_hijri(d.year, d.month)
            out["entry"] = b.key if b is not None else None
            out["anchor"] = str(anchor.gregorian) if anchor is not None else None
        if b is None:
            out["status"] = "not_found"
            return out

        info = self.convert(d, to_hijri)
        if info is None:
            out["status"] = "not_found"
            return out
        out["status"] = "ok"
        out["result"] = info.to_dict()
        return out
