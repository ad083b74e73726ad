"""
hijrical.reference.index
------------------------
A Hijri-keyed reverse index over a CalendarTable.

CalendarTable answers Hijri questions by scanning every entry. HijriIndex
performs that scan once and answers the same questions with dict lookups.
Results are identical by construction: the index is filled in the same
chronological order and with the same preference rules as the scan.
"""

from __future__ import annotations

from typing import Dict, Optional, Protocol, Tuple

from ..core.types import AnchorDay, MonthBoundary
from .table import CalendarTable

MonthKey = Tuple[int, int]


class HijriLookup(Protocol):
    def lookup_by_hijri(self, year: int, month: int) -> Optional[MonthBoundary]: ...
    def hijri_anchor(self, year: int, month: int) -> Optional[AnchorDay]: ...
    def hijri_month_length(self, year: int, month: int) -> Optional[int]: ...


class HijriIndex:
    def __init__(self, table: CalendarTable):
        by_first: Dict[MonthKey, MonthBoundary] = {}
        by_last: Dict[MonthKey, MonthBoundary] = {}
        enclosing: Dict[MonthKey, MonthBoundary] = {}
        enclosed = {(a.hijri.year, a.hijri.month): a for a in table.enclosed_months()}

        for b in table.entries():
            by_first.setdefault((b.first_day.hijri.year, b.first_day.hijri.month), b)
            by_last.setdefault((b.last_day.hijri.year, b.last_day.hijri.month), b)
            for key, a in enclosed.items():
                if key not in enclosing and b.contains_hijri(a.hijri):
                    enclosing[key] = b

        self._boundary: Dict[MonthKey, MonthBoundary] = {}
        self._anchor: Dict[MonthKey, AnchorDay] = {}
        for key in set(by_first) | set(by_last) | set(enclosing):
            if key in by_first:
                b = by_first[key]
                self._boundary[key] = b
                self._anchor[key] = b.first_day
            elif key in by_last:
                b = by_last[key]
                self._boundary[key] = b
                self._anchor[key] = b.last_day
            else:
                self._boundary[key] = enclosing[key]
                self._anchor[key] = enclosed[key]

        self.table = table

    def __len__(self) -> int:
        return len(self._anchor)

    def __contains__(self, key: object) -> bool:
        return key in self._anchor

    def lookup_by_hijri(self, year: int, month: int) -> Optional[MonthBoundary]:
        return self._boundary.get((year, month))

    def hijri_anchor(self, year: int, month: int) -> Optional[AnchorDay]:
        return self._anchor.get((year, month))

    def hijri_month_length(self, year: int, month: int) -> Optional[int]:
        a = self._anchor.get((year, month))
        return a.hijri_month_length if a is not None else None
