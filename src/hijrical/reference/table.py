from __future__ import annotations

"""
hijrical.reference.table

The Umm al-Qura lookup table: the only source of truth for Hijri month lengths.

Shape
-----
Gregorian year -> Gregorian month -> {firstDay, lastDay}, where each anchor is

  {"gregorianDate": "DD/MM/YYYY", "hijriDate": "DD/MM/YYYY",
   "weekdayAbbrev": "Sun".."Sat", "hijriMonthLength": 29|30}

The table is physically indexed by Gregorian (year, month). Gregorian lookup
is a dict hit; Hijri lookup is a scan over every entry. Callers that need
many Hijri lookups can build a HijriIndex (reference/index.py) once.

Everything is validated when the table is built. A malformed table raises
TableError before any conversion can run; lookups never re-check.

The package ships a snapshot:
  hijrical/reference/data/umm_alqura.json
regenerated with `python -m hijrical.reference.build_table`.
"""

import json
import logging
import os
from datetime import timedelta
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from ..config import TABLE_ENV
from ..core.codec import parse_strict
from ..core.errors import ParseError, TableError
from ..core.time import days_in_gregorian_month, from_date, to_date, weekday_name
from ..core.types import AnchorDay, CalendarDate, MonthBoundary
from ..engines.arithmetic import next_month

logger = logging.getLogger(__name__)

PACKAGED_TABLE = "reference/data/umm_alqura.json"

MonthKey = Tuple[int, int]


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _parse_anchor(raw: Any, where: str) -> AnchorDay:
    if not isinstance(raw, Mapping):
        raise TableError(f"{where}: expected an object, got {type(raw).__name__}")
    try:
        g = parse_strict(raw["gregorianDate"])
        h = parse_strict(raw["hijriDate"])
        length = int(raw["hijriMonthLength"])
    except KeyError as e:
        raise TableError(f"{where}: missing field {e}") from e
    except (ParseError, TypeError, ValueError) as e:
        raise TableError(f"{where}: {e}") from e

    try:
        wd = weekday_name(to_date(g))
    except ValueError as e:
        raise TableError(f"{where}: {g} is not a real Gregorian date") from e

    recorded = raw.get("weekdayAbbrev")
    if recorded is not None and recorded != wd:
        raise TableError(f"{where}: weekday {recorded!r} but {g} is a {wd}")
    if length not in (29, 30):
        raise TableError(f"{where}: hijriMonthLength must be 29 or 30, got {length}")
    if h.day > length:
        raise TableError(f"{where}: Hijri day {h.day} exceeds month length {length}")
    return AnchorDay(gregorian=g, hijri=h, weekday=wd, hijri_month_length=length)


def _hijri_gap(a: AnchorDay, b: AnchorDay) -> Optional[int]:
    """
    Days from a.hijri to b.hijri, given that at most one month lies strictly
    between them. Returns None if b is more than two months after a.
    The middle month's length is not known here; callers solve for it.
    """
    ya, ma = a.hijri.year, a.hijri.month
    if b.hijri.same_month(ya, ma):
        return b.hijri.day - a.hijri.day
    if b.hijri.same_month(*next_month(ya, ma)):
        return (a.hijri_month_length - a.hijri.day) + b.hijri.day
    return None


def _check_entry(key: MonthKey, first: AnchorDay, last: AnchorDay) -> Optional[AnchorDay]:
    """Validate one entry. Returns the synthesized anchor of an enclosed month, if any."""
    y, m = key
    where = f"{y}/{m}"
    if first.gregorian != CalendarDate(y, m, 1):
        raise TableError(f"{where}: firstDay must be 01/{m:02d}/{y}, got {first.gregorian}")
    if last.gregorian != CalendarDate(y, m, days_in_gregorian_month(y, m)):
        raise TableError(f"{where}: lastDay {last.gregorian} is not the last day of the month")
    if last.hijri < first.hijri:
        raise TableError(f"{where}: Hijri dates decrease ({first.hijri} -> {last.hijri})")

    span = (to_date(last.gregorian) - to_date(first.gregorian)).days
    if first.hijri.same_month(last.hijri.year, last.hijri.month):
        if first.hijri_month_length != last.hijri_month_length:
            raise TableError(f"{where}: conflicting lengths for Hijri month {first.hijri.month}/{first.hijri.year}")

    gap = _hijri_gap(first, last)
    if gap is not None:
        if gap != span:
            raise TableError(f"{where}: Hijri span {first.hijri}..{last.hijri} is {gap} days, Gregorian span is {span}")
        return None

    # One whole Hijri month sits strictly inside this Gregorian month.
    my, mm = next_month(first.hijri.year, first.hijri.month)
    if not last.hijri.same_month(*next_month(my, mm)):
        raise TableError(f"{where}: Hijri dates {first.hijri}..{last.hijri} skip more than one month")
    start_offset = first.hijri_month_length - first.hijri.day + 1
    length = span - last.hijri.day + 1 - start_offset
    if length not in (29, 30):
        raise TableError(f"{where}: enclosed Hijri month {mm}/{my} would have {length} days")
    g = from_date(to_date(first.gregorian) + timedelta(days=start_offset))
    return AnchorDay(
        gregorian=g,
        hijri=CalendarDate(my, mm, 1),
        weekday=weekday_name(to_date(g)),
        hijri_month_length=length,
    )


def _check_contiguous(prev: MonthBoundary, cur: MonthBoundary) -> None:
    pk, ck = prev.key, cur.key
    if next_month(*pk) != ck:
        raise TableError(f"table gap between {pk[0]}/{pk[1]} and {ck[0]}/{ck[1]}")
    a, b = prev.last_day, cur.first_day
    if _hijri_gap(a, b) != 1:
        raise TableError(f"{ck[0]}/{ck[1]}: Hijri {b.hijri} does not follow {a.hijri}")
    if a.hijri.same_month(b.hijri.year, b.hijri.month) and a.hijri_month_length != b.hijri_month_length:
        raise TableError(f"{ck[0]}/{ck[1]}: conflicting lengths for Hijri month {b.hijri.month}/{b.hijri.year}")


# ---------------------------------------------------------------------------
# Table model
# ---------------------------------------------------------------------------

class CalendarTable:
    """Immutable Gregorian-keyed table of month boundary anchors."""

    def __init__(self, entries: Dict[MonthKey, MonthBoundary], enclosed: Dict[MonthKey, AnchorDay], source: str = "<memory>"):
        self._by_key = dict(entries)
        self._ordered: Tuple[MonthBoundary, ...] = tuple(self._by_key[k] for k in sorted(self._by_key))
        self._enclosed = dict(enclosed)
        self.source = source

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, source: str = "<memory>") -> "CalendarTable":
        if not isinstance(data, Mapping) or not data:
            raise TableError(f"{source}: table must be a non-empty object")

        entries: Dict[MonthKey, MonthBoundary] = {}
        enclosed: Dict[MonthKey, AnchorDay] = {}
        for ykey, months in data.items():
            if not isinstance(months, Mapping):
                raise TableError(f"{source}: year {ykey!r} must map to an object")
            for mkey, raw in months.items():
                try:
                    key = (int(ykey), int(mkey))
                except (TypeError, ValueError) as e:
                    raise TableError(f"{source}: bad key {ykey!r}/{mkey!r}") from e
                if not (1 <= key[1] <= 12) or key[0] < 1:
                    raise TableError(f"{source}: bad key {ykey!r}/{mkey!r}")
                where = f"{key[0]}/{key[1]}"
                if not isinstance(raw, Mapping) or "firstDay" not in raw or "lastDay" not in raw:
                    raise TableError(f"{where}: entry needs firstDay and lastDay")
                first = _parse_anchor(raw["firstDay"], f"{where} firstDay")
                last = _parse_anchor(raw["lastDay"], f"{where} lastDay")
                extra = _check_entry(key, first, last)
                if extra is not None:
                    enclosed[(extra.hijri.year, extra.hijri.month)] = extra
                entries[key] = MonthBoundary(first_day=first, last_day=last)

        table = cls(entries, enclosed, source=source)
        for prev, cur in zip(table._ordered, table._ordered[1:]):
            _check_contiguous(prev, cur)
        return table

    def __len__(self) -> int:
        return len(self._ordered)

    def entries(self) -> Iterator[MonthBoundary]:
        """All entries in chronological order."""
        return iter(self._ordered)

    @property
    def coverage(self) -> Tuple[CalendarDate, CalendarDate]:
        """First and last Gregorian day covered."""
        return (self._ordered[0].first_day.gregorian, self._ordered[-1].last_day.gregorian)

    @property
    def hijri_coverage(self) -> Tuple[CalendarDate, CalendarDate]:
        return (self._ordered[0].first_day.hijri, self._ordered[-1].last_day.hijri)

    # -----------------------------------------------------------------------
    # Lookups
    # -----------------------------------------------------------------------

    def lookup_by_gregorian(self, year: int, month: int) -> Optional[MonthBoundary]:
        return self._by_key.get((year, month))

    def lookup_by_hijri(self, year: int, month: int) -> Optional[MonthBoundary]:
        """
        Full scan. Prefers the entry whose firstDay falls in the Hijri month,
        then one whose lastDay does, then the entry that encloses it.
        """
        by_last: Optional[MonthBoundary] = None
        enclosing: Optional[MonthBoundary] = None
        for b in self._ordered:
            if b.first_day.hijri.same_month(year, month):
                return b
            if by_last is None and b.last_day.hijri.same_month(year, month):
                by_last = b
            if enclosing is None and (year, month) in self._enclosed and b.contains_hijri(CalendarDate(year, month, 1)):
                enclosing = b
        found = by_last or enclosing
        if found is None:
            logger.debug("Hijri month %04d-%02d not in table", year, month)
        return found

    def hijri_anchor(self, year: int, month: int) -> Optional[AnchorDay]:
        """An anchor day lying inside the given Hijri month (full scan)."""
        b = self.lookup_by_hijri(year, month)
        if b is None:
            return None
        if b.first_day.hijri.same_month(year, month):
            return b.first_day
        if b.last_day.hijri.same_month(year, month):
            return b.last_day
        return self._enclosed[(year, month)]

    def hijri_month_length(self, year: int, month: int) -> Optional[int]:
        a = self.hijri_anchor(year, month)
        return a.hijri_month_length if a is not None else None

    def enclosed_months(self) -> List[AnchorDay]:
        """Synthesized day-1 anchors of Hijri months that no table anchor falls in."""
        return [self._enclosed[k] for k in sorted(self._enclosed)]


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _read_json_text(text: str, source: str) -> CalendarTable:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise TableError(f"{source}: invalid JSON ({e})") from e
    table = CalendarTable.from_mapping(data, source=source)
    g0, g1 = table.coverage
    logger.info("Loaded calendar table %s: %d months, %s..%s", source, len(table), g0, g1)
    return table


@lru_cache(maxsize=8)
def _load_cached(path: Optional[str]) -> CalendarTable:
    if path is None:
        res = resources.files("hijrical").joinpath(PACKAGED_TABLE)
        try:
            text = res.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise TableError(f"packaged table {PACKAGED_TABLE} is missing") from e
        return _read_json_text(text, f"hijrical:{PACKAGED_TABLE}")

    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise TableError(f"cannot read calendar table {p}: {e}") from e
    return _read_json_text(text, str(p))


def load_table(path: Optional[str | os.PathLike] = None) -> CalendarTable:
    """
    Load and validate the calendar table. Cached per resolved path.

    Search order:
      1) explicit `path`
      2) HIJRICAL_TABLE environment variable
      3) packaged data (hijrical/reference/data/umm_alqura.json)
    """
    if path is None:
        env = os.environ.get(TABLE_ENV, "").strip()
        if env:
            path = env
    if path is None:
        return _load_cached(None)
    return _load_cached(str(Path(path).expanduser().resolve()))
