from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from .core.codec import DateLike
from .core.types import Calendar, Classification, DayInfo
from .engines import ranges as _ranges
from .engines.conversion import ConversionEngine

_engine: Optional[ConversionEngine] = None

def set_engine(engine: ConversionEngine) -> None:
    global _engine
    _engine = engine

def get_engine() -> ConversionEngine:
    if _engine is None:
        raise RuntimeError("Conversion engine not initialized")
    return _engine

def engine_info() -> Dict[str, Any]:
    return get_engine().info()

# ============================================================
# Conversion
# ============================================================

def convert(value: DateLike, to_hijri: bool = True) -> Optional[DayInfo]:
    return get_engine().convert(value, to_hijri)

def to_hijri(value: DateLike) -> Optional[DayInfo]:
    return get_engine().to_hijri(value)

def to_gregorian(value: DateLike) -> Optional[DayInfo]:
    return get_engine().to_gregorian(value)

def month_days(year: int, month: int, calendar: Union[Calendar, str] = Calendar.GREGORIAN) -> Optional[List[DayInfo]]:
    return get_engine().month_days(year, month, calendar)

def month_of(value: DateLike, calendar: Union[Calendar, str] = Calendar.GREGORIAN) -> Optional[List[DayInfo]]:
    return get_engine().month_of(value, calendar)

def from_datetime(dt: datetime) -> Optional[DayInfo]:
    return get_engine().from_datetime(dt)

def today(reference: Optional[date] = None) -> Optional[DayInfo]:
    return get_engine().today(reference)

def explain(value: DateLike, to_hijri: bool = True) -> Dict[str, Any]:
    return get_engine().explain(value, to_hijri)

# ============================================================
# Ranges
# ============================================================

def compare_hijri(a: DateLike, b: DateLike) -> int:
    return _ranges.compare_hijri(get_engine(), a, b)

def try_compare_hijri(a: DateLike, b: DateLike) -> Optional[int]:
    return _ranges.try_compare_hijri(get_engine(), a, b)

def in_hijri_range(value: Optional[DateLike], min_date: Optional[DateLike] = None, max_date: Optional[DateLike] = None) -> bool:
    return _ranges.in_hijri_range(get_engine(), value, min_date, max_date)

def compare(a: DateLike, b: DateLike) -> int:
    return _ranges.compare(a, b)

def in_range(value: Optional[DateLike], min_date: Optional[DateLike] = None, max_date: Optional[DateLike] = None) -> bool:
    return _ranges.in_range(value, min_date, max_date)

def classify(value: DateLike, reference: Optional[DateLike] = None) -> Optional[Classification]:
    return _ranges.classify(value, reference)

def mark_disabled(days: Iterable[DayInfo], min_date: Optional[DateLike] = None, max_date: Optional[DateLike] = None) -> List[DayInfo]:
    return _ranges.mark_disabled(days, min_date, max_date)
