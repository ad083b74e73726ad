"""
hijrical.engines.ranges
-----------------------
Comparison, min/max containment and past/future classification.

All comparisons are chronological on Gregorian dates. Hijri inputs are first
converted through the engine's backward conversion.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, List, Optional

from ..core.codec import DateLike, coerce
from ..core.types import Classification, DayInfo
from .conversion import ConversionEngine

logger = logging.getLogger(__name__)


def _sign(a, b) -> int:
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def compare(a: DateLike, b: DateLike) -> int:
    """-1, 0 or 1 by Gregorian chronology; 0 if either side cannot be read."""
    da, db = coerce(a), coerce(b)
    if da is None or db is None:
        return 0
    return _sign(da, db)


def try_compare_hijri(engine: ConversionEngine, a: DateLike, b: DateLike) -> Optional[int]:
    """Like compare_hijri, but None when either side does not convert."""
    ga, gb = engine.to_gregorian(a), engine.to_gregorian(b)
    if ga is None or gb is None:
        return None
    return _sign(ga.gregorian, gb.gregorian)


def compare_hijri(engine: ConversionEngine, a: DateLike, b: DateLike) -> int:
    """
    Compare two Hijri dates via their Gregorian equivalents.

    Returns 0 both for equal dates and when either conversion fails.
    Use try_compare_hijri to tell the two apart.
    """
    r = try_compare_hijri(engine, a, b)
    if r is None:
        logger.debug("Hijri dates %r and %r are incomparable; reporting 0", a, b)
        return 0
    return r


def in_range(value: Optional[DateLike], min_date: Optional[DateLike] = None, max_date: Optional[DateLike] = None) -> bool:
    """
    Inclusive containment on Gregorian dates. A missing bound imposes no
    constraint; a missing or unreadable value is never in range.
    """
    if not value or coerce(value) is None:
        return False
    if min_date and compare(value, min_date) < 0:
        return False
    if max_date and compare(value, max_date) > 0:
        return False
    return True


def in_hijri_range(
    engine: ConversionEngine,
    value: Optional[DateLike],
    min_date: Optional[DateLike] = None,
    max_date: Optional[DateLike] = None,
) -> bool:
    """Hijri value checked against Gregorian bounds."""
    if not value:
        return False
    info = engine.to_gregorian(value)
    if info is None:
        return False
    return in_range(info.gregorian, min_date, max_date)


def classify(value: DateLike, reference: Optional[DateLike] = None) -> Optional[Classification]:
    """
    Past / Present / Future relative to `reference` (default: today).
    Time of day on a datetime reference is ignored.
    """
    d = coerce(value)
    if d is None:
        return None
    if reference is None:
        reference = date.today()
    elif isinstance(reference, datetime):
        reference = reference.date()
    ref = coerce(reference)
    if ref is None:
        return None
    if d > ref:
        return Classification.FUTURE
    if d < ref:
        return Classification.PAST
    return Classification.PRESENT


def mark_disabled(days: Iterable[DayInfo], min_date: Optional[DateLike] = None, max_date: Optional[DateLike] = None) -> List[DayInfo]:
    """Copies of `days` with `disabled` set where the Gregorian date is out of bounds."""
    return [d.with_disabled(not in_range(d.gregorian, min_date, max_date)) for d in days]
