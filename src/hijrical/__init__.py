"""hijrical public API.

Gregorian <-> Umm al-Qura conversion driven by a lookup table. Keep this
surface small: users should mostly interact with functions re-exported here.
"""

# Load the packaged (or $HIJRICAL_TABLE) table on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    get_engine,
    set_engine,
    engine_info,
    convert,
    to_hijri,
    to_gregorian,
    month_days,
    month_of,
    from_datetime,
    today,
    explain,
    compare,
    compare_hijri,
    try_compare_hijri,
    in_range,
    in_hijri_range,
    classify,
    mark_disabled,
)
from .core.codec import (
    parse,
    format_date,
    format_with_pattern,
    to_arabic_indic,
    to_ascii,
    convert_date_numerals,
    normalize,
)
from .core.types import CalendarDate, DayInfo, TimeOfDay, Calendar, Classification

__all__ = [
    "get_engine",
    "set_engine",
    "engine_info",
    "convert",
    "to_hijri",
    "to_gregorian",
    "month_days",
    "month_of",
    "from_datetime",
    "today",
    "explain",
    "compare",
    "compare_hijri",
    "try_compare_hijri",
    "in_range",
    "in_hijri_range",
    "classify",
    "mark_disabled",
    "parse",
    "format_date",
    "format_with_pattern",
    "to_arabic_indic",
    "to_ascii",
    "convert_date_numerals",
    "normalize",
    "CalendarDate",
    "DayInfo",
    "TimeOfDay",
    "Calendar",
    "Classification",
]
