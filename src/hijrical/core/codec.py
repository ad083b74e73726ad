"""
hijrical.core.codec
-------------------
The DD/MM/YYYY interchange format and digit transliteration.

Parsing here is syntactic only: a day is accepted if it lies in 1..31,
regardless of the month it names. Whether "31/02/2024" exists is a question
for the conversion engine, which simply will not find it.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Union

from .errors import ParseError
from .types import CalendarDate

SEPARATOR = "/"

ASCII_DIGITS = "0123456789"
ARABIC_INDIC_DIGITS = "٠١٢٣٤٥٦٧٨٩"

_TO_ARABIC_INDIC = str.maketrans(ASCII_DIGITS, ARABIC_INDIC_DIGITS)
_TO_ASCII = str.maketrans(ARABIC_INDIC_DIGITS, ASCII_DIGITS)

# Pattern (normalised to '/') -> order of (day, month, year) fields in the output.
_PATTERNS = {
    "DD/MM/YYYY": ("d", "m", "y"),
    "MM/DD/YYYY": ("m", "d", "y"),
    "YYYY/MM/DD": ("y", "m", "d"),
    "YYYY/DD/MM": ("y", "d", "m"),
    "DD/YYYY/MM": ("d", "y", "m"),
    "MM/YYYY/DD": ("m", "y", "d"),
}

DateLike = Union[str, date, CalendarDate]


def parse_strict(text: str) -> CalendarDate:
    """Parse "DD/MM/YYYY" or raise ParseError naming what is wrong."""
    if not isinstance(text, str) or not text.strip():
        raise ParseError("empty date")
    parts = text.strip().split(SEPARATOR)
    if len(parts) != 3:
        raise ParseError(f"expected DD/MM/YYYY, got {text!r}")

    fields = []
    for part in parts:
        p = part.strip()
        if not (p.isascii() and p.isdigit()):
            raise ParseError(f"non-numeric component {part!r} in {text!r}")
        fields.append(int(p))

    day, month, year = fields
    try:
        return CalendarDate(year, month, day)
    except ValueError as e:
        raise ParseError(f"{text!r}: {e}") from e


def parse(text: str) -> Optional[CalendarDate]:
    """Parse "DD/MM/YYYY"; None when the text is malformed or out of domain."""
    try:
        return parse_strict(text)
    except ParseError:
        return None


def format_date(d: Union[date, CalendarDate]) -> str:
    return f"{d.day:02d}{SEPARATOR}{d.month:02d}{SEPARATOR}{d.year}"


def format_with_pattern(text: str, pattern: str = "DD/MM/YYYY") -> str:
    """
    Reorder an already formatted DD/MM/YYYY string.

    The separator is '-' if the pattern contains one, else '/'. Unknown
    patterns fall back to DD/MM/YYYY ordering.
    """
    if not text:
        return ""
    parts = text.split(SEPARATOR)
    if len(parts) != 3:
        return text

    fields = dict(zip(("d", "m", "y"), parts))
    sep = "-" if "-" in pattern else SEPARATOR
    key = pattern.upper().replace("-", "/")
    order = _PATTERNS.get(key, _PATTERNS["DD/MM/YYYY"])
    return sep.join(fields[k] for k in order)


def to_arabic_indic(text: str) -> str:
    return text.translate(_TO_ARABIC_INDIC)


def to_ascii(text: str) -> str:
    return text.translate(_TO_ASCII)


def convert_date_numerals(text: str, target: str) -> str:
    """
    'ar': ASCII "DD/MM/YYYY" -> Arabic-Indic "YYYY/MM/DD" (right-to-left reading order).
    'en': Arabic-Indic "YYYY/MM/DD" -> ASCII "DD/MM/YYYY".
    """
    if target not in ("ar", "en"):
        raise ValueError("target must be 'ar' or 'en'")
    parts = text.split(SEPARATOR)
    if len(parts) != 3:
        return text
    if target == "ar":
        day, month, year = parts
        return SEPARATOR.join(to_arabic_indic(p) for p in (year, month, day))
    year, month, day = parts
    return SEPARATOR.join(to_ascii(p) for p in (day, month, year))


def normalize(value: Optional[DateLike]) -> Optional[str]:
    """Canonical DD/MM/YYYY for a date, CalendarDate, or parseable string."""
    if value is None or value == "":
        return None
    if isinstance(value, (date, CalendarDate)):
        return format_date(value)
    if isinstance(value, str):
        d = parse(value)
        return format_date(d) if d is not None else None
    return None


def coerce(value: Optional[DateLike]) -> Optional[CalendarDate]:
    """Accept any DateLike and return a CalendarDate, or None if it cannot be read."""
    if value is None:
        return None
    if isinstance(value, CalendarDate):
        return value
    if isinstance(value, date):
        return CalendarDate(value.year, value.month, value.day)
    if isinstance(value, str):
        return parse(value)
    return None
