# tests/test_codec.py

from datetime import date, datetime

import pytest

from hijrical.core import codec
from hijrical.core.errors import ParseError
from hijrical.core.types import CalendarDate


def test_parse_valid():
    assert codec.parse("01/08/2024") == CalendarDate(2024, 8, 1)
    assert codec.parse("1/8/2024") == CalendarDate(2024, 8, 1)
    assert codec.parse(" 15 / 06 / 2025 ") == CalendarDate(2025, 6, 15)


@pytest.mark.parametrize("text", [
    "",
    "01/08",
    "01/08/2024/1",
    "aa/08/2024",
    "01-08-2024",
    "00/08/2024",
    "32/08/2024",
    "01/13/2024",
    "01/00/2024",
    "01/08/0",
    "01/08/-5",
    "٠١/٠٨/٢٠٢٤",
])
def test_parse_rejects(text):
    assert codec.parse(text) is None


def test_parse_non_string_is_none():
    assert codec.parse(None) is None
    assert codec.parse(20240801) is None


def test_parse_is_syntactic_only():
    """February 31st is structurally valid; only conversion fails to find it."""
    assert codec.parse("31/02/2024") == CalendarDate(2024, 2, 31)


def test_parse_strict_reports_reason():
    with pytest.raises(ParseError, match="month"):
        codec.parse_strict("01/13/2024")
    with pytest.raises(ParseError, match="non-numeric"):
        codec.parse_strict("xx/01/2024")
    with pytest.raises(ValueError):
        codec.parse_strict("1/2")


def test_format_pads_day_and_month():
    assert codec.format_date(CalendarDate(2024, 8, 1)) == "01/08/2024"
    assert codec.format_date(date(1999, 12, 5)) == "05/12/1999"


def test_format_inverts_parse():
    for text in ("01/01/1970", "29/02/2024", "30/09/1446", "31/12/2076"):
        assert codec.format_date(codec.parse(text)) == text


@pytest.mark.parametrize("pattern,expected", [
    ("DD/MM/YYYY", "05/08/2024"),
    ("MM/DD/YYYY", "08/05/2024"),
    ("YYYY/MM/DD", "2024/08/05"),
    ("YYYY/DD/MM", "2024/05/08"),
    ("DD/YYYY/MM", "05/2024/08"),
    ("MM/YYYY/DD", "08/2024/05"),
    ("YYYY-MM-DD", "2024-08-05"),
    ("dd-mm-yyyy", "05-08-2024"),
    ("MM-DD-YYYY", "08-05-2024"),
    ("DD.MM.YYYY", "05/08/2024"),
    ("nonsense", "05/08/2024"),
])
def test_format_with_pattern(pattern, expected):
    assert codec.format_with_pattern("05/08/2024", pattern) == expected


def test_format_with_pattern_passthrough():
    assert codec.format_with_pattern("", "YYYY/MM/DD") == ""
    assert codec.format_with_pattern("2024-08-05", "YYYY/MM/DD") == "2024-08-05"


def test_transliteration_table():
    assert codec.to_arabic_indic("0123456789") == "٠١٢٣٤٥٦٧٨٩"
    assert codec.to_ascii("٠١٢٣٤٥٦٧٨٩") == "0123456789"


def test_transliteration_preserves_non_digits():
    assert codec.to_arabic_indic("25/01/1446 هـ") == "٢٥/٠١/١٤٤٦ هـ"
    assert codec.to_ascii("٢٥/٠١/١٤٤٦ AH") == "25/01/1446 AH"
    assert codec.to_ascii("abc") == "abc"


def test_transliteration_inverse():
    for s in ("٠", "١٤٤٦", "٢٥٠١٠٩", "٩٨٧٦٥٤٣٢١٠"):
        assert codec.to_arabic_indic(codec.to_ascii(s)) == s
    for s in ("0", "1446", "2024"):
        assert codec.to_ascii(codec.to_arabic_indic(s)) == s


def test_convert_date_numerals():
    assert codec.convert_date_numerals("25/01/1446", "ar") == "١٤٤٦/٠١/٢٥"
    assert codec.convert_date_numerals("١٤٤٦/٠١/٢٥", "en") == "25/01/1446"
    assert codec.convert_date_numerals("1446", "ar") == "1446"
    with pytest.raises(ValueError):
        codec.convert_date_numerals("25/01/1446", "fr")


def test_normalize():
    assert codec.normalize("1/8/2024") == "01/08/2024"
    assert codec.normalize(date(2024, 8, 1)) == "01/08/2024"
    assert codec.normalize(datetime(2024, 8, 1, 13, 45)) == "01/08/2024"
    assert codec.normalize(CalendarDate(1446, 1, 25)) == "25/01/1446"
    assert codec.normalize("garbage") is None
    assert codec.normalize("") is None
    assert codec.normalize(None) is None


def test_calendar_date_validation():
    with pytest.raises(ValueError):
        CalendarDate(2024, 13, 1)
    with pytest.raises(ValueError):
        CalendarDate(2024, 1, 0)
    with pytest.raises(ValueError):
        CalendarDate(0, 1, 1)
    assert CalendarDate(2024, 1, 31) < CalendarDate(2024, 2, 1) < CalendarDate(2025, 1, 1)
    assert str(CalendarDate(1446, 9, 1)) == "01/09/1446"
