# tests/test_table.py

import copy
import json
from importlib import resources

import pytest

from conftest import SCENARIO, anchor
from hijrical.core.errors import TableError
from hijrical.core.types import CalendarDate
from hijrical.reference import table as table_mod
from hijrical.reference.index import HijriIndex
from hijrical.reference.table import CalendarTable, load_table


@pytest.fixture(scope="module")
def raw():
    text = resources.files("hijrical").joinpath(table_mod.PACKAGED_TABLE).read_text(encoding="utf-8")
    return json.loads(text)


def _slice(raw, *years):
    return {str(y): copy.deepcopy(raw[str(y)]) for y in years}


def test_packaged_table_coverage(table):
    assert len(table) == (2076 - 1970 + 1) * 12
    assert table.coverage == (CalendarDate(1970, 1, 1), CalendarDate(2076, 12, 31))
    assert table.hijri_coverage == (CalendarDate(1389, 10, 22), CalendarDate(1500, 2, 5))


def test_entries_are_chronological(table):
    keys = [b.key for b in table.entries()]
    assert keys == sorted(keys)
    assert keys[0] == (1970, 1)
    assert keys[-1] == (2076, 12)


def test_lookup_by_gregorian(table):
    b = table.lookup_by_gregorian(2024, 8)
    assert b.first_day.hijri == CalendarDate(1446, 1, 26)
    assert b.first_day.weekday == "Thu"
    assert b.first_day.hijri_month_length == 29
    assert b.last_day.hijri == CalendarDate(1446, 2, 27)
    assert table.lookup_by_gregorian(1969, 12) is None
    assert table.lookup_by_gregorian(2077, 1) is None


def test_lookup_by_hijri_prefers_first_day(table):
    # Muharram 1446 is the lastDay month of 2024-07 and the firstDay month of 2024-08.
    b = table.lookup_by_hijri(1446, 1)
    assert b.key == (2024, 8)
    assert table.hijri_anchor(1446, 1).gregorian == CalendarDate(2024, 8, 1)


def test_lookup_by_hijri_first_day_beats_earlier_last_day(table):
    # 1 Muharram 1441 is the lastDay of 2019-08; 2019-09 opens on 2 Muharram.
    assert table.lookup_by_hijri(1441, 1).key == (2019, 9)
    assert table.lookup_by_hijri(1440, 11).key == (2019, 8)


def test_lookup_by_hijri_falls_back_to_last_day(table):
    # Safar 1500 is only ever reached by the final lastDay.
    b = table.lookup_by_hijri(1500, 2)
    assert b.key == (2076, 12)
    assert table.hijri_anchor(1500, 2).hijri == CalendarDate(1500, 2, 5)


def test_enclosed_month_is_inferred(table):
    """Dhu al-Hijjah 1440 starts and ends inside August 2019."""
    keys = [(a.hijri.year, a.hijri.month) for a in table.enclosed_months()]
    assert (1440, 12) in keys
    a = table.hijri_anchor(1440, 12)
    assert a.hijri == CalendarDate(1440, 12, 1)
    assert a.gregorian == CalendarDate(2019, 8, 2)
    assert a.weekday == "Fri"
    assert a.hijri_month_length == 29
    assert table.lookup_by_hijri(1440, 12).key == (2019, 8)


def test_hijri_month_length(table):
    assert table.hijri_month_length(1446, 1) == 29
    assert table.hijri_month_length(1446, 9) == 29
    assert table.hijri_month_length(1446, 10) == 30
    assert table.hijri_month_length(1389, 9) is None
    assert table.hijri_month_length(1500, 3) is None


def test_index_agrees_with_scan(table):
    idx = HijriIndex(table)
    for y in range(1389, 1501):
        for m in range(1, 13):
            assert idx.lookup_by_hijri(y, m) is table.lookup_by_hijri(y, m)
            assert idx.hijri_anchor(y, m) == table.hijri_anchor(y, m)
    assert (1440, 12) in idx
    assert (1389, 9) not in idx


def test_single_entry_table():
    t = CalendarTable.from_mapping(SCENARIO, source="<scenario>")
    assert len(t) == 1
    assert t.hijri_month_length(1446, 1) == 30
    assert t.hijri_month_length(1446, 2) == 29
    assert t.source == "<scenario>"


def _entry_with(**first):
    base = anchor("01/08/2024", "25/01/1446", "Thu", 30)
    base.update(first)
    return {"2024": {"8": {"firstDay": base, "lastDay": anchor("31/08/2024", "25/02/1446", "Sat", 29)}}}


@pytest.mark.parametrize("data,match", [
    ({}, "non-empty"),
    ({"2024": []}, "must map to an object"),
    ({"2024": {"13": SCENARIO["2024"]["8"]}}, "bad key"),
    ({"x": {"8": SCENARIO["2024"]["8"]}}, "bad key"),
    ({"2024": {"8": {"firstDay": anchor("01/08/2024", "25/01/1446", "Thu", 30)}}}, "firstDay and lastDay"),
    (_entry_with(hijriMonthLength=31), "29 or 30"),
    (_entry_with(weekdayAbbrev="Fri"), "weekday"),
    (_entry_with(gregorianDate="02/08/2024", weekdayAbbrev="Fri"), "firstDay must be"),
    (_entry_with(hijriDate="24/01/1446"), "span"),
    (_entry_with(hijriDate="1446-01-25"), "2024/8 firstDay"),
    (_entry_with(gregorianDate="31/02/2024"), "not a real Gregorian date"),
])
def test_invalid_tables_rejected(data, match):
    with pytest.raises(TableError, match=match):
        CalendarTable.from_mapping(data)


def test_missing_field_rejected():
    bad = copy.deepcopy(SCENARIO)
    del bad["2024"]["8"]["lastDay"]["hijriMonthLength"]
    with pytest.raises(TableError, match="missing field"):
        CalendarTable.from_mapping(bad)


def test_gap_between_entries_rejected(raw):
    data = _slice(raw, 2024)
    del data["2024"]["9"]
    with pytest.raises(TableError, match="gap"):
        CalendarTable.from_mapping(data)


def test_discontinuous_hijri_rejected(raw):
    data = _slice(raw, 2024)
    data["2024"]["9"]["firstDay"]["hijriDate"] = "29/02/1446"
    with pytest.raises(TableError):
        CalendarTable.from_mapping(data)


def test_conflicting_lengths_rejected(raw):
    data = _slice(raw, 2024)
    # 2024-08 gives Safar 1446 30 days; 2024-09 now claims 29.
    data["2024"]["9"]["firstDay"]["hijriMonthLength"] = 29
    with pytest.raises(TableError):
        CalendarTable.from_mapping(data)


def test_slice_with_enclosed_month_loads(raw):
    t = CalendarTable.from_mapping(_slice(raw, 2019))
    assert len(t) == 12
    assert t.hijri_month_length(1440, 12) == 29


def test_load_table_from_path(tmp_path, raw):
    p = tmp_path / "t.json"
    p.write_text(json.dumps(_slice(raw, 2024)), encoding="utf-8")
    t = load_table(p)
    assert len(t) == 12
    assert t.coverage == (CalendarDate(2024, 1, 1), CalendarDate(2024, 12, 31))
    assert load_table(p) is t


def test_load_table_from_env(tmp_path, raw, monkeypatch):
    p = tmp_path / "env.json"
    p.write_text(json.dumps(_slice(raw, 2019, 2020)), encoding="utf-8")
    monkeypatch.setenv("HIJRICAL_TABLE", str(p))
    t = load_table()
    assert len(t) == 24
    assert t.source == str(p.resolve())


def test_load_table_missing_file(tmp_path):
    with pytest.raises(TableError, match="cannot read"):
        load_table(tmp_path / "nope.json")


def test_load_table_invalid_json(tmp_path):
    p = tmp_path / "bad.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(TableError, match="invalid JSON"):
        load_table(p)


def test_load_logs_coverage(tmp_path, raw, caplog):
    p = tmp_path / "log.json"
    p.write_text(json.dumps(_slice(raw, 2024)), encoding="utf-8")
    with caplog.at_level("INFO", logger="hijrical.reference.table"):
        load_table(p)
    assert "Loaded calendar table" in caplog.text
