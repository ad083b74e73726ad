# tests/conftest.py

import pytest

from hijrical.engines.conversion import ConversionEngine
from hijrical.reference.table import CalendarTable, load_table


def anchor(g: str, h: str, wd: str, length: int) -> dict:
    return {"gregorianDate": g, "hijriDate": h, "weekdayAbbrev": wd, "hijriMonthLength": length}


# A hypothetical August 2024 in which Muharram 1446 has 30 days; the real
# table gives it 29. Day 7 of the month is the first of Safar.
SCENARIO = {
    "2024": {
        "8": {
            "firstDay": anchor("01/08/2024", "25/01/1446", "Thu", 30),
            "lastDay": anchor("31/08/2024", "25/02/1446", "Sat", 29),
        }
    }
}


@pytest.fixture(scope="session")
def table() -> CalendarTable:
    return load_table()


@pytest.fixture(scope="session")
def engine(table) -> ConversionEngine:
    return ConversionEngine(table)


@pytest.fixture(scope="session")
def indexed_engine(table) -> ConversionEngine:
    return ConversionEngine(table, index=True)


@pytest.fixture
def scenario_engine() -> ConversionEngine:
    return ConversionEngine(CalendarTable.from_mapping(SCENARIO, source="<scenario>"))
