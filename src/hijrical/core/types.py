from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional


class Calendar(str, Enum):
    GREGORIAN = "gregorian"
    HIJRI = "hijri"

    @classmethod
    def coerce(cls, value: "Calendar | str") -> "Calendar":
        """Accept an enum member, its value, or the widget's 'greg'/'um' shorthands."""
        if isinstance(value, Calendar):
            return value
        key = str(value).strip().lower()
        if key in ("greg", "gregorian", "g"):
            return cls.GREGORIAN
        if key in ("hijri", "um", "ummalqura", "umm-alqura", "h"):
            return cls.HIJRI
        raise ValueError(f"Unknown calendar '{value}'. Use 'gregorian' or 'hijri'.")


class Classification(str, Enum):
    PAST = "Past"
    PRESENT = "Present"
    FUTURE = "Future"


@dataclass(frozen=True, order=True)
class CalendarDate:
    """
    A (year, month, day) label in either calendar.

    Ordering is chronological, but only between dates of the same calendar.
    Validation is structural: day 31 of a 30-day month is accepted here.
    """
    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        if self.year < 1:
            raise ValueError(f"year must be >= 1, got {self.year}")
        if not (1 <= self.month <= 12):
            raise ValueError(f"month must be in 1..12, got {self.month}")
        if not (1 <= self.day <= 31):
            raise ValueError(f"day must be in 1..31, got {self.day}")

    def same_month(self, year: int, month: int) -> bool:
        return self.year == year and self.month == month

    def __str__(self) -> str:
        return f"{self.day:02d}/{self.month:02d}/{self.year}"


@dataclass(frozen=True)
class TimeOfDay:
    hour: int
    minute: int

    def __post_init__(self) -> None:
        if not (0 <= self.hour <= 23):
            raise ValueError(f"hour must be in 0..23, got {self.hour}")
        if not (0 <= self.minute <= 59):
            raise ValueError(f"minute must be in 0..59, got {self.minute}")


@dataclass(frozen=True)
class AnchorDay:
    """A recorded Gregorian/Hijri correspondence plus the length of its Hijri month."""
    gregorian: CalendarDate
    hijri: CalendarDate
    weekday: str
    hijri_month_length: int


@dataclass(frozen=True)
class MonthBoundary:
    first_day: AnchorDay
    last_day: AnchorDay

    @property
    def key(self) -> tuple[int, int]:
        """Gregorian (year, month) this entry is stored under."""
        g = self.first_day.gregorian
        return (g.year, g.month)

    def contains_gregorian(self, d: CalendarDate) -> bool:
        return self.first_day.gregorian <= d <= self.last_day.gregorian

    def contains_hijri(self, d: CalendarDate) -> bool:
        return self.first_day.hijri <= d <= self.last_day.hijri


@dataclass(frozen=True)
class DayInfo:
    gregorian: CalendarDate
    hijri: CalendarDate
    weekday: str
    hijri_month_length: int
    selected: bool = False
    disabled: bool = False
    time: Optional[TimeOfDay] = None

    def with_selected(self, selected: bool = True) -> "DayInfo":
        return replace(self, selected=selected)

    def with_disabled(self, disabled: bool = True) -> "DayInfo":
        return replace(self, disabled=disabled)

    def with_time(self, hour: int, minute: int) -> "DayInfo":
        return replace(self, time=TimeOfDay(hour, minute))

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "gregorian": str(self.gregorian),
            "hijri": str(self.hijri),
            "weekday": self.weekday,
            "hijri_month_length": self.hijri_month_length,
            "selected": self.selected,
            "disabled": self.disabled,
        }
        if self.time is not None:
            out["time"] = {"hour": self.time.hour, "minute": self.time.minute}
        return out
