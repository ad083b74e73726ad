from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

import hijrical
from hijrical.core.time import to_date, weekday_index
from hijrical.core.types import DayInfo

Cell = Tuple[str, str]


def dow_header() -> str:
    return "Su     Mo     Tu     We     Th     Fr     Sa"


def cell(top: str, bot: str, w: int = 6) -> Cell:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, weeks: List[List[Cell]]) -> None:
    print(title)
    print(dow_header())
    print("-" * len(dow_header()))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def build_weeks(days: List[DayInfo], labels: List[Cell]) -> List[List[Cell]]:
    """Lay out cells Sunday-first, padding the first and last week."""
    weeks: List[List[Cell]] = []
    wk: List[Cell] = [cell("", "") for _ in range(weekday_index(to_date(days[0].gregorian)))]
    for c in labels:
        wk.append(c)
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < 7:
            wk.append(cell("", ""))
        weeks.append(wk)
    return weeks


def gregorian_month_calendar(gy: int, gm: int) -> bool:
    days = hijrical.month_days(gy, gm, "gregorian")
    if days is None:
        print(f"Gregorian month {gy}-{gm:02d} is not covered by the table\n")
        return False
    labels = [cell(f"{d.gregorian.day:2d}", f"{d.hijri.month:02d}-{d.hijri.day:02d}") for d in days]
    h0, h1 = days[0].hijri, days[-1].hijri
    print_grid(f"Gregorian month  {gy}-{gm:02d}   (Hijri {h0} .. {h1})", build_weeks(days, labels))
    return True


def hijri_month_calendar(hy: int, hm: int) -> bool:
    days = hijrical.month_days(hy, hm, "hijri")
    if days is None:
        print(f"Hijri month {hy}-{hm:02d} is not covered by the table\n")
        return False
    labels = [cell(f"{d.hijri.day:2d}", f"{d.gregorian.month:02d}-{d.gregorian.day:02d}") for d in days]
    g0, g1 = days[0].gregorian, days[-1].gregorian
    title = f"Hijri month  {hy}-{hm:02d}  ({len(days)} days, {g0} .. {g1})"
    print_grid(title, build_weeks(days, labels))
    return True


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a Gregorian-month and/or Hijri-month calendar with paired labels."
    )
    p.add_argument("--greg", nargs=2, type=int, metavar=("GY", "GM"),
                   help="Gregorian month to print: GY GM (e.g. 2024 8)")
    p.add_argument("--hijri", nargs=2, type=int, metavar=("HY", "HM"),
                   help="Hijri month to print: HY HM (e.g. 1446 9)")
    args = p.parse_args(argv)

    if not args.greg and not args.hijri:
        # sensible default demo
        ok = gregorian_month_calendar(2024, 8) and hijri_month_calendar(1446, 9)
        return 0 if ok else 1

    ok = True
    if args.greg:
        ok = gregorian_month_calendar(*args.greg) and ok
    if args.hijri:
        ok = hijri_month_calendar(*args.hijri) and ok
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
