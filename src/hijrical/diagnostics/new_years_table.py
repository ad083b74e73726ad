from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

import hijrical
from hijrical.core.types import CalendarDate

# (label, Hijri month, Hijri day)
DEFAULT_EVENTS: List[Tuple[str, int, int]] = [
    ("1 Muharram", 1, 1),
    ("1 Ramadan", 9, 1),
    ("1 Shawwal", 10, 1),
    ("10 Dhu al-Hijjah", 12, 10),
]


def mmdd(d: CalendarDate) -> str:
    return f"{d.month:02d}-{d.day:02d}"


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(
        description="Print the Gregorian dates of fixed Hijri days (1 Muharram, 1 Ramadan, ...) per Hijri year."
    )
    p.add_argument("--from-year", type=int, default=1440)
    p.add_argument("--to-year", type=int, default=1460)
    p.add_argument(
        "--dates",
        choices=("mmdd", "full"),
        default="full",
        help="Display format in table columns (default: full DD/MM/YYYY).",
    )
    args = p.parse_args(argv)

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    def fmt(d: CalendarDate) -> str:
        return mmdd(d) if args.dates == "mmdd" else str(d)

    headers = ["Year"] + [name for name, _, _ in DEFAULT_EVENTS]
    colw = [5] + [max(10, len(h)) for h in headers[1:]]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    missing = 0
    for Y in range(Y0, Y1 + 1):
        row = [str(Y).ljust(colw[0])]
        for (_, m, d), w in zip(DEFAULT_EVENTS, colw[1:]):
            info = hijrical.to_gregorian(CalendarDate(Y, m, d))
            if info is None:
                missing += 1
                row.append("-".ljust(w))
            else:
                row.append(fmt(info.gregorian).ljust(w))
        print("  ".join(row))

    if missing:
        print(f"\n{missing} date(s) outside table coverage")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
