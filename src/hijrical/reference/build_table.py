#!/usr/bin/env python3
"""
Regenerate the Umm al-Qura month-boundary table from hijri-converter.

hijri-converter carries the official Umm al-Qura month starts for
1343..1500 AH (1924-08-01 .. 2077-11-16). For every Gregorian month in the
requested range this writes the first and last day with their Hijri labels
and Hijri month lengths, in the shape reference/table.py loads.
"""
from __future__ import annotations

import argparse
import calendar as pycal
import json
import os
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

from hijrical.core.time import weekday_name
from hijrical.reference.table import CalendarTable


def require_converter():
    """Raise a clear error if the build extra isn't installed."""
    try:
        from hijri_converter import Gregorian
    except ImportError as e:
        raise RuntimeError('Table building requires: pip install "hijrical[build]"') from e
    return Gregorian


def _anchor(Gregorian, d: date) -> Dict[str, object]:
    h = Gregorian(d.year, d.month, d.day).to_hijri()
    return {
        "gregorianDate": f"{d.day:02d}/{d.month:02d}/{d.year}",
        "hijriDate": f"{h.day:02d}/{h.month:02d}/{h.year}",
        "weekdayAbbrev": weekday_name(d),
        "hijriMonthLength": h.month_length(),
    }


def build_rows(from_year: int, to_year: int) -> Dict[str, Dict[str, dict]]:
    Gregorian = require_converter()
    out: Dict[str, Dict[str, dict]] = {}
    for y in range(from_year, to_year + 1):
        months: Dict[str, dict] = {}
        for m in range(1, 13):
            last = pycal.monthrange(y, m)[1]
            months[str(m)] = {
                "firstDay": _anchor(Gregorian, date(y, m, 1)),
                "lastDay": _anchor(Gregorian, date(y, m, last)),
            }
        out[str(y)] = months
    return out


def render(rows: Dict[str, Dict[str, dict]]) -> str:
    """One Gregorian month per line; keeps diffs of the packaged file readable."""
    lines: List[str] = ["{"]
    years = list(rows)
    for i, y in enumerate(years):
        lines.append(f'  "{y}": {{')
        months = list(rows[y])
        body = [f'    "{m}": {json.dumps(rows[y][m], ensure_ascii=False)}' for m in months]
        lines.append(",\n".join(body))
        lines.append("  }," if i < len(years) - 1 else "  }")
    lines.append("}")
    return "\n".join(lines) + "\n"


def default_output_path() -> Path:
    # default: user cache (works for non-editable installs)
    xdg = os.environ.get("XDG_CACHE_HOME")
    if xdg:
        base = Path(xdg) / "hijrical"
    else:
        base = Path.home() / ".cache" / "hijrical"
    base.mkdir(parents=True, exist_ok=True)
    return base / "umm_alqura.json"


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Regenerate the hijrical Umm al-Qura table from hijri-converter.")
    p.add_argument("--from-year", type=int, default=1970, help="First Gregorian year (>= 1925).")
    p.add_argument("--to-year", type=int, default=2076, help="Last Gregorian year (<= 2076).")
    p.add_argument("--out", default=None, help="Output JSON path (default: ~/.cache/hijrical/umm_alqura.json)")
    p.add_argument("--also-write-package", action="store_true",
                   help="Also overwrite src/hijrical/reference/data/umm_alqura.json (for repo maintenance).")
    args = p.parse_args(argv)

    if args.to_year < args.from_year:
        raise SystemExit("--to-year must be >= --from-year")

    print(f"Building {args.from_year}..{args.to_year} ...")
    rows = build_rows(args.from_year, args.to_year)
    text = render(rows)

    # Refuse to write anything the loader would reject.
    table = CalendarTable.from_mapping(json.loads(text), source="<built>")
    g0, g1 = table.coverage
    h0, h1 = table.hijri_coverage
    print(f"Months: {len(table)}   Gregorian {g0} .. {g1}   Hijri {h0} .. {h1}")

    out = Path(args.out) if args.out else default_output_path()
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    print(f"Wrote: {out}")

    if args.also_write_package:
        pkg = Path(__file__).resolve().parent / "data" / "umm_alqura.json"
        pkg.parent.mkdir(parents=True, exist_ok=True)
        pkg.write_text(text, encoding="utf-8")
        print(f"Also wrote package table: {pkg}")

    print("\nTo make hijrical use this file automatically, set:")
    print(f'  export HIJRICAL_TABLE="{out}"')
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
