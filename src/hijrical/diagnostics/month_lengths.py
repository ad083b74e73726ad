#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import Dict, List, Optional, Tuple

import hijrical
from hijrical.core.types import AnchorDay
from hijrical.reference.table import CalendarTable

# Mean synodic month (days)
SYNODIC_MONTH = 29.530588861


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "hijrical[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "hijrical[diagnostics]"') from e


def hijri_months(table: CalendarTable) -> List[Tuple[int, int, int]]:
    """(hijri_year, hijri_month, length) for every month the table fully determines, in order."""
    seen: Dict[Tuple[int, int], AnchorDay] = {}
    for b in table.entries():
        for a in (b.first_day, b.last_day):
            seen.setdefault((a.hijri.year, a.hijri.month), a)
    for a in table.enclosed_months():
        seen.setdefault((a.hijri.year, a.hijri.month), a)
    return [(y, m, seen[(y, m)].hijri_month_length) for (y, m) in sorted(seen)]


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Hijri month-length statistics and cumulative drift against the mean synodic month.")
    p.add_argument("--outbase", default="hijri_month_lengths", help="Output base name (writes .png)")
    p.add_argument("--no-plot", action="store_true", help="Print statistics only.")
    args = p.parse_args(argv)

    np = _need_numpy()

    rows = hijri_months(hijrical.get_engine().table)
    lengths = np.array([r[2] for r in rows], dtype=float)
    n29 = int(np.sum(lengths == 29))
    n30 = int(np.sum(lengths == 30))
    drift = np.cumsum(lengths - SYNODIC_MONTH)

    (y0, m0, _), (y1, m1, _) = rows[0], rows[-1]
    print(f"Hijri months {y0}-{m0:02d} .. {y1}-{m1:02d}: {len(rows)}")
    print(f"  29-day months: {n29}")
    print(f"  30-day months: {n30}")
    print(f"  mean length  : {lengths.mean():.6f} days (synodic {SYNODIC_MONTH})")
    print(f"  drift range  : {drift.min():+.3f} .. {drift.max():+.3f} days")

    if args.no_plot:
        return 0

    plt = _need_matplotlib()
    x = np.array([y + (m - 1) / 12.0 for y, m, _ in rows])

    fig, ax = plt.subplots(figsize=(9.2, 4.8), constrained_layout=True)
    ax.set_axisbelow(True)
    ax.grid(True, which="major", color="0.88", linewidth=0.7)
    ax.plot(x, drift, color="tab:blue", linewidth=1.2)
    ax.set_xlabel("Hijri year")
    ax.set_ylabel("Cumulative length - mean synodic month (days)")
    ax.set_title("Umm al-Qura month lengths vs mean lunation")

    fig.savefig(args.outbase + ".png", dpi=300)
    print(f"Saved: {args.outbase}.png")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
