from __future__ import annotations

import argparse
import random
from datetime import date, timedelta
from typing import List, Optional

import hijrical
from hijrical.core.codec import parse
from hijrical.core.time import from_date, to_date


def _bound(text: Optional[str], default: date) -> date:
    if text is None:
        return default
    d = parse(text)
    if d is None:
        raise SystemExit(f"bad date {text!r}; expected DD/MM/YYYY")
    return to_date(d)


def check_day(d0: date) -> bool:
    """Gregorian -> Hijri -> Gregorian; both directions must agree on the month length."""
    info = hijrical.to_hijri(d0)
    back = hijrical.to_gregorian(info.hijri) if info is not None else None
    if back is None or back.gregorian != from_date(d0) or back.hijri_month_length != info.hijri_month_length:
        print("\nFAIL", d0)
        print("  forward:", info)
        print("  back   :", back)
        print("  explain:", hijrical.explain(d0))
        return False
    return True


def roundtrip_test(n: int, start: date, end: date, seed: int, *, max_failures: int) -> int:
    rng = random.Random(seed)
    span = (end - start).days
    failures = 0
    for _ in range(n):
        if not check_day(start + timedelta(days=rng.randint(0, span))):
            failures += 1
            if failures >= max_failures:
                break
    return failures


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip checks: Gregorian -> Hijri -> Gregorian.")
    p.add_argument("--N", type=int, default=2000, help="Trials.")
    p.add_argument("--start", default=None, help="Start date DD/MM/YYYY (default: table start).")
    p.add_argument("--end", default=None, help="End date DD/MM/YYYY (default: table end).")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures.")
    args = p.parse_args(argv)

    g0, g1 = hijrical.get_engine().table.coverage
    start = _bound(args.start, to_date(g0))
    end = _bound(args.end, to_date(g1))
    if end < start:
        raise SystemExit("--end must be >= --start")

    print(f"Checking {args.N} dates in {start} .. {end} ...")
    failures = roundtrip_test(args.N, start, end, args.seed, max_failures=args.max_failures)
    if failures == 0:
        print("All round-trip tests passed.")
        return 0
    print(f"Round-trip failures: {failures}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
