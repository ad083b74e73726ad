from __future__ import annotations

import argparse
import importlib
import inspect
import json
import logging
import re
import sys
from typing import Optional

from hijrical.core.codec import parse_strict, to_arabic_indic
from hijrical.core.errors import HijriCalError, ParseError
from hijrical.core.types import DayInfo


_DATE_RE = re.compile(r"^\d{1,2}/\d{1,2}/\d{1,4}$")


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _configure_logging(level: Optional[str]) -> None:
    from hijrical.config import Settings

    name = (level or Settings.from_env().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _use_table(path: Optional[str], index: bool) -> None:
    """Swap the default engine when --table/--index were given."""
    if path is None and not index:
        return
    import hijrical
    from hijrical.bootstrap import build_engine
    from hijrical.config import Settings

    base = Settings.from_env()
    hijrical.set_engine(build_engine(Settings(
        table_path=path if path is not None else base.table_path,
        build_index=index or base.build_index,
        log_level=base.log_level,
    )))


def _print_day(info: DayInfo, *, as_json: bool, arabic: bool) -> None:
    if as_json:
        print(json.dumps(info.to_dict(), ensure_ascii=False))
        return
    g, h = str(info.gregorian), str(info.hijri)
    if arabic:
        g, h = to_arabic_indic(g), to_arabic_indic(h)
    print(f"{g}  {info.weekday}  {h}  (Hijri month of {info.hijri_month_length} days)")


def _add_day_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--json", action="store_true", help="print the DayInfo as JSON")
    p.add_argument("--arabic", action="store_true", help="print dates with Arabic-Indic digits")


def _convert(argv: list[str], *, to_hijri: bool) -> int:
    import hijrical

    direction = "Gregorian -> Hijri" if to_hijri else "Hijri -> Gregorian"
    prog = "hijrical to-hijri" if to_hijri else "hijrical to-gregorian"
    p = argparse.ArgumentParser(prog=prog, description=f"{direction} day conversion")
    p.add_argument("date", help="DD/MM/YYYY")
    _add_day_options(p)
    args = p.parse_args(argv)

    try:
        d = parse_strict(args.date)
    except ParseError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    info = hijrical.convert(d, to_hijri=to_hijri)
    if info is None:
        print(f"error: {args.date} is not covered by the calendar table", file=sys.stderr)
        return 1
    _print_day(info, as_json=args.json, arabic=args.arabic)
    return 0


def cmd_to_hijri(argv: list[str]) -> int:
    return _convert(argv, to_hijri=True)


def cmd_to_gregorian(argv: list[str]) -> int:
    return _convert(argv, to_hijri=False)


def cmd_month(argv: list[str]) -> int:
    import hijrical

    p = argparse.ArgumentParser(prog="hijrical month", description="List every day of a Gregorian or Hijri month")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int)
    p.add_argument("--calendar", choices=["gregorian", "hijri"], default="gregorian")
    _add_day_options(p)
    args = p.parse_args(argv)

    days = hijrical.month_days(args.year, args.month, args.calendar)
    if days is None:
        print(f"error: {args.calendar} month {args.year}-{args.month:02d} is not covered by the calendar table", file=sys.stderr)
        return 1
    if args.json:
        print(json.dumps([d.to_dict() for d in days], ensure_ascii=False, indent=2))
        return 0
    for d in days:
        _print_day(d, as_json=False, arabic=args.arabic)
    return 0


def cmd_today(argv: list[str]) -> int:
    import hijrical

    p = argparse.ArgumentParser(prog="hijrical today", description="Today's date in both calendars")
    _add_day_options(p)
    args = p.parse_args(argv)

    info = hijrical.today()
    if info is None:
        print("error: today is not covered by the calendar table", file=sys.stderr)
        return 1
    _print_day(info, as_json=args.json, arabic=args.arabic)
    return 0


def cmd_explain(argv: list[str]) -> int:
    import hijrical

    p = argparse.ArgumentParser(prog="hijrical explain", description="Show how a conversion was resolved")
    p.add_argument("date", help="DD/MM/YYYY")
    p.add_argument("--from", dest="source", choices=["gregorian", "hijri"], default="gregorian")
    args = p.parse_args(argv)

    out = hijrical.explain(args.date, to_hijri=(args.source == "gregorian"))
    print(json.dumps(out, ensure_ascii=False, indent=2, default=str))
    return 0 if out["status"] == "ok" else 1


def cmd_info(argv: list[str]) -> int:
    import hijrical

    argparse.ArgumentParser(prog="hijrical info", description="Describe the loaded calendar table").parse_args(argv)
    for k, v in hijrical.engine_info().items():
        print(f"{k:20s} {v}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="hijrical", description="Gregorian / Umm al-Qura calendar toolkit CLI.")
    p.add_argument("--table", default=None, help="calendar table JSON (default: $HIJRICAL_TABLE or packaged)")
    p.add_argument("--index", action="store_true", help="build the Hijri reverse index at startup")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING (default: $HIJRICAL_LOG_LEVEL or WARNING)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_g2h = sub.add_parser("to-hijri", help="Gregorian -> Hijri")
    p_g2h.add_argument("date", help="DD/MM/YYYY")
    p_h2g = sub.add_parser("to-gregorian", help="Hijri -> Gregorian")
    p_h2g.add_argument("date", help="DD/MM/YYYY")
    sub.add_parser("month", help="List the days of a month")
    sub.add_parser("today", help="Today's date in both calendars")
    sub.add_parser("explain", help="Show how a conversion was resolved")
    sub.add_parser("info", help="Describe the loaded calendar table")

    # diagnostics
    sub.add_parser("pretty-month", help="Print Gregorian/Hijri month grids (diagnostics)")
    sub.add_parser("new-years", help="Print 1 Muharram dates per Hijri year (diagnostics)")
    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument("tool", choices=["round-trip", "month-lengths"], help="Which diagnostic to run")

    # maintenance
    sub.add_parser("build-table", help="Regenerate the calendar table (needs hijrical[build])")

    # Backward compatibility: `hijrical DD/MM/YYYY ...`
    if argv and _DATE_RE.match(argv[0]):
        argv = ["to-hijri"] + list(argv)

    args, rest = p.parse_known_args(argv)
    _configure_logging(args.log_level)

    try:
        _use_table(args.table, args.index)
    except HijriCalError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.cmd == "to-hijri":
        return cmd_to_hijri([args.date] + rest)

    if args.cmd == "to-gregorian":
        return cmd_to_gregorian([args.date] + rest)

    if args.cmd == "month":
        return cmd_month(rest)

    if args.cmd == "today":
        return cmd_today(rest)

    if args.cmd == "explain":
        return cmd_explain(rest)

    if args.cmd == "info":
        return cmd_info(rest)

    if args.cmd == "pretty-month":
        return _run_module_main("hijrical.diagnostics.pretty_month", rest)

    if args.cmd == "new-years":
        return _run_module_main("hijrical.diagnostics.new_years_table", rest)

    if args.cmd == "diag":
        tool_map = {
            "round-trip": "hijrical.diagnostics.round_trip",
            "month-lengths": "hijrical.diagnostics.month_lengths",
        }
        return _run_module_main(tool_map[args.tool], rest)

    if args.cmd == "build-table":
        return _run_module_main("hijrical.reference.build_table", rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
