#!/usr/bin/env python3
"""
Climate Outlook CLI — Unified entry point for queries, timelines, exports, and the API server.

USAGE:
  python -m climate_outlook.cli variables --csv data/obs.csv
  python -m climate_outlook.cli query --csv data/obs.csv --timeframe month --month 7 \
      --var temperature --var precipitation --threshold temperature=35
  python -m climate_outlook.cli query --csv data/obs.csv --lat -33.92 --lon 18.42 \
      --timeframe specific-date --date 2025-12-30 --var temperature --trend --xlsx out.xlsx
  python -m climate_outlook.cli timeline --csv data/obs.csv --start 2026-01-01 --months 3 \
      --step-days 7 --var temperature --json

  python -m climate_outlook.cli serve                      # Start API server
  python -m climate_outlook.cli serve --port 5050
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from climate_outlook.config import (
    CSV_PATH,
    REPORTS_FOLDER,
    TIMELINE_DEFAULT_MONTHS,
    TIMELINE_DEFAULT_STEP_DAYS,
)
from climate_outlook.data.normalize import parse_reference_date
from climate_outlook.data.schemas import Coordinates, SubsetQuery, Timeframe, TrendAdjustment
from climate_outlook.data.store import DataStore


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(f"  CLIMATE OUTLOOK — {title}")
    print("=" * 70)


def _load_store(args) -> DataStore | None:
    path = args.csv or CSV_PATH
    if not path:
        print("  No source: pass --csv or set CSV_PATH")
        return None
    store = DataStore()
    if not store.load(path):
        return None
    return store


def _threshold_pair(text: str) -> tuple[str, float]:
    """argparse type for KEY=HIGH."""
    key, sep, value = text.partition("=")
    try:
        high = float(value)
    except ValueError:
        sep = ""
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"threshold must look like KEY=HIGH (got '{text}')")
    return key.strip(), high


def _build_query(args) -> SubsetQuery:
    """Build a SubsetQuery from CLI args."""
    coords = None
    if args.lat is not None and args.lon is not None:
        coords = Coordinates(lat=args.lat, lon=args.lon)
    return SubsetQuery(
        timeframe=Timeframe(args.timeframe),
        coordinates=coords,
        radius_deg=args.radius,
        date=args.date,
        month=args.month,
        season=args.season,
        window_days=args.window,
    )


def _trend(args) -> TrendAdjustment | None:
    if not args.trend:
        return None
    return TrendAdjustment(enable=True, target_year=args.target_year)


def _print_summary(rows: list[dict]) -> None:
    print(f"\n{'VARIABLE':<18}{'N':>7}{'MEAN':>10}{'MEDIAN':>10}{'P10':>10}{'P90':>10}{'TREND/10Y':>11}{'P(≥HI)':>9}")
    for r in rows:
        print(
            f"{r['name'][:17]:<18}{r['samples']:>7,}{r['mean']:>10.2f}{r['median']:>10.2f}"
            f"{r['percentile10']:>10.2f}{r['percentile90']:>10.2f}{r['trend']:>+10.2f}%{r['probability']:>8.1f}%"
        )


def cmd_variables(args):
    """List variables discovered in the source."""
    _banner("VARIABLES")
    store = _load_store(args)
    if store is None:
        return 1
    variables = store.list_variables()
    print(f"\nVARIABLES ({len(variables)}):\n")
    for v in variables:
        print(f"  {v['key']:<16}{v['name']:<20}{v['unit']}")
    return 0


def cmd_query(args, with_timeline: bool = False):
    """Subset statistics, optionally with a timeline and an Excel export."""
    from climate_outlook.reports.outlook_report import generate_excel, generate_json

    _banner("TIMELINE" if with_timeline else "QUERY")
    store = _load_store(args)
    if store is None:
        return 1

    query = _build_query(args)
    kwargs = dict(thresholds={k: {"high": v} for k, v in args.threshold or []}, trend_adjust=_trend(args))
    if with_timeline:
        kwargs.update(start_date=args.start, months=args.months, step_days=args.step_days)

    data = generate_json(store, query, args.var, **kwargs)

    if args.json:
        print(json.dumps(data, indent=2, default=str))
    else:
        print(f"\n  {data['query']}")
        _print_summary(data["summary"])
        for point in data.get("timeline", []):
            print(f"  {point['date']}  {point['name']:<16} n={point['samples']:<6,} "
                  f"mean={point['mean']:.2f}  p≥hi={point['probability']:.1f}%")

    if args.xlsx:
        out = Path(args.xlsx)
        if not out.is_absolute() and out.parent == Path("."):
            out = REPORTS_FOLDER / out
        generate_excel(store, out, query, args.var, **kwargs)
        print(f"\nReport saved to: {out}\n")
    return 0


def cmd_timeline(args):
    return cmd_query(args, with_timeline=True)


def cmd_serve(args):
    """Start the FastAPI server."""
    import uvicorn
    from climate_outlook import config

    if args.csv:
        config.CSV_PATH = args.csv
        os.environ["CSV_PATH"] = args.csv
    uvicorn.run("climate_outlook.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def _add_query_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--csv", help="Delimited observations file (default: $CSV_PATH)")
    p.add_argument("--lat", type=float, help="Center latitude")
    p.add_argument("--lon", type=float, help="Center longitude")
    p.add_argument("--radius", type=float, help="Bounding-box half-width in degrees (default: $CSV_RADIUS_DEG)")
    p.add_argument("--timeframe", choices=[t.value for t in Timeframe], default=Timeframe.YEAR_ROUND.value)
    p.add_argument("--date", type=parse_reference_date, help="Reference date for specific-date (YYYY-MM-DD)")
    p.add_argument("--month", type=int, choices=range(1, 13), metavar="1-12", help="Month")
    p.add_argument("--season", help="spring | summer | fall | winter")
    p.add_argument("--window", type=int, help="Specific-date window in days (default: $CSV_WINDOW_DAYS)")
    p.add_argument("--var", action="append", required=True, help="Variable key (repeatable)")
    p.add_argument("--threshold", action="append", type=_threshold_pair, help="KEY=HIGH exceedance threshold (repeatable)")
    p.add_argument("--trend", action="store_true", help="Extrapolate values along the decadal trend")
    p.add_argument("--target-year", type=int, help="Trend target year (default: current year)")
    p.add_argument("--xlsx", help="Write an Excel report to this path")
    p.add_argument("--json", action="store_true", help="Print the full JSON result")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="climate-outlook", description="Climate Outlook")
    subparsers = parser.add_subparsers(dest="command")

    var_parser = subparsers.add_parser("variables", help="List discovered variables")
    var_parser.add_argument("--csv", help="Delimited observations file (default: $CSV_PATH)")
    var_parser.set_defaults(func=cmd_variables)

    query_parser = subparsers.add_parser("query", help="Statistics for one subset")
    _add_query_args(query_parser)
    query_parser.set_defaults(func=cmd_query)

    tl_parser = subparsers.add_parser("timeline", help="Stepped statistics across a date range")
    _add_query_args(tl_parser)
    tl_parser.add_argument("--start", type=parse_reference_date, required=True, help="Start date (YYYY-MM-DD)")
    tl_parser.add_argument("--months", type=int, default=TIMELINE_DEFAULT_MONTHS, choices=range(1, 13), metavar="1-12")
    tl_parser.add_argument("--step-days", type=int, default=TIMELINE_DEFAULT_STEP_DAYS, choices=range(1, 15), metavar="1-14")
    tl_parser.set_defaults(func=cmd_timeline)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--csv", help="Dataset to load at startup (sets CSV_PATH)")
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "5050")), help="Port (default 5050)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if not getattr(args, "func", None):
        parser.print_help()
        return 1
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
