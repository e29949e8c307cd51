"""
Outlook Report — per-variable statistics for one subset, plus an optional
stepped timeline, as JSON or a styled workbook.
"""
from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Mapping, Optional, Sequence

from climate_outlook.analytics.common import as_threshold, sanitize_for_json
from climate_outlook.config import TIMELINE_DEFAULT_MONTHS, TIMELINE_DEFAULT_STEP_DAYS
from climate_outlook.data.schemas import SubsetQuery, Timeframe, TrendAdjustment, describe_variable
from climate_outlook.data.store import DataStore
from climate_outlook.excel.writer import ExcelWriter


STAT_COLS = [
    ("name", "text", "Variable"),
    ("unit", "text", "Unit"),
    ("samples", "number", "Samples"),
    ("mean", "decimal", "Mean"),
    ("median", "decimal", "Median"),
    ("percentile10", "decimal", "P10"),
    ("percentile90", "decimal", "P90"),
    ("trend", "trend", "Trend / Decade"),
    ("threshold", "decimal", "High Threshold"),
    ("probability", "percent", "P(≥ High)"),
]

TIMELINE_COLS = [
    ("date", "text", "Date"),
    ("name", "text", "Variable"),
    ("samples", "number", "Samples"),
    ("mean", "decimal", "Mean"),
    ("percentile10", "decimal", "P10"),
    ("percentile90", "decimal", "P90"),
    ("probability", "percent", "P(≥ High)"),
]


def describe_query(query: SubsetQuery) -> str:
    """Human-readable label for a subset query."""
    parts = []
    if query.coordinates is not None:
        radius = "default" if query.radius_deg is None else f"{query.radius_deg:g}°"
        parts.append(f"({query.coordinates.lat:.4f}, {query.coordinates.lon:.4f}) ±{radius}")
    else:
        parts.append("all locations")

    timeframe = Timeframe(query.timeframe)
    if timeframe == Timeframe.SPECIFIC_DATE and query.date:
        parts.append(f"around {query.date:%b %d}")
    elif timeframe == Timeframe.MONTH and query.month:
        parts.append(f"{dt.date(2000, int(query.month), 1):%B}")
    elif timeframe == Timeframe.SEASON and query.season:
        parts.append(str(query.season).lower())
    else:
        parts.append("year-round")
    return " · ".join(parts)


def _stat_rows(results: Mapping, thresholds: Mapping) -> list[dict]:
    rows = []
    for key, res in results.items():
        info = describe_variable(key)
        d = res.to_dict()
        rows.append({
            "key": key,
            "name": info["name"],
            "unit": info["unit"],
            "samples": d["meta"]["samples"],
            "threshold": as_threshold(thresholds.get(key)),
            **{k: d[k] for k in ("mean", "median", "percentile10", "percentile90", "trend", "probability")},
        })
    return rows


def _exceeds(row: dict) -> str | None:
    """Flag rows where the threshold is exceeded more often than not."""
    return "exceed" if (row.get("probability") or 0) >= 50 else None


def generate_json(
    store: DataStore,
    query: SubsetQuery,
    variables: Sequence[str],
    thresholds: Optional[Mapping] = None,
    trend_adjust: Optional[TrendAdjustment] = None,
    start_date: Optional[dt.date] = None,
    months: int = TIMELINE_DEFAULT_MONTHS,
    step_days: int = TIMELINE_DEFAULT_STEP_DAYS,
) -> dict:
    thresholds = thresholds or {}
    results = store.query(query, variables, thresholds, trend_adjust)
    year_min, year_max = store.year_range()

    report = {
        "source": store.source(),
        "query": describe_query(query),
        "years": {"min": year_min, "max": year_max},
        "trend_adjusted": bool(trend_adjust and trend_adjust.enable),
        "summary": _stat_rows(results, thresholds),
        "data": {k: v.to_dict() for k, v in results.items()},
    }

    if start_date is not None:
        points = store.timeline_query(
            query, variables, thresholds, trend_adjust,
            start_date=start_date, months=months, step_days=step_days,
        )
        report["timeline"] = [
            {"date": p.date.isoformat(), **row}
            for p in points
            for row in _stat_rows(p.data, thresholds)
        ]

    return sanitize_for_json(report)


def generate_excel(
    store: DataStore,
    output_path: str | Path,
    query: SubsetQuery,
    variables: Sequence[str],
    thresholds: Optional[Mapping] = None,
    trend_adjust: Optional[TrendAdjustment] = None,
    start_date: Optional[dt.date] = None,
    months: int = TIMELINE_DEFAULT_MONTHS,
    step_days: int = TIMELINE_DEFAULT_STEP_DAYS,
) -> Path:
    data = generate_json(
        store, query, variables, thresholds, trend_adjust,
        start_date=start_date, months=months, step_days=step_days,
    )
    ew = ExcelWriter()
    ws = ew.add_sheet("Outlook")
    subtitle = f"{data['query']}  |  {data['source'] or 'no source'}"
    if data["trend_adjusted"]:
        subtitle += "  |  trend-adjusted"
    row = ew.write_title(ws, "Climate Outlook", subtitle, merge_cols=len(STAT_COLS))

    years = data["years"]
    row = ew.write_kpi_row(ws, row, [
        (len(data["summary"]), "Variables", "number"),
        (max((r["samples"] for r in data["summary"]), default=0), "Max Samples", "number"),
        (f"{years['min'] or '–'}–{years['max'] or '–'}", "Years", "text"),
    ])

    row = ew.write_section(ws, row, "Statistics by Variable")
    ew.write_table(ws, row, STAT_COLS, data["summary"], highlight_fn=_exceeds, freeze=False)

    if "timeline" in data:
        tws = ew.add_sheet("Timeline")
        trow = ew.write_title(tws, "Outlook Timeline", subtitle, merge_cols=len(TIMELINE_COLS))
        ew.write_table(tws, trow, TIMELINE_COLS, data["timeline"], highlight_fn=_exceeds)

    return ew.save(output_path)
