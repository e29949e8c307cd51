"""
Timeline generator — repeated specific-date subset + statistics across a date range.
"""
from __future__ import annotations

import dataclasses
import datetime as dt
import math
from typing import Mapping, Optional, Sequence, Union

import pandas as pd

from climate_outlook.analytics.stats import compute_stats
from climate_outlook.analytics.subset import select_subset
from climate_outlook.config import (
    DAYS_PER_MONTH,
    TIMELINE_DEFAULT_MONTHS,
    TIMELINE_DEFAULT_STEP_DAYS,
    TIMELINE_MONTHS_RANGE,
    TIMELINE_STEP_DAYS_RANGE,
)
from climate_outlook.data.schemas import Dataset, SubsetQuery, TimelinePoint, TrendAdjustment


def timeline_dates(
    start_date: dt.date,
    months: int = TIMELINE_DEFAULT_MONTHS,
    step_days: int = TIMELINE_DEFAULT_STEP_DAYS,
) -> list[dt.date]:
    """Step dates from ``start_date`` through ``round(months × 30.4375)`` days, inclusive."""
    lo, hi = TIMELINE_MONTHS_RANGE
    if not lo <= months <= hi:
        raise ValueError(f"months must be between {lo} and {hi} (got {months})")
    lo, hi = TIMELINE_STEP_DAYS_RANGE
    if not lo <= step_days <= hi:
        raise ValueError(f"step_days must be between {lo} and {hi} (got {step_days})")

    total_days = math.floor(months * DAYS_PER_MONTH + 0.5)
    return [start_date + dt.timedelta(days=i) for i in range(0, total_days + 1, int(step_days))]


def generate_timeline(
    data: Union[Dataset, pd.DataFrame],
    base_query: SubsetQuery,
    variables: Sequence[str],
    thresholds: Optional[Mapping[str, object]] = None,
    trend_adjust: Optional[TrendAdjustment] = None,
    *,
    start_date: dt.date,
    months: int = TIMELINE_DEFAULT_MONTHS,
    step_days: int = TIMELINE_DEFAULT_STEP_DAYS,
) -> list[TimelinePoint]:
    """One TimelinePoint per step; trend adjustment targets each step's year."""
    points: list[TimelinePoint] = []
    for date in timeline_dates(start_date, months, step_days):
        subset = select_subset(data, base_query.on_date(date))
        adjust = trend_adjust
        if trend_adjust is not None:
            adjust = dataclasses.replace(trend_adjust, target_year=date.year)
        points.append(TimelinePoint(date=date, data=compute_stats(subset, variables, thresholds, adjust)))
    return points
