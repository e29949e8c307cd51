"""
Statistics engine — descriptive stats, decadal trend, exceedance probability,
and trend-based extrapolation per variable.

Trend adjustment rescales the series and recomputes the mean only; median and
percentiles always describe the observed (unadjusted) series.
"""
from __future__ import annotations

import datetime as dt
from typing import Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from climate_outlook.analytics.common import as_threshold, ols_slope, safe_divide
from climate_outlook.config import HISTORY_LENGTH, MIN_TREND_POINTS
from climate_outlook.data.normalize import parse_number_series
from climate_outlook.data.schemas import StatResult, TrendAdjustment


def variable_series(subset: pd.DataFrame, key: str) -> pd.Series:
    """Non-null float values of ``key`` in subset order (empty if absent)."""
    if key not in subset.columns:
        return pd.Series(dtype="float64")
    return parse_number_series(subset[key]).dropna()


def summarize(values: np.ndarray) -> tuple[float, float, float, float]:
    """(mean, median, p90, p10) with linear-interpolation quantiles."""
    if len(values) == 0:
        return 0.0, 0.0, 0.0, 0.0
    p90, p10 = np.percentile(values, [90, 10])
    return float(np.mean(values)), float(np.median(values)), float(p90), float(p10)


def decadal_trend(subset: pd.DataFrame, key: str) -> float:
    """Percent change per decade, from an OLS fit of value on calendar year."""
    if key not in subset.columns or subset.empty:
        return 0.0
    pts = pd.DataFrame({
        "year": subset["date"].dt.year,
        "value": parse_number_series(subset[key]),
    }).dropna()
    if len(pts) < MIN_TREND_POINTS:
        return 0.0

    x = pts["year"].to_numpy(dtype="float64")
    y = pts["value"].to_numpy(dtype="float64")
    mean = float(y.mean())
    if mean == 0:
        return 0.0
    return safe_divide(ols_slope(x, y), mean) * 100 * 10


def exceedance_probability(values: np.ndarray, threshold: float) -> float:
    """Percent of values at or above ``threshold``."""
    if len(values) == 0:
        return 0.0
    return float(np.count_nonzero(values >= threshold)) / len(values) * 100


def trend_factor(trend_pct_per_decade: float, target_year: int, max_year: int) -> float:
    years_ahead = target_year - max_year
    return 1 + (trend_pct_per_decade / 100) * (years_ahead / 10)


def year_bounds(subset: pd.DataFrame) -> tuple[Optional[int], Optional[int]]:
    years = subset["date"].dt.year.dropna() if "date" in subset.columns else pd.Series(dtype="float64")
    if years.empty:
        return None, None
    return int(years.min()), int(years.max())


def compute_stats(
    subset: pd.DataFrame,
    variables: Sequence[str],
    thresholds: Optional[Mapping[str, object]] = None,
    trend_adjust: Optional[TrendAdjustment] = None,
) -> dict[str, StatResult]:
    """Per-variable result bundles for a subset.

    Unknown variables and variables with no samples get an all-zero bundle.
    """
    thresholds = thresholds or {}
    year_min, year_max = year_bounds(subset)
    results: dict[str, StatResult] = {}

    for key in variables:
        raw = variable_series(subset, key).to_numpy(dtype="float64")
        if len(raw) == 0:
            results[key] = StatResult()
            continue

        mean, median, p90, p10 = summarize(raw)
        trend = decadal_trend(subset, key)

        series = raw
        if trend_adjust is not None and trend_adjust.enable and year_max is not None:
            target = trend_adjust.target_year
            if target is None:
                target = dt.date.today().year
            series = raw * trend_factor(trend, target, year_max)
            mean = float(np.mean(series))

        high = as_threshold(thresholds.get(key))
        probability = exceedance_probability(series, high) if high is not None else 0.0

        results[key] = StatResult(
            probability=probability,
            trend=float(trend),
            mean=mean,
            median=median,
            percentile90=p90,
            percentile10=p10,
            historical_data=[float(v) for v in series[-HISTORY_LENGTH:]],
            samples=len(raw),
            year_min=year_min,
            year_max=year_max,
        )

    return results
