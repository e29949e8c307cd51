"""
Spatial / temporal subset selection over a Dataset.
"""
from __future__ import annotations

import datetime as dt
from typing import Union

import pandas as pd

from climate_outlook.config import (
    DEFAULT_RADIUS_DEG,
    DEFAULT_WINDOW_DAYS,
    SEASON_MONTHS,
    YEAR_WRAP_DAYS,
)
from climate_outlook.data.schemas import Dataset, SubsetQuery, Timeframe


def day_of_year(date: Union[dt.date, dt.datetime, pd.Timestamp]) -> int:
    """1-based ordinal day within the (UTC) calendar year."""
    ts = pd.Timestamp(date)
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC")
    return int(ts.dayofyear)


def _records(data: Union[Dataset, pd.DataFrame]) -> pd.DataFrame:
    return data.records if isinstance(data, Dataset) else data


def filter_bounding_box(df: pd.DataFrame, lat: float, lon: float, radius_deg: float) -> pd.DataFrame:
    """Records within ±radius degrees of (lat, lon) on both axes.

    Rows without coordinates never match (NaN comparisons are False).
    """
    mask = ((df["lat"] - lat).abs() <= radius_deg) & ((df["lon"] - lon).abs() <= radius_deg)
    return df[mask]


def filter_date_window(df: pd.DataFrame, ref: dt.date, window_days: int) -> pd.DataFrame:
    """Records whose day-of-year lies within ``window_days`` of ``ref``, across years.

    The second clause wraps around the year boundary (Dec 30 ↔ Jan 2).
    """
    target = day_of_year(ref)
    diff = (df["date"].dt.dayofyear - target).abs()
    return df[(diff <= window_days) | (YEAR_WRAP_DAYS - diff <= window_days)]


def filter_month(df: pd.DataFrame, month: int) -> pd.DataFrame:
    return df[df["date"].dt.month == int(month)]


def filter_season(df: pd.DataFrame, season: str) -> pd.DataFrame:
    """Records in the season's months; an unknown season matches nothing."""
    months = SEASON_MONTHS.get(str(season).strip().lower(), frozenset())
    return df[df["date"].dt.month.isin(sorted(months))]


def select_subset(data: Union[Dataset, pd.DataFrame], query: SubsetQuery) -> pd.DataFrame:
    """Apply the spatial then the temporal filter, preserving record order.

    A timeframe whose parameter (date / month / season) is missing applies no
    temporal filter.
    """
    df = _records(data)

    coords = query.coordinates
    if coords is not None and coords.lat is not None and coords.lon is not None:
        radius = DEFAULT_RADIUS_DEG if query.radius_deg is None else query.radius_deg
        df = filter_bounding_box(df, coords.lat, coords.lon, radius)

    timeframe = Timeframe(query.timeframe)
    if timeframe == Timeframe.SPECIFIC_DATE and query.date is not None:
        window = DEFAULT_WINDOW_DAYS if query.window_days is None else query.window_days
        df = filter_date_window(df, query.date, window)
    elif timeframe == Timeframe.MONTH and query.month is not None:
        df = filter_month(df, query.month)
    elif timeframe == Timeframe.SEASON and query.season is not None:
        df = filter_season(df, query.season)
    # YEAR_ROUND: no temporal filter

    return df
