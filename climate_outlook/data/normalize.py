"""
Header alias resolution, locale-tolerant number parsing, date coercion.
"""
from __future__ import annotations

import datetime as dt
import math
from typing import Iterable, Mapping

import numpy as np
import pandas as pd

from climate_outlook.config import HEADER_ALIASES, VARIABLE_KEYS


# ---------------------------------------------------------------------------
# Header resolution
# ---------------------------------------------------------------------------

def build_header_map(
    headers: Iterable[str],
    aliases: Mapping[str, tuple[str, ...]] = HEADER_ALIASES,
) -> dict[str, str]:
    """Map canonical key → source header.

    Headers are compared trimmed and lowercased; the first header in source
    order that matches one of a key's aliases wins. A header equal to a table
    key that is still unmapped is accepted as a fallback.
    """
    trimmed = [str(h).strip() for h in headers]
    header_map: dict[str, str] = {}

    for canon, spellings in aliases.items():
        match = next((h for h in trimmed if h.lower() in spellings), None)
        if match is not None:
            header_map[canon] = match

    used = set(header_map.values())
    for h in trimmed:
        key = h.lower()
        if key in aliases and key not in header_map and h not in used:
            header_map[key] = h
            used.add(h)

    return header_map


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

def parse_number(value) -> float | None:
    """Parse one cell, accepting a comma decimal separator. Bad input → None."""
    if value is None:
        return None
    if isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool):
        value = float(value)
        return value if math.isfinite(value) else None
    text = str(value).strip().replace(",", ".", 1)
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_number_series(series: pd.Series) -> pd.Series:
    """Vectorized parse_number: float64 Series with NaN for empty/non-numeric cells."""
    if pd.api.types.is_numeric_dtype(series) and not pd.api.types.is_bool_dtype(series):
        numbers = series.astype("float64")
    else:
        text = series.astype(object).where(series.notna(), None)
        text = text.map(str, na_action="ignore")
        text = text.str.strip().str.replace(",", ".", n=1, regex=False)
        numbers = pd.to_numeric(text, errors="coerce").astype("float64")
    return numbers.replace([np.inf, -np.inf], np.nan)


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def parse_dates(series: pd.Series) -> pd.Series:
    """Parse date cells to timezone-naive UTC timestamps (NaT when unparseable)."""
    if series.empty:
        return pd.Series(pd.NaT, index=series.index, dtype="datetime64[ns]")
    text = series.astype(object).where(series.notna(), None)
    text = text.map(lambda v: str(v).strip() or None, na_action="ignore")
    parsed = pd.to_datetime(text, errors="coerce", utc=True, format="mixed")
    return parsed.dt.tz_convert(None).astype("datetime64[ns]")


# ---------------------------------------------------------------------------
# Row normalization
# ---------------------------------------------------------------------------

def normalize_frame(raw: pd.DataFrame, header_map: Mapping[str, str]) -> pd.DataFrame:
    """Turn a raw chunk into canonical records: date, lat, lon, variables.

    Rows whose date is missing or unparseable are dropped.
    """
    def _column(key: str) -> pd.Series:
        header = header_map.get(key)
        if header is None or header not in raw.columns:
            return pd.Series(np.nan, index=raw.index, dtype="float64")
        return raw[header]

    out = pd.DataFrame(index=raw.index)
    out["date"] = parse_dates(_column("date"))
    out["lat"] = parse_number_series(_column("lat"))
    out["lon"] = parse_number_series(_column("lon"))

    for key in VARIABLE_KEYS:
        if key in header_map:
            out[key] = parse_number_series(_column(key))

    return out[out["date"].notna()]


def discover_variables(records: pd.DataFrame) -> frozenset[str]:
    """Variable keys with at least one non-null value."""
    return frozenset(
        key for key in VARIABLE_KEYS
        if key in records.columns and records[key].notna().any()
    )


def parse_reference_date(value) -> dt.date:
    """Parse a query date (ISO or any layout pandas understands) to a UTC calendar date.

    Raises ValueError when the value is not a date.
    """
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"not a date: {value!r}") from exc
    if pd.isna(ts):
        raise ValueError(f"not a date: {value!r}")
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC")
    return ts.date()
