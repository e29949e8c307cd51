"""
Safe math helpers used across the analytics modules.
"""
from __future__ import annotations

import math

import numpy as np
import pandas as pd


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide safely, returning default if denominator is zero or NaN."""
    if denominator == 0 or pd.isna(denominator):
        return default
    result = numerator / denominator
    return default if pd.isna(result) else result


def ols_slope(x: np.ndarray, y: np.ndarray) -> float:
    """Ordinary least-squares slope of y on x. 0 when x has no spread."""
    if len(x) < 2:
        return 0.0
    x_dev = x - x.mean()
    y_dev = y - y.mean()
    return float(safe_divide(float((x_dev * y_dev).sum()), float((x_dev ** 2).sum())))


def as_threshold(spec) -> float | None:
    """The numeric ``high`` value of a threshold spec, or None."""
    if spec is None:
        return None
    high = spec.get("high") if hasattr(spec, "get") else getattr(spec, "high", None)
    if isinstance(high, bool) or not isinstance(high, (int, float, np.integer, np.floating)):
        return None
    return float(high) if math.isfinite(high) else None


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON serialization."""
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items() if k is not None}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if hasattr(obj, "to_dict") and not isinstance(obj, (pd.DataFrame, pd.Series)):
        return sanitize_for_json(obj.to_dict())
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        obj = float(obj)
    if isinstance(obj, float):
        return 0.0 if (math.isnan(obj) or math.isinf(obj)) else obj
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj
