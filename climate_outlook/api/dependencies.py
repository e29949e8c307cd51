"""
FastAPI dependencies — DataStore singleton, request → query conversion.
"""
from __future__ import annotations

import datetime as dt
from typing import Optional

from fastapi import HTTPException

from climate_outlook.api.request_models import AnalysisRequest, TrendAdjustIn
from climate_outlook.data.normalize import parse_reference_date
from climate_outlook.data.schemas import Coordinates, SubsetQuery, Timeframe, TrendAdjustment
from climate_outlook.data.store import DataStore

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: DataStore | None = None


def set_store(store: DataStore) -> None:
    global _store
    _store = store


def get_store() -> DataStore:
    if _store is None or not _store.is_loaded:
        raise HTTPException(503, "Dataset not loaded — check CSV_PATH, then POST /api/reload")
    return _store


def get_store_or_empty() -> DataStore:
    """Return the store even if it has no data (for health/reload endpoints)."""
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


# ---------------------------------------------------------------------------
# Request parsing
# ---------------------------------------------------------------------------

def parse_date(value: str, field: str = "date") -> dt.date:
    try:
        return parse_reference_date(value)
    except ValueError:
        raise HTTPException(400, f"Invalid {field}: {value!r}")


def _parse_month(value) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        month = int(str(value).strip())
    except ValueError:
        raise HTTPException(400, f"Invalid month: {value!r}")
    if not 1 <= month <= 12:
        raise HTTPException(400, f"month must be 1-12 (got {month})")
    return month


def to_subset_query(req: AnalysisRequest, radius_deg: Optional[float] = None) -> SubsetQuery:
    coords = None
    if req.coordinates is not None:
        coords = Coordinates(lat=req.coordinates.lat, lon=req.coordinates.lon)
    return SubsetQuery(
        timeframe=Timeframe(req.timeframe),
        coordinates=coords,
        radius_deg=radius_deg,
        date=parse_date(req.date) if req.date else None,
        month=_parse_month(req.month),
        season=req.season or None,
    )


def to_trend_adjustment(spec: TrendAdjustIn | None) -> TrendAdjustment | None:
    if spec is None:
        return None
    return TrendAdjustment(enable=spec.enable, target_year=spec.targetYear)
