"""
Analysis endpoints — variables, subset statistics, timeline.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from climate_outlook.analytics.common import sanitize_for_json
from climate_outlook.api.dependencies import (
    get_store,
    get_store_or_empty,
    parse_date,
    to_subset_query,
    to_trend_adjustment,
)
from climate_outlook.api.request_models import AnalysisRequest, TimelineRequest
from climate_outlook.api.response_models import AnalysisResponse, TimelineResponse, VariablesResponse
from climate_outlook.data.store import DataStore

router = APIRouter(prefix="/api/analysis", tags=["analysis"])


def _safe_json(data: dict) -> JSONResponse:
    return JSONResponse(content=sanitize_for_json(data))


@router.get("/variables", response_model=VariablesResponse)
def list_variables(store: DataStore = Depends(get_store_or_empty)):
    return VariablesResponse(variables=store.list_variables())


@router.post("", response_model=AnalysisResponse)
def analyze(req: AnalysisRequest, store: DataStore = Depends(get_store)):
    """Statistics per variable for one spatial/temporal subset."""
    results = store.query(
        to_subset_query(req),
        req.variables,
        req.thresholds or {},
        to_trend_adjustment(req.trendAdjust),
    )
    return _safe_json({"data": {k: v.to_dict() for k, v in results.items()}})


@router.post("/timeline", response_model=TimelineResponse)
def timeline(req: TimelineRequest, store: DataStore = Depends(get_store)):
    """Stepped specific-date statistics over the requested months."""
    try:
        points = store.timeline_query(
            to_subset_query(req),
            req.variables,
            req.thresholds or {},
            to_trend_adjustment(req.trendAdjust),
            start_date=parse_date(req.startDate, "startDate"),
            months=req.months,
            step_days=req.stepDays,
        )
    except ValueError as exc:
        raise HTTPException(400, str(exc))
    return _safe_json({"points": [p.to_dict() for p in points]})
