"""
Pydantic request schemas for the analysis API.
"""
from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field


class CoordinatesIn(BaseModel):
    lat: float
    lon: float


class TrendAdjustIn(BaseModel):
    enable: bool = False
    targetYear: Optional[int] = None


class AnalysisRequest(BaseModel):
    location: Optional[str] = None          # free-text label, not used for filtering
    coordinates: Optional[CoordinatesIn] = None
    timeframe: Literal["specific-date", "month", "season", "year-round"]
    date: Optional[str] = None
    month: Optional[Union[int, str]] = None
    season: Optional[str] = None
    variables: list[str] = Field(min_length=1)
    thresholds: Optional[dict[str, Any]] = None   # {"temperature": {"high": 35}}
    trendAdjust: Optional[TrendAdjustIn] = None


class TimelineRequest(AnalysisRequest):
    timeframe: Literal["specific-date", "month", "season", "year-round"] = "specific-date"
    startDate: str
    months: int = Field(6, ge=1, le=12)
    stepDays: int = Field(7, ge=1, le=14)
