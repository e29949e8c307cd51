"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    rows: int
    variables: int
    source: Optional[str] = None
    year_min: Optional[int] = None
    year_max: Optional[int] = None


class VariableInfo(BaseModel):
    key: str
    name: str
    unit: str


class VariablesResponse(BaseModel):
    variables: list[VariableInfo]


class ReloadResponse(BaseModel):
    status: str
    rows: int
    variables: list[str]
    source: Optional[str] = None


class AnalysisResponse(BaseModel):
    data: dict[str, Any]


class TimelineResponse(BaseModel):
    points: list[dict[str, Any]]
