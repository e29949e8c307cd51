"""
Query and result schemas for subset/statistics requests.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import pandas as pd

from climate_outlook.config import DEFAULT_UNIT, VARIABLE_DISPLAY_NAMES, VARIABLE_UNITS


class Timeframe(str, Enum):
    SPECIFIC_DATE = "specific-date"
    MONTH = "month"
    SEASON = "season"
    YEAR_ROUND = "year-round"


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float


@dataclass(frozen=True)
class SubsetQuery:
    """Spatial + temporal selection over the active dataset."""
    timeframe: Timeframe = Timeframe.YEAR_ROUND
    coordinates: Optional[Coordinates] = None
    radius_deg: Optional[float] = None       # None → config default
    date: Optional[dt.date] = None           # specific-date reference
    month: Optional[int] = None              # 1-12
    season: Optional[str] = None             # spring|summer|fall|winter
    window_days: Optional[int] = None        # None → config default

    def on_date(self, date: dt.date) -> "SubsetQuery":
        """Same spatial selection, pinned to a specific date."""
        return SubsetQuery(
            timeframe=Timeframe.SPECIFIC_DATE,
            coordinates=self.coordinates,
            radius_deg=self.radius_deg,
            date=date,
            window_days=self.window_days,
        )


@dataclass(frozen=True)
class TrendAdjustment:
    enable: bool = False
    target_year: Optional[int] = None


@dataclass
class StatResult:
    """Per-variable statistics bundle."""
    probability: float = 0.0
    trend: float = 0.0
    mean: float = 0.0
    median: float = 0.0
    percentile90: float = 0.0
    percentile10: float = 0.0
    historical_data: list[float] = field(default_factory=list)
    samples: int = 0
    year_min: Optional[int] = None
    year_max: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "probability": self.probability,
            "trend": self.trend,
            "mean": self.mean,
            "median": self.median,
            "percentile90": self.percentile90,
            "percentile10": self.percentile10,
            "historicalData": list(self.historical_data),
            "meta": {
                "samples": self.samples,
                "yearMin": self.year_min,
                "yearMax": self.year_max,
            },
        }


@dataclass
class TimelinePoint:
    date: dt.date
    data: dict[str, StatResult]

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "data": {k: v.to_dict() for k, v in self.data.items()},
        }


@dataclass(frozen=True, eq=False)
class Dataset:
    """A fully normalized record set. Never mutated after construction."""
    records: pd.DataFrame
    variables: frozenset[str]
    source: Optional[str] = None
    loaded_at: Optional[dt.datetime] = None

    @classmethod
    def empty(cls) -> "Dataset":
        frame = pd.DataFrame({
            "date": pd.Series(dtype="datetime64[ns]"),
            "lat": pd.Series(dtype="float64"),
            "lon": pd.Series(dtype="float64"),
        })
        return cls(records=frame, variables=frozenset())

    def __len__(self) -> int:
        return len(self.records)


def describe_variable(key: str) -> dict:
    """Display name and unit for a canonical variable key."""
    name = VARIABLE_DISPLAY_NAMES.get(key) or (key[:1].upper() + key[1:])
    return {"key": key, "name": name, "unit": VARIABLE_UNITS.get(key, DEFAULT_UNIT)}
