"""
DataStore — owner of the active climate Dataset.

Loaded once at startup, queried on every request. A reload assembles the new
Dataset off to the side and publishes it with a single reference swap, so a
reader sees either the previous Dataset or the new one, never a mixture.
A failed or cancelled reload leaves the previous Dataset in place.
"""
from __future__ import annotations

import datetime as dt
import threading
from typing import Mapping, Optional, Sequence

from climate_outlook.analytics.stats import compute_stats
from climate_outlook.analytics.subset import select_subset
from climate_outlook.analytics.timeline import generate_timeline
from climate_outlook.config import TIMELINE_DEFAULT_MONTHS, TIMELINE_DEFAULT_STEP_DAYS
from climate_outlook.data.loader import Source, load_dataset
from climate_outlook.data.schemas import (
    Dataset,
    StatResult,
    SubsetQuery,
    TimelinePoint,
    TrendAdjustment,
    describe_variable,
)


class DataStore:
    """In-memory climate observations with subset/statistics accessors."""

    def __init__(self) -> None:
        self._dataset: Dataset = Dataset.empty()
        self._load_lock = threading.Lock()
        self._loaded = False
        self.last_error: Optional[BaseException] = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, source: Source, cancel: Optional[threading.Event] = None) -> bool:
        """Replace the active Dataset with one read from ``source``.

        Returns True on success. On any failure the error is kept on
        ``last_error`` and the active Dataset is left untouched.
        """
        print("Loading climate observations...")
        with self._load_lock:
            try:
                dataset = load_dataset(source, cancel=cancel)
            except Exception as exc:
                self.last_error = exc
                print(f"  Warning: load failed, keeping previous dataset ({len(self._dataset):,} rows): {exc}")
                return False
            self._dataset = dataset
            self._loaded = True
            self.last_error = None
        return True

    def snapshot(self) -> Dataset:
        """The active Dataset. Safe to hold across a concurrent reload."""
        return self._dataset

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Metadata queries
    # ------------------------------------------------------------------

    def list_variables(self) -> list[dict]:
        """Discovered variables with display name and unit."""
        return [describe_variable(k) for k in sorted(self._dataset.variables)]

    def row_count(self) -> int:
        return len(self._dataset)

    def source(self) -> Optional[str]:
        return self._dataset.source

    def year_range(self) -> tuple[Optional[int], Optional[int]]:
        """(first, last) observation year of the active Dataset."""
        dates = self._dataset.records["date"]
        if dates.empty:
            return None, None
        return int(dates.dt.year.min()), int(dates.dt.year.max())

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def query(
        self,
        subset_query: SubsetQuery,
        variables: Sequence[str],
        thresholds: Optional[Mapping[str, Mapping]] = None,
        trend_adjust: Optional[TrendAdjustment] = None,
    ) -> dict[str, StatResult]:
        """Statistics per variable for one subset of the active Dataset."""
        subset = select_subset(self.snapshot(), subset_query)
        return compute_stats(subset, variables, thresholds, trend_adjust)

    def timeline_query(
        self,
        subset_query: SubsetQuery,
        variables: Sequence[str],
        thresholds: Optional[Mapping[str, Mapping]] = None,
        trend_adjust: Optional[TrendAdjustment] = None,
        *,
        start_date: dt.date,
        months: int = TIMELINE_DEFAULT_MONTHS,
        step_days: int = TIMELINE_DEFAULT_STEP_DAYS,
    ) -> list[TimelinePoint]:
        """Stepped specific-date statistics from ``start_date`` onwards."""
        return generate_timeline(
            self.snapshot(),
            subset_query,
            variables,
            thresholds,
            trend_adjust,
            start_date=start_date,
            months=months,
            step_days=step_days,
        )
