"""
Meta endpoints: health, reload.
"""
from __future__ import annotations

import threading

from fastapi import APIRouter, Depends, HTTPException

from climate_outlook.api.dependencies import get_store_or_empty
from climate_outlook.api.response_models import HealthResponse, ReloadResponse
from climate_outlook.data.store import DataStore

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: DataStore = Depends(get_store_or_empty)):
    year_min, year_max = store.year_range()
    return HealthResponse(
        status="ok" if store.is_loaded else "empty",
        rows=store.row_count(),
        variables=len(store.list_variables()),
        source=store.source(),
        year_min=year_min,
        year_max=year_max,
    )


@router.post("/reload")
def reload_data(
    background: bool = False,
    store: DataStore = Depends(get_store_or_empty),
):
    """Re-read the configured CSV_PATH and swap it in.

    With ``?background=true`` returns immediately; queries keep using the
    previous dataset until the new one is complete.
    """
    from climate_outlook import config

    path = config.CSV_PATH
    if not path:
        raise HTTPException(400, "CSV_PATH is not set")

    if background:
        def _do_reload():
            if store.load(path):
                print(f"  Reload complete — {store.row_count():,} rows")

        threading.Thread(target=_do_reload, daemon=True).start()
        return {
            "status": "reloading",
            "message": "Reload started in background. Check /api/health for updated row counts.",
        }

    if not store.load(path):
        raise HTTPException(500, f"Reload failed, previous dataset kept: {store.last_error}")
    return ReloadResponse(
        status="reloaded",
        rows=store.row_count(),
        variables=[v["key"] for v in store.list_variables()],
        source=store.source(),
    )
