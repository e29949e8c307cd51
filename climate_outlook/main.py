"""
Climate Outlook — FastAPI app factory with startup data loading.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from climate_outlook.data.store import DataStore
from climate_outlook.api.dependencies import set_store
from climate_outlook.api.router_meta import router as meta_router
from climate_outlook.api.router_analysis import router as analysis_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the configured dataset at startup."""
    from climate_outlook.config import CSV_PATH

    store = DataStore()
    set_store(store)

    if not CSV_PATH:
        print("  CSV_PATH not set — analysis disabled")
    elif store.load(CSV_PATH):
        print(f"\nClimate Outlook ready — {store.row_count():,} rows, "
              f"{len(store.list_variables())} variables\n")
    else:
        print(f"\nClimate Outlook started without data — could not read {CSV_PATH}\n")
    yield


def create_app() -> FastAPI:
    from climate_outlook.config import CORS_ORIGIN

    app = FastAPI(
        title="Climate Outlook API",
        description="Climate-observation subsets, outlook statistics, and timelines",
        version="1.0.0",
        lifespan=lifespan,
    )

    origins = [o.strip() for o in CORS_ORIGIN.split(",") if o.strip()] or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(analysis_router)

    return app


app = create_app()
