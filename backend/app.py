from __future__ import annotations

import logging
import os

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .analytics.aggregator import compute_analytics
from .analytics.store import REJECT, get_events, record_event
from .geodata.client import GeodataClient, get_geodata_client
from .geodata.exceptions import GeodataError
from .recommendations.config import DEFAULT_SCORING_CONFIG
from .recommendations.curated import rank_curated
from .recommendations.data_store import get_areas
from .recommendations.models import (
    BudgetTier,
    CuratedRequest,
    CuratedResponse,
    PlacesRequest,
    PlacesResponse,
    RejectRequest,
    RejectResponse,
    TimeBudget,
)
from .recommendations.retrieval import get_recommendations
from .recommendations.session import SessionStore, get_session_store

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong"

app = FastAPI(title="Hangout Recommendation API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error handling ───────────────────────────────────────────────────────


@app.exception_handler(GeodataError)
async def geodata_error_handler(request: Request, exc: GeodataError) -> JSONResponse:
    logger.warning("Upstream geodata failure on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=502, content={"detail": GENERIC_ERROR})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"detail": GENERIC_ERROR})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    config = DEFAULT_SCORING_CONFIG
    return {
        "groups": sorted(config.group_preferences),
        "budgets": list(config.budget_categories),
        "time_budgets": list(config.max_distance_by_time),
        "transport_modes": list(config.transport_speeds),
        "curated_areas": get_areas(),
    }


# ── Live recommendations ─────────────────────────────────────────────────


@app.get("/api/places", response_model=PlacesResponse)
async def places(
    city: str = Query(..., min_length=1),
    area: str = Query(..., min_length=1),
    group: str = "friends",
    time: TimeBudget = "2",
    budget: BudgetTier = "medium",
    transport: str = "car",
    session: SessionStore = Depends(get_session_store),
    geodata: GeodataClient = Depends(get_geodata_client),
) -> PlacesResponse:
    request = PlacesRequest(
        city=city, area=area, group=group, time=time, budget=budget, transport=transport,
    )
    return await get_recommendations(request, session, geodata)


@app.post("/api/reject", response_model=RejectResponse)
def reject(
    body: RejectRequest,
    session: SessionStore = Depends(get_session_store),
) -> RejectResponse:
    if session.reject(body.place_id):
        record_event(REJECT, {"place_id": body.place_id})
    return RejectResponse(success=True, rejected_count=session.rejected_count)


# ── Curated dataset ──────────────────────────────────────────────────────


@app.post("/api/curated", response_model=CuratedResponse)
def curated(body: CuratedRequest) -> CuratedResponse:
    return rank_curated(body)


# ── Diagnostics ──────────────────────────────────────────────────────────


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())


@app.get("/cache/stats")
def cache_stats(session: SessionStore = Depends(get_session_store)) -> dict:
    return session.stats()
