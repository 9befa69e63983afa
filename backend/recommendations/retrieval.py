from __future__ import annotations

import logging
import time
from typing import Iterable

from ..analytics.store import SEARCH, record_event
from ..data_ingestion.ingest import clean_place_elements
from ..geodata.client import GeodataClient
from ..geodata.config import DEFAULT_GEODATA_CONFIG, GeodataConfig
from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .convergence import check_convergence
from .distance import eta_minutes
from .enrichment import enrich_addresses
from .models import Place, PlacesRequest, PlacesResponse, ScoredPlace
from .reasons import generate_reason
from .scoring import ScoreComponents, score_place
from .session import SessionStore

logger = logging.getLogger(__name__)


def rank_places(
    candidates: Iterable[Place],
    origin: tuple[float, float],
    group: str,
    max_dist: float,
    transport: str | None = None,
    *,
    budget: str | None = None,
    session: SessionStore | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[ScoredPlace]:
    """
    Filter, score and order candidates, returning at most ``config.top_n`` places.

    Rejected ids and categories outside the budget tier are removed before
    scoring; places beyond ``max_dist`` are dropped by the scorer. Ties keep
    their input order.
    """
    allowed = config.budget_categories.get(budget, frozenset()) if budget is not None else None

    scored: list[tuple[Place, ScoreComponents]] = []
    for place in candidates:
        if session is not None and session.is_rejected(place.id):
            continue
        if allowed is not None and place.category not in allowed:
            continue
        components = score_place(place, origin, group, max_dist, config)
        if components is None:
            continue
        scored.append((place, components))

    scored.sort(key=lambda item: item[1].score, reverse=True)

    results: list[ScoredPlace] = []
    for rank, (place, components) in enumerate(scored[: config.top_n], start=1):
        score = round(components.score, 2)
        eta = None
        if transport is not None:
            eta = eta_minutes(
                components.distance_km, transport, config.transport_speeds, config.default_speed,
            )
        results.append(ScoredPlace(
            **place.model_dump(),
            distance_km=round(components.distance_km, 2),
            eta_minutes=eta,
            score=score,
            match_percentage=int(round(score * 100)),
            reason=generate_reason(components, group),
            rank=rank,
        ))
    return results


async def get_recommendations(
    request: PlacesRequest,
    session: SessionStore,
    geodata: GeodataClient,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    geodata_config: GeodataConfig = DEFAULT_GEODATA_CONFIG,
) -> PlacesResponse:
    start_time = time.time()

    coords = await geodata.geocode(request.geocode_query)
    if coords is None:
        logger.info("No geocoding match for %r", request.geocode_query)
        response = PlacesResponse(results=[], total_candidates=0)
        _record_search(request, response, start_time)
        return response

    elements = await geodata.fetch_nearby_elements(
        coords[0], coords[1], geodata_config.search_radius_m,
    )
    candidates = clean_place_elements(elements)

    ranked = rank_places(
        candidates,
        coords,
        request.group,
        config.max_distance_by_time[request.time],
        request.transport,
        budget=request.budget,
        session=session,
        config=config,
    )
    ranked = await enrich_addresses(
        ranked, session, geodata, geodata_config.enrichment_concurrency,
    )

    verdict = check_convergence(ranked, session.rejected_count)
    response = PlacesResponse(
        results=ranked,
        total_candidates=len(candidates),
        converged=verdict.converged,
        message=verdict.message,
    )

    logger.info(
        "Ranked %d of %d candidates near %r",
        len(ranked), len(candidates), request.geocode_query,
    )
    _record_search(request, response, start_time)
    return response


def _record_search(request: PlacesRequest, response: PlacesResponse, start_time: float) -> None:
    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event(SEARCH, {
        "city": request.city,
        "area": request.area,
        "group": request.group,
        "budget": request.budget,
        "time": request.time,
        "transport": request.transport,
        "total_candidates": response.total_candidates,
        "results_returned": len(response.results),
        "converged": response.converged,
        "response_time_ms": elapsed_ms,
    })
