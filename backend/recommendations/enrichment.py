from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from ..geodata.exceptions import GeodataError
from .models import ScoredPlace
from .session import SessionStore, address_key

logger = logging.getLogger(__name__)

ADDRESS_UNAVAILABLE = "Address unavailable"


class ReverseGeocoder(Protocol):
    async def reverse_geocode(self, lat: float, lng: float) -> str | None: ...


async def resolve_address(
    place: ScoredPlace,
    session: SessionStore,
    geocoder: ReverseGeocoder,
) -> str:
    """Cached reverse lookup for one place; failures degrade to a placeholder."""
    key = address_key(place.lat, place.lng)
    cached = session.lookup_address(key)
    if cached is not None:
        return cached

    try:
        address = await geocoder.reverse_geocode(place.lat, place.lng)
    except GeodataError:
        logger.warning("Reverse geocoding failed for place %s", place.id, exc_info=True)
        return ADDRESS_UNAVAILABLE

    if not address:
        return ADDRESS_UNAVAILABLE
    session.cache_address(key, address)
    return address


async def enrich_addresses(
    places: list[ScoredPlace],
    session: SessionStore,
    geocoder: ReverseGeocoder,
    concurrency: int = 5,
) -> list[ScoredPlace]:
    """Resolve addresses for all places concurrently, preserving order."""
    semaphore = asyncio.Semaphore(max(1, concurrency))

    async def _one(place: ScoredPlace) -> ScoredPlace:
        async with semaphore:
            address = await resolve_address(place, session, geocoder)
        return place.model_copy(update={"address": address})

    return list(await asyncio.gather(*(_one(p) for p in places)))
