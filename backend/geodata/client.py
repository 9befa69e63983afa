from __future__ import annotations

import logging
from typing import Any

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from .config import DEFAULT_GEODATA_CONFIG, GeodataConfig
from .exceptions import GeocodingError, GeodataSourceError

logger = logging.getLogger(__name__)


def build_overpass_query(lat: float, lng: float, radius_m: int) -> str:
    around = f"(around:{radius_m},{lat},{lng})"
    return (
        "[out:json];\n"
        "(\n"
        f'  node["amenity"~"restaurant|cafe|fast_food"]{around};\n'
        f'  node["leisure"]{around};\n'
        ");\n"
        "out body;\n"
    )


class GeodataClient:
    """
    Async client for Nominatim and Overpass.

    A fresh ``httpx.AsyncClient`` is opened per call; ``transport`` can be
    supplied to route requests somewhere other than the network.
    """

    def __init__(
        self,
        config: GeodataConfig = DEFAULT_GEODATA_CONFIG,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.config.max_attempts),
            wait=wait_exponential(multiplier=0.5, max=4),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        ):
            with attempt:
                async with httpx.AsyncClient(
                    timeout=self.config.timeout,
                    transport=self._transport,
                    headers={"User-Agent": self.config.user_agent},
                ) as client:
                    response = await client.request(method, url, **kwargs)
                    response.raise_for_status()
                    return response

    async def geocode(self, query: str) -> tuple[float, float] | None:
        """Return ``(lat, lng)`` of the best match for ``query``, or None if nothing matched."""
        try:
            response = await self._request(
                "GET",
                f"{self.config.nominatim_url}/search",
                params={"format": "json", "limit": 1, "q": query},
            )
            results = response.json()
            if not results:
                return None
            return float(results[0]["lat"]), float(results[0]["lon"])
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Geocoding failed for %r", query, exc_info=True)
            raise GeocodingError(f"Geocoding failed for {query!r}") from exc

    async def reverse_geocode(self, lat: float, lng: float) -> str | None:
        try:
            response = await self._request(
                "GET",
                f"{self.config.nominatim_url}/reverse",
                params={"format": "json", "lat": lat, "lon": lng},
            )
            return response.json().get("display_name") or None
        except (httpx.HTTPError, ValueError, AttributeError) as exc:
            raise GeocodingError(f"Reverse geocoding failed for {lat},{lng}") from exc

    async def fetch_nearby_elements(
        self, lat: float, lng: float, radius_m: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return raw Overpass elements around the point."""
        radius = radius_m if radius_m is not None else self.config.search_radius_m
        query = build_overpass_query(lat, lng, radius)
        try:
            response = await self._request(
                "POST",
                self.config.overpass_url,
                content=query,
                headers={"Content-Type": "text/plain"},
            )
            elements = response.json().get("elements", [])
        except (httpx.HTTPError, ValueError, AttributeError) as exc:
            logger.warning("Overpass query failed around %s,%s", lat, lng, exc_info=True)
            raise GeodataSourceError("Overpass query failed") from exc

        logger.info("Overpass returned %d elements around %s,%s", len(elements), lat, lng)
        return elements


geodata_client = GeodataClient()


def get_geodata_client() -> GeodataClient:
    """FastAPI dependency returning the shared client."""
    return geodata_client
