from __future__ import annotations

import json
import math
from typing import Any, Iterable, List

import pandas as pd

from ..recommendations.models import Place, normalize_place_id
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

KNOWN_AMENITIES = frozenset({"restaurant", "cafe", "fast_food"})
UNAVAILABLE = "unavailable"

CURATED_COLUMNS: List[str] = [
    "id",
    "name",
    "area",
    "nearby_areas",
    "group_types",
    "budget",
    "time",
    "moods",
    "category",
    "highlight",
]

_CURATED_RENAMES = {
    "nearbyAreas": "nearby_areas",
    "groupTypes": "group_types",
}


# ── Raw geodata elements ─────────────────────────────────────────────────


def _coordinate(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _categorize(tags: dict[str, Any]) -> str:
    amenity = tags.get("amenity")
    if amenity in KNOWN_AMENITIES:
        return amenity
    if tags.get("leisure"):
        return "leisure"
    if tags.get("tourism"):
        return "tourism"
    return "other"


def _popular_items(tags: dict[str, Any]) -> list[str]:
    cuisine = tags.get("cuisine") or ""
    return [item.strip() for item in str(cuisine).split(";") if item.strip()]


def clean_place_elements(elements: Iterable[dict[str, Any]]) -> list[Place]:
    """
    Turn raw Overpass elements into ``Place`` records.

    Elements without a name tag or without usable coordinates are skipped.
    """
    places: list[Place] = []
    for element in elements:
        tags = element.get("tags") or {}
        name = tags.get("name")
        lat = _coordinate(element.get("lat"))
        lng = _coordinate(element.get("lon"))
        if not name or lat is None or lng is None or element.get("id") is None:
            continue

        places.append(Place(
            id=normalize_place_id(element["id"]),
            name=name,
            category=_categorize(tags),
            lat=lat,
            lng=lng,
            opening_hours=tags.get("opening_hours") or UNAVAILABLE,
            popular_items=_popular_items(tags),
        ))
    return places


# ── Curated static dataset ───────────────────────────────────────────────


def load_curated_places(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> pd.DataFrame:
    """
    Read the curated dataset and add lowercase helper columns for area matching.
    """
    with config.curated_path.open(encoding="utf-8") as fh:
        records = json.load(fh)

    df = pd.DataFrame(records).rename(columns=_CURATED_RENAMES)
    missing = [c for c in CURATED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Curated dataset is missing columns: {missing}")

    df = df[CURATED_COLUMNS].copy()
    df["area_lower"] = df["area"].fillna("").str.strip().str.lower()
    df["nearby_areas"] = df["nearby_areas"].apply(
        lambda areas: areas if isinstance(areas, list) else []
    )
    df["nearby_areas_lower"] = df["nearby_areas"].apply(
        lambda areas: frozenset(a.strip().lower() for a in areas)
    )
    return df
