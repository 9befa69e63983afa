from __future__ import annotations

import pandas as pd

from ..data_ingestion.config import DEFAULT_INGESTION_CONFIG
from ..data_ingestion.ingest import load_curated_places

_df: pd.DataFrame | None = None


def get_dataframe() -> pd.DataFrame:
    """Return the in-memory curated places DataFrame, loading it on first call."""
    global _df
    if _df is None:
        _df = load_curated_places(DEFAULT_INGESTION_CONFIG)
    return _df


def get_areas() -> list[str]:
    df = get_dataframe()
    areas: set[str] = set(df["area"].dropna())
    for nearby in df["nearby_areas"]:
        areas.update(nearby if isinstance(nearby, list) else [])
    return sorted(areas)
