from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class GeodataConfig:
    nominatim_url: str = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org")
    overpass_url: str = os.getenv("OVERPASS_URL", "https://overpass.kumi.systems/api/interpreter")
    user_agent: str = os.getenv("GEODATA_USER_AGENT", "VibeGo-App")
    timeout: float = float(os.getenv("GEODATA_TIMEOUT", "10.0"))
    search_radius_m: int = int(os.getenv("GEODATA_SEARCH_RADIUS_M", "3000"))
    max_attempts: int = 2
    enrichment_concurrency: int = 5


DEFAULT_GEODATA_CONFIG = GeodataConfig()
