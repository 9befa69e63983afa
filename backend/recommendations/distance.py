from __future__ import annotations

import math
from typing import Mapping

from .config import DEFAULT_SCORING_CONFIG

EARTH_RADIUS_KM = 6371.0


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres between two points given in degrees."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def eta_minutes(
    distance: float,
    mode: str | None,
    speeds: Mapping[str, float] = DEFAULT_SCORING_CONFIG.transport_speeds,
    default_speed: float = DEFAULT_SCORING_CONFIG.default_speed,
) -> int:
    """
    Estimate travel time in whole minutes.

    ``mode`` must match a key of ``speeds`` exactly (case-sensitive); anything
    else, including ``None``, travels at ``default_speed``.
    """
    speed = speeds.get(mode, default_speed)
    return math.floor(distance / speed * 60 + 0.5)
