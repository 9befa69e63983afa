from __future__ import annotations

from dataclasses import dataclass

from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .distance import distance_km
from .models import Place


@dataclass(frozen=True)
class ScoreComponents:
    """Full-precision inputs and output of the weighted score for one place."""

    distance_km: float
    time_fit: float
    group_suitability: float
    score: float


def time_fit(distance: float, max_dist: float) -> float:
    """Linear decay from 1.0 at the user's location to 0.0 at ``max_dist``."""
    return max(0.0, 1.0 - distance / max_dist)


def group_suitability(
    category: str,
    group: str,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    preferred = config.group_preferences.get(group, frozenset())
    if category in preferred:
        return config.matched_suitability
    return config.unmatched_suitability


def score_place(
    place: Place,
    origin: tuple[float, float],
    group: str,
    max_dist: float,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> ScoreComponents | None:
    """
    Score a single candidate against the user's location and group.

    Returns ``None`` when the place lies beyond ``max_dist``; such places are
    dropped rather than scored.
    """
    distance = distance_km(origin[0], origin[1], place.lat, place.lng)
    if distance > max_dist:
        return None

    fit = time_fit(distance, max_dist)
    suitability = group_suitability(place.category, group, config)
    w = config.weights
    score = w.time_fit * fit + w.group_suitability * suitability

    return ScoreComponents(
        distance_km=distance,
        time_fit=fit,
        group_suitability=suitability,
        score=score,
    )
