from __future__ import annotations

from dataclasses import dataclass, field


def _group_preferences() -> dict[str, frozenset[str]]:
    return {
        "solo": frozenset({"cafe"}),
        "friends": frozenset({"restaurant", "cafe", "fast_food", "leisure"}),
        "couple": frozenset({"cafe", "leisure"}),
        "family": frozenset({"restaurant"}),
        "colleagues": frozenset({"cafe", "restaurant"}),
    }


def _budget_categories() -> dict[str, frozenset[str]]:
    return {
        "low": frozenset({"fast_food"}),
        "medium": frozenset({"cafe", "fast_food"}),
        "high": frozenset({"restaurant", "cafe", "leisure"}),
    }


def _transport_speeds() -> dict[str, float]:
    # km/h
    return {"walk": 5.0, "bike": 15.0, "car": 25.0, "bus": 20.0}


def _max_distance_by_time() -> dict[str, float]:
    # hours available -> hard distance ceiling in km
    return {"1": 1.0, "2": 2.0, "4": 4.0}


@dataclass(frozen=True)
class ScoringWeights:
    time_fit: float = 0.6
    group_suitability: float = 0.4

    def __post_init__(self) -> None:
        if abs(self.time_fit + self.group_suitability - 1.0) > 1e-9:
            raise ValueError("Scoring weights must sum to 1.0")


@dataclass(frozen=True)
class ScoringConfig:
    """
    Lookup tables and constants for the live-query ranking engine.
    """

    group_preferences: dict[str, frozenset[str]] = field(default_factory=_group_preferences)
    budget_categories: dict[str, frozenset[str]] = field(default_factory=_budget_categories)
    transport_speeds: dict[str, float] = field(default_factory=_transport_speeds)
    default_speed: float = 20.0
    max_distance_by_time: dict[str, float] = field(default_factory=_max_distance_by_time)
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    matched_suitability: float = 1.0
    unmatched_suitability: float = 0.4
    top_n: int = 5


DEFAULT_SCORING_CONFIG = ScoringConfig()
