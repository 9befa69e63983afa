from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

PlaceCategory = Literal["restaurant", "cafe", "fast_food", "leisure", "tourism", "other"]
TimeBudget = Literal["1", "2", "4"]
BudgetTier = Literal["low", "medium", "high"]

CuratedGroupType = Literal["Friends", "Family", "Office"]
CuratedBudget = Literal["Low", "Medium", "High"]
CuratedTimeWindow = Literal["1-2", "2-4", "Half"]
Mood = Literal["Chill", "Nature", "Fun", "Food"]


def normalize_place_id(value: object) -> str:
    """Ids arrive as numbers from the geodata source and as text from clients."""
    return str(value).strip()


# ── Live-query variant ───────────────────────────────────────────────────


class Place(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: PlaceCategory
    lat: float
    lng: float
    opening_hours: str = "unavailable"
    popular_items: list[str] = Field(default_factory=list)


class ScoredPlace(Place):
    distance_km: float
    eta_minutes: int | None = None
    score: float
    match_percentage: int
    reason: str
    rank: int = Field(..., ge=1)
    address: str | None = None


class PlacesRequest(BaseModel):
    city: str = Field(..., min_length=1)
    area: str = Field(..., min_length=1)
    group: str = "friends"
    time: TimeBudget = "2"
    budget: BudgetTier = "medium"
    transport: str = "car"

    @property
    def geocode_query(self) -> str:
        return f"{self.area}, {self.city}"


class PlacesResponse(BaseModel):
    results: list[ScoredPlace]
    total_candidates: int
    converged: bool = False
    message: str | None = None


class RejectRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    place_id: str = Field(..., alias="placeId", min_length=1)

    @field_validator("place_id", mode="before")
    @classmethod
    def _normalize(cls, value: object) -> object:
        if isinstance(value, (str, int)) and not isinstance(value, bool):
            return normalize_place_id(value)
        return value


class RejectResponse(BaseModel):
    success: bool
    rejected_count: int


# ── Static-dataset variant ───────────────────────────────────────────────


class CuratedRequest(BaseModel):
    area: str = Field(..., min_length=1)
    group_type: CuratedGroupType
    budget: CuratedBudget
    time: CuratedTimeWindow
    moods: list[Mood] = Field(default_factory=list)


class CuratedBreakdown(BaseModel):
    area: int = 0
    group: int = 0
    budget: int = 0
    time: int = 0
    mood: int = 0

    @property
    def total(self) -> int:
        return self.area + self.group + self.budget + self.time + self.mood


class CuratedResult(BaseModel):
    id: int
    name: str
    area: str
    category: str
    highlight: str
    score: int = Field(..., ge=0, le=100)
    breakdown: CuratedBreakdown
    explanation: str
    rank: int = Field(..., ge=1)


class CuratedResponse(BaseModel):
    results: list[CuratedResult]
    low_confidence: bool
    message: str | None = None
