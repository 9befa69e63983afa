"""
Scoring against the curated static dataset.

Each place earns points from five independent factors:

* area      15 for the user's own area, 8 for one of the place's nearby areas
* group     30 when the place suits the group type
* budget    25 on an exact budget match
* time      25 when the time window is offered
* mood      10 for one shared mood, 20 for two or more

The raw factor points are kept in a breakdown for the explanation. Their
maxima add up to 115, so the reported score is capped at 100.
"""
from __future__ import annotations

import pandas as pd

from .data_store import get_dataframe
from .models import CuratedBreakdown, CuratedRequest, CuratedResponse, CuratedResult

AREA_EXACT_POINTS = 15
AREA_NEARBY_POINTS = 8
GROUP_POINTS = 30
BUDGET_POINTS = 25
TIME_POINTS = 25
MOOD_SINGLE_POINTS = 10
MOOD_MULTI_POINTS = 20
MAX_SCORE = 100

MIN_ACCEPTABLE_SCORE = 40
TOP_N = 3

LOW_CONFIDENCE_MESSAGE = "No perfect matches found. Showing closest possible options."
NO_MATCH_EXPLANATION = "Closest available option based on limited matching factors"


def _area_points(row: pd.Series, area: str) -> int:
    wanted = area.strip().lower()
    if row["area_lower"] == wanted:
        return AREA_EXACT_POINTS
    if wanted in row["nearby_areas_lower"]:
        return AREA_NEARBY_POINTS
    return 0


def _mood_points(place_moods: list[str], user_moods: list[str]) -> int:
    overlap = len(set(place_moods) & set(user_moods))
    if overlap >= 2:
        return MOOD_MULTI_POINTS
    if overlap == 1:
        return MOOD_SINGLE_POINTS
    return 0


def score_breakdown(row: pd.Series, request: CuratedRequest) -> CuratedBreakdown:
    return CuratedBreakdown(
        area=_area_points(row, request.area),
        group=GROUP_POINTS if request.group_type in row["group_types"] else 0,
        budget=BUDGET_POINTS if row["budget"] == request.budget else 0,
        time=TIME_POINTS if request.time in row["time"] else 0,
        mood=_mood_points(row["moods"], request.moods),
    )


def generate_explanation(breakdown: CuratedBreakdown) -> str:
    reasons: list[str] = []
    if breakdown.area == AREA_EXACT_POINTS:
        reasons.append("very close to your selected area")
    elif breakdown.area == AREA_NEARBY_POINTS:
        reasons.append("reasonably close to your selected area")
    if breakdown.group > 0:
        reasons.append("suitable for your group type")
    if breakdown.budget > 0:
        reasons.append("fits your budget range")
    if breakdown.time > 0:
        reasons.append("matches your available time")
    if breakdown.mood > 0:
        reasons.append("matches some of your mood preferences")

    if not reasons:
        return NO_MATCH_EXPLANATION
    return ", ".join(reasons)


def rank_curated(request: CuratedRequest, df: pd.DataFrame | None = None) -> CuratedResponse:
    """Score every curated place and return the top three, best first."""
    if df is None:
        df = get_dataframe()
    if df.empty:
        return CuratedResponse(results=[], low_confidence=True, message=LOW_CONFIDENCE_MESSAGE)

    breakdowns = {index: score_breakdown(row, request) for index, row in df.iterrows()}
    scored = df.copy()
    scored["_total"] = pd.Series({index: b.total for index, b in breakdowns.items()})
    # Order on the raw total; the cap applies only to the reported score.
    top = scored.sort_values("_total", ascending=False, kind="stable").head(TOP_N)

    results: list[CuratedResult] = []
    for rank, (index, row) in enumerate(top.iterrows(), start=1):
        breakdown = breakdowns[index]
        results.append(CuratedResult(
            id=int(row["id"]),
            name=row["name"],
            area=row["area"],
            category=row["category"],
            highlight=row["highlight"],
            score=min(breakdown.total, MAX_SCORE),
            breakdown=breakdown,
            explanation=generate_explanation(breakdown),
            rank=rank,
        ))

    low_confidence = results[0].score < MIN_ACCEPTABLE_SCORE
    return CuratedResponse(
        results=results,
        low_confidence=low_confidence,
        message=LOW_CONFIDENCE_MESSAGE if low_confidence else None,
    )
