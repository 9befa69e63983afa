from __future__ import annotations

import pytest

from backend.recommendations.retrieval import rank_places
from backend.recommendations.session import SessionStore
from backend.tests.factories import ORIGIN, place


def test_places_beyond_max_distance_are_absent():
    candidates = [place("cafe", 0.5, "near"), place("cafe", 2.01, "far")]
    ranked = rank_places(candidates, ORIGIN, "friends", 2.0, "walk")
    assert [p.id for p in ranked] == ["near"]


def test_output_sorted_descending_by_score():
    candidates = [
        place("restaurant", 1.5, "a"),
        place("cafe", 0.4, "b"),
        place("tourism", 0.1, "c"),
        place("cafe", 1.0, "d"),
    ]
    ranked = rank_places(candidates, ORIGIN, "friends", 2.0, "car")
    scores = [p.score for p in ranked]
    assert scores == sorted(scores, reverse=True)
    assert ranked[0].id == "b"


def test_truncates_to_top_five_and_assigns_ranks():
    candidates = [place("cafe", 0.1 * i, str(i)) for i in range(1, 9)]
    ranked = rank_places(candidates, ORIGIN, "solo", 2.0, "walk")
    assert len(ranked) == 5
    assert [p.rank for p in ranked] == [1, 2, 3, 4, 5]
    assert [p.id for p in ranked] == ["1", "2", "3", "4", "5"]


def test_ties_keep_input_order():
    candidates = [place("cafe", 0.5, "first"), place("cafe", 0.5, "second"), place("cafe", 0.5, "third")]
    ranked = rank_places(candidates, ORIGIN, "friends", 2.0)
    assert [p.id for p in ranked] == ["first", "second", "third"]


def test_scored_fields():
    ranked = rank_places([place("cafe", 0.5)], ORIGIN, "friends", 2.0, "walk")
    top = ranked[0]
    assert top.distance_km == 0.5
    assert top.eta_minutes == 6
    assert top.score == 0.85
    assert top.match_percentage == 85
    assert top.reason == "Good for friends"


def test_eta_omitted_without_transport():
    ranked = rank_places([place("cafe", 0.5)], ORIGIN, "friends", 2.0)
    assert ranked[0].eta_minutes is None


def test_unsuitable_category_still_ranked():
    ranked = rank_places([place("restaurant", 0.5)], ORIGIN, "solo", 2.0)
    assert ranked[0].score == pytest.approx(0.6 * 0.75 + 0.4 * 0.4)
    assert ranked[0].reason == "Balanced nearby option"


def test_rejected_ids_are_excluded():
    session = SessionStore()
    session.reject(2)
    candidates = [place("cafe", 0.5, "1"), place("cafe", 0.6, "2")]
    ranked = rank_places(candidates, ORIGIN, "friends", 2.0, session=session)
    assert [p.id for p in ranked] == ["1"]


@pytest.mark.parametrize("budget,expected", [
    ("low", {"fast_food"}),
    ("medium", {"cafe", "fast_food"}),
    ("high", {"restaurant", "cafe", "leisure"}),
])
def test_budget_tier_filters_categories(budget, expected):
    categories = ["restaurant", "cafe", "fast_food", "leisure", "tourism", "other"]
    candidates = [place(c, 0.5, c) for c in categories]
    ranked = rank_places(candidates, ORIGIN, "friends", 2.0, budget=budget)
    assert {p.category for p in ranked} == expected


def test_empty_candidates():
    assert rank_places([], ORIGIN, "friends", 2.0, "car") == []
