from __future__ import annotations

from fastapi.testclient import TestClient

from backend.app import app
from backend.geodata.exceptions import GeodataSourceError
from backend.recommendations.convergence import DOMINANT_WINNER_MESSAGE, REJECTION_FATIGUE_MESSAGE

PARAMS = {
    "city": "Chennai",
    "area": "Besant Nagar",
    "group": "friends",
    "time": "2",
    "budget": "medium",
    "transport": "walk",
}


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_places_ranked_and_filtered(client, fake_geodata):
    resp = client.get("/api/places", params=PARAMS)
    assert resp.status_code == 200
    body = resp.json()

    assert fake_geodata.geocode_queries == ["Besant Nagar, Chennai"]
    # Unnamed node is dropped during cleaning; the restaurant falls outside the
    # medium budget and the far cafe outside the 2 km ceiling.
    assert body["total_candidates"] == 4
    assert [r["name"] for r in body["results"]] == ["Close Cafe", "Burger Spot"]

    top, second = body["results"]
    assert top["rank"] == 1
    assert top["id"] == "1"
    assert top["match_percentage"] == 94
    assert top["reason"].startswith("Extremely close")
    assert top["eta_minutes"] == 2
    assert top["popular_items"] == ["coffee", "cake"]
    assert top["address"].endswith("Chennai")
    assert second["match_percentage"] == 70
    assert second["reason"] == "Good for friends"


def test_places_dominant_winner_converges(client):
    body = client.get("/api/places", params=PARAMS).json()
    assert body["converged"] is True
    assert body["message"] == DOMINANT_WINNER_MESSAGE


def test_rejected_place_never_returned(client):
    resp = client.post("/api/reject", json={"placeId": 1})
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "rejected_count": 1}

    for _ in range(2):
        body = client.get("/api/places", params=PARAMS).json()
        assert "1" not in [r["id"] for r in body["results"]]
    assert body["converged"] is False


def test_reject_is_idempotent_across_id_types(client):
    client.post("/api/reject", json={"placeId": "2"})
    resp = client.post("/api/reject", json={"placeId": 2})
    assert resp.json()["rejected_count"] == 1


def test_rejection_fatigue_converges(client):
    for place_id in ("1", "998", "999"):
        client.post("/api/reject", json={"placeId": place_id})
    body = client.get("/api/places", params=PARAMS).json()
    assert [r["name"] for r in body["results"]] == ["Burger Spot"]
    assert body["converged"] is True
    assert body["message"] == REJECTION_FATIGUE_MESSAGE


def test_reject_requires_place_id(client):
    assert client.post("/api/reject", json={}).status_code == 422
    assert client.post("/api/reject", json={"placeId": "  "}).status_code == 422


def test_places_requires_location(client, fake_geodata):
    resp = client.get("/api/places", params={"city": "Chennai"})
    assert resp.status_code == 422
    assert fake_geodata.geocode_queries == []


def test_places_rejects_unknown_time_budget(client):
    resp = client.get("/api/places", params={**PARAMS, "time": "3"})
    assert resp.status_code == 422


def test_places_rejects_unknown_budget(client):
    resp = client.get("/api/places", params={**PARAMS, "budget": "lavish"})
    assert resp.status_code == 422


def test_unknown_transport_falls_back_to_default_speed(client):
    body = client.get("/api/places", params={**PARAMS, "transport": "rocket"}).json()
    burger = body["results"][1]
    assert burger["eta_minutes"] == 3


def test_geocode_miss_returns_empty(client, fake_geodata):
    fake_geodata.coords = None
    resp = client.get("/api/places", params=PARAMS)
    assert resp.status_code == 200
    assert resp.json() == {"results": [], "total_candidates": 0, "converged": False, "message": None}


def test_no_surviving_candidates_returns_empty(client, fake_geodata):
    fake_geodata.elements = []
    body = client.get("/api/places", params=PARAMS).json()
    assert body["results"] == []
    assert body["converged"] is False


def test_reverse_geocode_failure_uses_placeholder(client, fake_geodata):
    fake_geodata.fail_reverse = True
    body = client.get("/api/places", params=PARAMS).json()
    assert [r["address"] for r in body["results"]] == ["Address unavailable"] * 2


def test_addresses_cached_between_requests(client, fake_geodata):
    client.get("/api/places", params=PARAMS)
    client.get("/api/places", params=PARAMS)
    assert fake_geodata.reverse_calls == 2

    stats = client.get("/cache/stats").json()
    assert stats["size"] == 2
    assert stats["hits"] == 2


def test_upstream_failure_is_generic_error(client, fake_geodata):
    async def broken(lat, lng, radius_m=None):
        raise GeodataSourceError("overpass down")

    fake_geodata.fetch_nearby_elements = broken
    resp = client.get("/api/places", params=PARAMS)
    assert resp.status_code == 502
    assert resp.json() == {"detail": "Something went wrong"}


def test_unexpected_error_is_generic_error(client, fake_geodata):
    async def broken(query):
        raise RuntimeError("boom")

    fake_geodata.geocode = broken
    resp = TestClient(app, raise_server_exceptions=False).get("/api/places", params=PARAMS)
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Something went wrong"}


def test_analytics_tracks_searches_and_rejections(client):
    client.get("/api/places", params=PARAMS)
    client.post("/api/reject", json={"placeId": "1"})
    client.post("/api/reject", json={"placeId": "1"})
    client.get("/api/places", params={**PARAMS, "group": "family"})

    body = client.get("/analytics").json()
    assert body["total_searches"] == 2
    assert body["total_rejections"] == 1
    assert body["group_usage"] == {"friends": 1, "family": 1}
    assert body["top_areas"] == [{"name": "Besant Nagar", "count": 2}]
    assert body["converged_rate"] == 50.0


def test_metadata(client):
    body = client.get("/metadata").json()
    assert "friends" in body["groups"]
    assert body["budgets"] == ["low", "medium", "high"]
    assert body["time_budgets"] == ["1", "2", "4"]
    assert body["transport_modes"] == ["walk", "bike", "car", "bus"]
    assert "Besant Nagar" in body["curated_areas"]


def test_curated_endpoint(client):
    resp = client.post("/api/curated", json={
        "area": "Besant Nagar",
        "group_type": "Friends",
        "budget": "Low",
        "time": "1-2",
        "moods": ["Chill", "Nature"],
    })
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["results"]) == 3
    assert body["results"][0]["name"] == "Elliot's Beach"
    assert body["results"][0]["score"] == 100
    assert body["low_confidence"] is False


def test_curated_endpoint_validates_enums(client):
    resp = client.post("/api/curated", json={
        "area": "Besant Nagar",
        "group_type": "Strangers",
        "budget": "Low",
        "time": "1-2",
    })
    assert resp.status_code == 422
