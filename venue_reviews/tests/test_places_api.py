from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from venue_reviews.app import app
from venue_reviews.dependencies import get_now, get_registry
from venue_reviews.ratings.aggregator import pseudonymize
from venue_reviews.venues.registry import VenueRegistry
from venue_reviews.venues.store import InMemoryVenueStore

client = TestClient(app)

_clock = {"now": datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)}


@pytest.fixture(autouse=True)
def _clear_overrides():
    yield
    app.dependency_overrides.clear()


def _reset() -> InMemoryVenueStore:
    store = InMemoryVenueStore()
    registry = VenueRegistry(store)
    _clock["now"] = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_now] = lambda: _clock["now"]
    return store


def _add(name="Hotel Sol", city="Madrid", address="Gran Via 1"):
    return client.post("/api/places/add", json={"name": name, "city": city, "address": address})


def _rate(place_id, ratings, ip="203.0.113.7"):
    return client.post(
        "/api/places/rate",
        json={"id": place_id, "ratings": ratings},
        headers={"X-Forwarded-For": ip},
    )


def _ratings(**slots):
    values = [None] * 13
    for index, score in slots.items():
        values[int(index.lstrip("c"))] = score
    return values


# ── Health ───────────────────────────────────────────────────────────────


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_root_banner():
    resp = client.get("/")
    assert resp.status_code == 200
    assert "running" in resp.text


# ── Add ──────────────────────────────────────────────────────────────────


def test_add_place_creates_then_returns_existing():
    _reset()
    first = _add()
    assert first.status_code == 201
    body = first.json()
    assert body["created"] is True
    assert body["place"]["name"] == "Hotel Sol"
    assert body["place"]["averageRating"] is None
    assert body["place"]["ratings"] == []

    second = _add(name=" HOTEL sol ", city="madrid ", address=" GRAN VIA 1")
    assert second.status_code == 200
    assert second.json()["created"] is False
    assert second.json()["place"]["id"] == body["place"]["id"]


def test_add_place_requires_all_fields():
    _reset()
    resp = client.post("/api/places/add", json={"name": "Hotel Sol", "city": "Madrid"})
    assert resp.status_code == 400
    assert "error" in resp.json()

    resp = _add(address="   ")
    assert resp.status_code == 400


# ── Rate ─────────────────────────────────────────────────────────────────


def test_rate_place_updates_weighted_average():
    store = _reset()
    place_id = _add().json()["place"]["id"]

    resp = _rate(place_id, _ratings(c0=5, c10=1))
    assert resp.status_code == 200
    place = resp.json()["place"]
    assert place["averageRating"] == 2.33
    assert place["ratings"][0]["submitterKey"] == pseudonymize("203.0.113.7")
    assert store.snapshot[0]["averageRating"] == 2.33


def test_rate_unknown_place():
    _reset()
    resp = _rate("does-not-exist", _ratings(c0=5))
    assert resp.status_code == 404


def test_rate_with_numeric_id_is_not_found():
    _reset()
    _add()
    resp = _rate(12345, _ratings(c0=5))
    assert resp.status_code == 404
    assert resp.json() == {"error": "Place not found"}


def test_rate_rejects_bad_values():
    _reset()
    place_id = _add().json()["place"]["id"]

    for bad in (_ratings(c0=6), _ratings(c0=0), _ratings(c0="great"), [5] * 12, "5"):
        resp = _rate(place_id, bad)
        assert resp.status_code == 400

    detail = client.get(f"/api/places/{place_id}").json()
    assert detail["totalVotes"] == 0


def test_rate_twice_is_rate_limited_until_cooldown_passes():
    _reset()
    place_id = _add().json()["place"]["id"]

    assert _rate(place_id, _ratings(c0=5)).status_code == 200
    resp = _rate(place_id, _ratings(c0=1))
    assert resp.status_code == 403
    assert "error" in resp.json()

    # A different address is a different submitter
    assert _rate(place_id, _ratings(c0=1), ip="198.51.100.9").status_code == 200

    _clock["now"] = datetime(2024, 9, 2, tzinfo=timezone.utc)
    resp = _rate(place_id, _ratings(c0=3))
    assert resp.status_code == 200
    assert len(resp.json()["place"]["ratings"]) == 3


def test_all_omitted_rating_is_accepted():
    _reset()
    place_id = _add().json()["place"]["id"]
    resp = _rate(place_id, _ratings())
    assert resp.status_code == 200
    assert resp.json()["place"]["averageRating"] is None


# ── Ranking ──────────────────────────────────────────────────────────────


def test_ranking_with_three_places():
    _reset()
    scores = {"Alpha": 4, "Beta": 2, "Gamma": 5}
    for name, score in scores.items():
        place_id = _add(name=name).json()["place"]["id"]
        _rate(place_id, _ratings(c3=score))

    resp = client.get("/api/places/ranking")
    assert resp.status_code == 200
    body = resp.json()
    assert [p["name"] for p in body["topPlaces"]] == ["Gamma", "Alpha", "Beta"]
    assert [p["name"] for p in body["bottomPlaces"]] == ["Beta", "Alpha", "Gamma"]


def test_ranking_empty():
    _reset()
    assert client.get("/api/places/ranking").json() == {"topPlaces": [], "bottomPlaces": []}


# ── Detail ───────────────────────────────────────────────────────────────


def test_place_detail_breakdown():
    _reset()
    place_id = _add().json()["place"]["id"]
    _rate(place_id, _ratings(c0=4, c11=1), ip="10.0.0.1")
    _rate(place_id, _ratings(c0=2, c11=5), ip="10.0.0.2")

    resp = client.get(f"/api/places/{place_id}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["totalVotes"] == 2
    breakdown = body["averagesByCategory"]
    assert len(breakdown) == 13
    assert breakdown[0] == {"category": "HR", "average": 3.0}
    assert breakdown[11] == {"category": "ANIMAL ABUSE", "average": 3.0}
    assert breakdown[5] == {"category": "LP", "average": None}


def test_place_detail_without_votes():
    _reset()
    place_id = _add().json()["place"]["id"]
    body = client.get(f"/api/places/{place_id}").json()
    assert body["totalVotes"] == 0
    assert body["averagesByCategory"] == []


def test_place_detail_unknown():
    _reset()
    resp = client.get("/api/places/nope")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Place not found"}
