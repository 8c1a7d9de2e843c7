import pytest
from starlette.testclient import TestClient

from geosphere.api.app import app


def test_api_distance_request():
    payload = {"nr": 12, "action": "distance", "lat1": 52.205, "lon1": 0.119, "lat2": 48.857, "lon2": 2.351}
    with TestClient(app) as c:
        resp = c.post("/api/geodesy", json=payload)
    assert resp.status_code == 200
    data = resp.json()
    assert data["nr"] == 12
    assert data["data"]["distance"] == pytest.approx(404_300, abs=100)


def test_api_destination_request_without_action():
    payload = {"nr": 2, "lat": 51.4778, "lon": -0.0015, "distance": 7794, "degree": 300.7}
    with TestClient(app) as c:
        resp = c.post("/api/geodesy", json=payload)
    assert resp.status_code == 200
    point = resp.json()["data"]
    assert point["lat"] == pytest.approx(51.5135, abs=1e-3)
    assert point["lon"] == pytest.approx(-0.0983, abs=1e-3)


def test_api_rejects_incomplete_request():
    with TestClient(app) as c:
        resp = c.post("/api/geodesy", json={"nr": 1, "action": "midpoint", "lat1": 10.0})
    assert resp.status_code == 422


def test_api_format_point():
    with TestClient(app) as c:
        resp = c.get("/api/format", params={"lat": 52.205, "lon": 0.119})
        bad = c.get("/api/format", params={"lat": 52.205, "lon": 0.119, "style": "grads"})
    assert resp.status_code == 200
    assert resp.json()["text"] == "52°12′18″N, 000°07′08″E"
    assert bad.status_code == 400
    assert bad.json()["detail"]["code"] == "VALIDATION_ERROR"


def test_api_health_and_settings():
    with TestClient(app) as c:
        health = c.get("/api/health")
        settings = c.get("/api/settings")
    assert health.json() == {"status": "ok"}
    assert settings.json()["geodesy"]["earth_radius_m"] == 6_371_000
