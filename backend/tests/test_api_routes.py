"""
Tests for the DividerForge HTTP API.

Validates:
1. Series listing and divider search, including error mapping
2. Ohm's law calculator
3. History storage round trip
4. Rate limiting
"""

import json

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.middleware.rate_limit import RateLimitMiddleware

SEARCH = {
    "v_in": 12.0,
    "v_out_required": 5.0,
    "tolerance_percent": 1.0,
    "series": "E12",
    "min_resistance": 1000,
    "max_resistance": 100_000,
    "max_results": 20,
}


class TestHealth:

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestDividerRoutes:
    """Test /api/divider endpoints."""

    def test_list_series(self, client):
        response = client.get("/api/divider/series")
        assert response.status_code == 200
        series = {s["name"]: s for s in response.json()["series"]}
        assert set(series) == {"E6", "E12", "E24", "E48", "E96", "E192"}
        assert series["E24"]["values_per_decade"] == 24
        assert series["E6"]["base_values"] == [1.0, 1.5, 2.2, 3.3, 4.7, 6.8]

    def test_search_returns_ranked_results(self, client):
        response = client.post("/api/divider/search", json=SEARCH)
        assert response.status_code == 200
        data = response.json()
        assert 0 < data["count"] <= 20
        assert data["count"] == len(data["results"])
        errors = [r["error_percent"] for r in data["results"]]
        assert errors == sorted(errors)
        assert all(e <= 1.0 for e in errors)
        first = data["results"][0]
        assert first["summary"].startswith("Vout=")
        assert first["resistor_count"] == len(first["upper_arm"]) + len(first["lower_arm"])
        assert data["history_id"] is None

    def test_output_not_below_input(self, client):
        response = client.post("/api/divider/search", json={**SEARCH, "v_out_required": 12.0})
        assert response.status_code == 422
        assert "lower than input" in response.json()["detail"]

    def test_request_validation(self, client):
        response = client.post("/api/divider/search", json={**SEARCH, "v_in": -5})
        assert response.status_code == 422

    def test_unknown_series_rejected(self, client):
        response = client.post("/api/divider/search", json={**SEARCH, "series": "E7"})
        assert response.status_code == 422

    def test_series_name_any_case(self, client):
        upper = client.post("/api/divider/search", json=SEARCH).json()
        response = client.post("/api/divider/search", json={**SEARCH, "series": " e12"})
        assert response.status_code == 200
        assert response.json() == upper

    def test_infinite_bound_rejected(self, client):
        body = json.dumps({**SEARCH, "max_resistance": float("inf")})
        assert "Infinity" in body
        response = client.post("/api/divider/search", content=body,
                               headers={"Content-Type": "application/json"})
        assert response.status_code == 422

    def test_empty_range_is_not_an_error(self, client):
        response = client.post("/api/divider/search",
                               json={**SEARCH, "min_resistance": 50_000, "max_resistance": 1000})
        assert response.status_code == 200
        assert response.json() == {"results": [], "count": 0, "history_id": None}

    def test_save_best(self, client):
        response = client.post("/api/divider/search", json={**SEARCH, "save_best": True})
        assert response.status_code == 200
        data = response.json()
        history_id = data["history_id"]
        assert history_id

        history = client.get("/api/history", params={"calculation_type": "voltage_divider"}).json()
        saved = [e for e in history["entries"] if e["id"] == history_id]
        assert len(saved) == 1
        assert saved[0]["result"] == data["results"][0]["summary"]
        assert saved[0]["input_parameters"] == "Vin=12.00 V, Vout_required=5.0000 V"


class TestOhmRoute:
    """Test /api/ohm/calculate."""

    def test_solve_current(self, client):
        response = client.post("/api/ohm/calculate",
                               json={"solve_for": "current", "voltage": 12.0, "resistance": 1000.0})
        assert response.status_code == 200
        data = response.json()
        assert data["current"] == pytest.approx(0.012)
        assert data["power"] == pytest.approx(0.144)
        assert data["result_summary"] == "I = 12.000 mA"

    def test_solve_resistance_zero_current(self, client):
        response = client.post("/api/ohm/calculate",
                               json={"solve_for": "resistance", "voltage": 5.0, "current": 0.0})
        assert response.status_code == 422

    def test_missing_input(self, client):
        response = client.post("/api/ohm/calculate", json={"solve_for": "voltage", "current": 0.5})
        assert response.status_code == 422
        assert "resistance" in response.json()["detail"]

    def test_save(self, client):
        response = client.post("/api/ohm/calculate",
                               json={"solve_for": "voltage", "current": 0.002, "resistance": 4700.0,
                                     "save": True})
        assert response.status_code == 200
        assert response.json()["history_id"]


class TestHistoryRoutes:
    """Test /api/history endpoints."""

    def test_create_list_delete(self, client):
        body = {
            "calculation_type": "voltage_divider",
            "input_parameters": "Vin=12.00 V, Vout_required=5.0000 V",
            "result": "Vout=5.0323 V (0.645%), R_upper=18kΩ, R_lower=13kΩ, 2 resistors",
        }
        created = client.post("/api/history", json=body)
        assert created.status_code == 201
        entry_id = created.json()["id"]

        listed = client.get("/api/history", params={"limit": 200}).json()
        assert entry_id in [e["id"] for e in listed["entries"]]
        assert listed["total"] >= 1

        assert client.delete(f"/api/history/{entry_id}").status_code == 204
        assert client.delete(f"/api/history/{entry_id}").status_code == 404

    def test_empty_result_rejected(self, client):
        response = client.post("/api/history",
                               json={"calculation_type": "ohm_law", "input_parameters": "", "result": ""})
        assert response.status_code == 422


class TestRateLimit:
    """Test the in-memory rate limiter on a minimal app."""

    def _app(self):
        app = FastAPI()
        app.add_middleware(RateLimitMiddleware, requests_per_minute=3, search_requests_per_minute=1)

        @app.get("/api/ping")
        async def ping():
            return {"ok": True}

        @app.post("/api/divider/search")
        async def search():
            return {"ok": True}

        @app.get("/api/health")
        async def health():
            return {"ok": True}

        return app

    def test_general_limit(self):
        client = TestClient(self._app())
        codes = [client.get("/api/ping").status_code for _ in range(4)]
        assert codes == [200, 200, 200, 429]

    def test_search_limit(self):
        client = TestClient(self._app())
        assert client.post("/api/divider/search").status_code == 200
        response = client.post("/api/divider/search")
        assert response.status_code == 429
        assert "Search rate limit" in response.json()["detail"]

    def test_health_exempt(self):
        client = TestClient(self._app())
        assert all(client.get("/api/health").status_code == 200 for _ in range(10))
