"""Tests for health and metrics endpoints."""
from fastapi.testclient import TestClient

from station_ondemand.main import app

client = TestClient(app)


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


def test_metrics():
    client.get("/health")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "http_requests_total" in response.text


def test_correlation_id_generated():
    response = client.get("/health")
    assert response.headers["X-Correlation-ID"]


def _count_5xx():
    from prometheus_client import REGISTRY

    total = 0.0
    for metric in REGISTRY.collect():
        if metric.name != "http_requests":
            continue
        for sample in metric.samples:
            if sample.name == "http_requests_total" and sample.labels.get("status") == "500":
                total += sample.value
    return total


def test_unhandled_error_is_counted():
    """A request failing with an unexpected error returns a structured 500 and is counted."""
    from station_ondemand.shared.db import get_db

    async def broken_db():
        raise RuntimeError("database unreachable")
        yield  # pragma: no cover

    app.dependency_overrides[get_db] = broken_db
    try:
        before = _count_5xx()
        response = TestClient(app, raise_server_exceptions=False).get("/api/stations/1/ondemand")
        assert response.status_code == 500
        data = response.json()
        assert data["code"] == 500
        assert data["success"] is False
        assert _count_5xx() == before + 1
    finally:
        app.dependency_overrides.clear()
