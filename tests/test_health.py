# tests/test_health.py

from __future__ import annotations

from fastapi.testclient import TestClient

from api.main import app, app_state


def test_liveness_does_not_need_storage() -> None:
    app_state.clear()

    response = TestClient(app).get("/health/live")

    assert response.status_code == 200
    assert response.json()["status"] == "alive"


def test_readiness_when_store_answers(client: TestClient) -> None:
    response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.json()["status"] == "ready"


def test_readiness_fails_when_store_is_down(client: TestClient, fake_redis) -> None:
    fake_redis.fail = True

    response = client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["error"].startswith("Not ready")


def test_health_reports_services_and_metrics(client: TestClient, fake_redis) -> None:
    healthy = client.get("/health").json()
    fake_redis.fail = True
    unhealthy = client.get("/health").json()

    assert healthy["status"] == "healthy"
    assert healthy["services"]["storage"]["status"] == "healthy"
    assert "memory_percent" in healthy["system_metrics"]
    assert unhealthy["status"] == "unhealthy"
    assert unhealthy["services"]["storage"]["status"] == "unhealthy"


def test_routes_without_storage_answer_503() -> None:
    app_state.clear()

    response = TestClient(app).get("/users/")

    assert response.status_code == 503
    assert "error" in response.json()
