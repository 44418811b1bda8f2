# tests/conftest.py

from __future__ import annotations

import os

# Cheap bcrypt for tests; must be set before settings are first loaded.
os.environ.setdefault("TASKTRACKER_BCRYPT_ROUNDS", "4")
os.environ.setdefault("TASKTRACKER_JWT_SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient

from api.main import app, app_state
from config import get_settings, get_settings_for_testing
from core.task_store import TaskStore
from core.user_store import UserStore

from .fakes import FakeRedis


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    app.dependency_overrides.clear()


@pytest.fixture()
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture()
def user_store(fake_redis: FakeRedis) -> UserStore:
    return UserStore(fake_redis, key_prefix="test")


@pytest.fixture()
def task_store(fake_redis: FakeRedis) -> TaskStore:
    return TaskStore(fake_redis, key_prefix="test")


@pytest.fixture()
def client(fake_redis: FakeRedis):
    """
    TestClient wired to FakeRedis.

    Not used as a context manager, so the lifespan (real Redis connection)
    never runs; the fake is placed in app_state directly.
    """
    app_state["redis"] = fake_redis
    yield TestClient(app)
    app_state.clear()


@pytest.fixture()
def owner_checked(client: TestClient) -> TestClient:
    """Same client with task ownership enforcement switched on."""
    settings = get_settings_for_testing(enforce_task_ownership=True)
    app.dependency_overrides[get_settings] = lambda: settings
    return client


def register_and_login(client: TestClient, username: str, password: str = "pw") -> tuple[str, str]:
    """Register an account, log in, and return (user_id, token)."""
    assert client.post("/register", json={"username": username, "password": password}).status_code == 200
    body = client.post("/login", json={"username": username, "password": password}).json()
    return body["user_id"], body["jwtToken"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
