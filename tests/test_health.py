# tests/test_health.py
import asyncio
import inspect
import time
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

import linkfeed.main as main_module
from linkfeed.api.v1 import auth_router, posts_router
from linkfeed.main import app
from linkfeed.services import user_service


@pytest.mark.asyncio
async def test_health_responds() -> None:
    """The root liveness probe answers without touching the database."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_api_health(client: Any) -> None:
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_root_describes_service(client: Any) -> None:
    r = client.get("/")
    assert r.status_code == 200
    body = r.json()
    assert body["name"] == "LinkFeed"
    assert body["docs"] == "/docs"


def test_public_config_hides_secrets(client: Any, test_settings) -> None:
    r = client.get("/api/system/config")
    assert r.status_code == 200
    text = r.text
    assert test_settings.secret_key not in text
    assert r.json()["auth"]["access_token_expire_minutes"] == 60 * 24 * 30


def test_unknown_route_uses_error_shape(client: Any) -> None:
    r = client.get("/api/does-not-exist")
    assert r.status_code == 404
    assert "message" in r.json()


def test_blocking_endpoints_run_in_threadpool() -> None:
    """Handlers that hash passwords or hit the database must not be coroutines."""
    for router in (auth_router, posts_router):
        for route in router.routes:
            assert not inspect.iscoroutinefunction(route.endpoint), route.path


@pytest.mark.asyncio
async def test_health_answers_while_logins_hash(test_user: Any, monkeypatch) -> None:
    # Keep the session out of the worker threads; only bcrypt does real work.
    monkeypatch.setattr(user_service, "find_by_email", lambda db, email: test_user)
    finished: dict[str, float] = {}

    async def timed(ac: httpx.AsyncClient, name: str, method: str, url: str, **kwargs: Any) -> None:
        response = await ac.request(method, url, **kwargs)
        assert response.status_code == 200
        finished[name] = time.perf_counter()

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        login = {"email": test_user.email, "password": "password123"}
        await asyncio.gather(
            *(timed(ac, f"login{i}", "POST", "/api/auth/login", json=login) for i in range(3)),
            timed(ac, "health", "GET", "/health"),
        )

    assert finished["health"] < min(finished[f"login{i}"] for i in range(3))


def test_startup_runs_in_lifespan(monkeypatch) -> None:
    calls: list[str] = []
    monkeypatch.setattr(main_module, "check_connection", lambda: calls.append("check"))
    monkeypatch.setattr(main_module, "create_tables", lambda: calls.append("create"))

    with TestClient(app):
        assert calls == ["check", "create"]
    assert app.router.on_startup == []


def test_unreachable_database_aborts_startup(monkeypatch) -> None:
    def _down() -> None:
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(main_module, "check_connection", _down)
    with pytest.raises(OperationalError):
        with TestClient(app):
            pass
