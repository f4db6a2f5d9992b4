"""Tests for the application factory and lifespan."""

from __future__ import annotations

from notify_service.app.main import create_app


def test_create_app_registers_routes() -> None:
    app = create_app()
    paths = {route.path for route in app.routes}

    assert "/health" in paths
    assert "/api/v1/notifications/dispatch" in paths
    assert "/api/v1/notifications/dispatch/guest" in paths
    assert "/api/v1/notifications/classify/{event_kind}" in paths


async def test_health(client) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["x-request-id"]


async def test_lifespan_initializes_and_closes_database(monkeypatch) -> None:
    from notify_service.app import lifespan as lifespan_module

    calls: list[str] = []

    async def fake_init() -> None:
        calls.append("init")

    async def fake_close() -> None:
        calls.append("close")

    monkeypatch.setattr(lifespan_module, "init_database", fake_init)
    monkeypatch.setattr(lifespan_module, "close_database", fake_close)

    app = create_app()
    async with lifespan_module.lifespan(app):
        assert calls == ["init"]

    assert calls == ["init", "close"]
