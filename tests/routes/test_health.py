"""Tests for the health endpoint and cross-cutting middleware."""

from httpx import AsyncClient
from pytest import mark
from pytest_mock import MockerFixture

from inkpost.clients.ai_client import AiClient
from inkpost.main import app
from inkpost.middleware import lifespan


@mark.asyncio
async def test_health_reports_services(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["version"] == "1.0.0"
    assert body["services"]["database"] == "available"
    # Lifespan does not run under the test transport
    assert body["services"]["ai_client"] == "not_configured"
    assert body["services"]["image_storage"] == "not_configured"


@mark.asyncio
async def test_health_degraded_when_store_is_down(
    client: AsyncClient,
    mocker: MockerFixture,
) -> None:
    mocker.patch("inkpost.main.ping_db", return_value=False)

    body = (await client.get("/health")).json()

    assert body["status"] == "degraded"
    assert body["services"]["database"] == "unavailable"


@mark.asyncio
async def test_request_id_is_echoed(client: AsyncClient) -> None:
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


@mark.asyncio
async def test_request_id_is_generated(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert len(response.headers["X-Request-ID"]) == 32


@mark.asyncio
async def test_security_headers(client: AsyncClient) -> None:
    response = await client.get("/posts")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


@mark.asyncio
async def test_lifespan_wires_services(mocker: MockerFixture) -> None:
    init_db = mocker.patch("inkpost.middleware.middleware.init_db")
    close_db = mocker.patch("inkpost.middleware.middleware.close_db")

    async with lifespan(app):
        assert isinstance(app.state.ai_client, AiClient)
        assert app.state.ai_client.is_configured is False
        assert app.state.image_storage.is_configured is False

    init_db.assert_awaited_once()
    close_db.assert_awaited_once()
