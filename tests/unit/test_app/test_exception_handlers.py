"""Tests for the problem detail exception handlers."""

from __future__ import annotations

from httpx import ASGITransport, AsyncClient

from people_service.app.main import create_app
from people_service.core.exceptions import BackendFailureException
from people_service.core.settings import AppSettings


class TestExceptionHandlers:
    """AppException, validation and unexpected errors become problem details."""

    async def test_app_exception(self, context):
        app = create_app(AppSettings(), context=context)

        async def failing() -> None:
            raise BackendFailureException("Failed to cache person", backend="cache")

        app.add_api_route("/failing", failing)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/failing")

        assert response.status_code == 500
        assert response.headers["content-type"] == "application/problem+json"
        body = response.json()
        assert body["type"] == "backend-failure"
        assert body["title"] == "Internal Server Error"
        assert body["backend"] == "cache"
        assert body["instance"] == "/failing"
        assert "request_id" in body

    async def test_validation_error_omits_input(self, client):
        response = await client.post("/pessoas", json={"nome": "x" * 101, "apelido": "a"})

        assert response.status_code == 422
        body = response.json()
        assert body["type"] == "validation-error"
        assert body["errors"]
        assert all(set(error) == {"field", "message", "type"} for error in body["errors"])
        assert "x" * 101 not in response.text

    async def test_unexpected_error_is_generic_500(self, context):
        app = create_app(AppSettings(), context=context)

        async def broken() -> None:
            raise RuntimeError("secret internals")

        app.add_api_route("/broken", broken)
        transport = ASGITransport(app=app, raise_app_exceptions=False)

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/broken")

        assert response.status_code == 500
        body = response.json()
        assert body["type"] == "internal-error"
        assert "secret internals" not in response.text

    async def test_missing_context_is_503(self):
        app = create_app(AppSettings())

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/contagem-pessoas")

        assert response.status_code == 503
        assert response.json()["type"] == "service-unavailable"
