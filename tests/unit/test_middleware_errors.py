"""Tests for error handling middleware."""

import pytest
from fastapi import FastAPI, HTTPException
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from hiring_pipeline.core.errors import (
    ConfigurationError,
    EvaluationError,
    ExternalServiceError,
    NotFoundError,
    RecordStoreError,
)
from hiring_pipeline.middleware.errors import setup_exception_handlers
from hiring_pipeline.middleware.request_id import RequestIDMiddleware


class SampleInput(BaseModel):
    """Sample input model for validation."""

    name: str
    row: int


def _app():
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)
    setup_exception_handlers(app)
    return app


@pytest.mark.asyncio
async def test_http_exception_standardized():
    """HTTPException returns standardized error format."""
    app = _app()

    @app.get("/test")
    async def test_route():
        raise HTTPException(status_code=400, detail="Invalid JSON payload")

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/test")

    assert response.status_code == 400
    data = response.json()
    assert data["error"]["code"] == "HTTP_400"
    assert data["error"]["message"] == "Invalid JSON payload"
    assert data["error"]["request_id"] == response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_unknown_route_uses_standard_format():
    """Routing 404s share the error shape."""
    async with AsyncClient(transport=ASGITransport(app=_app()), base_url="http://test") as client:
        response = await client.get("/missing")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "HTTP_404"


@pytest.mark.asyncio
async def test_validation_error_standardized():
    """Pydantic validation errors return standardized format."""
    app = _app()

    @app.post("/test")
    async def test_route(data: SampleInput):
        return {"status": "ok"}

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/test", json={"name": "test"})

    assert response.status_code == 422
    data = response.json()
    assert data["error"]["code"] == "VALIDATION_ERROR"
    assert "details" in data["error"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("exc", "status_code", "code"),
    [
        (NotFoundError("missing"), 404, "NOT_FOUND"),
        (EvaluationError("model down", service="openai"), 500, "EVALUATION_ERROR"),
        (RecordStoreError("sheet down", service="google_sheets"), 500, "RECORD_STORE_ERROR"),
        (ExternalServiceError("vapi down", service="vapi"), 502, "EXTERNAL_SERVICE_ERROR"),
        (ConfigurationError("no key"), 500, "CONFIGURATION_ERROR"),
    ],
)
async def test_domain_errors_mapped(exc, status_code, code):
    """Each domain error code maps to its HTTP status."""
    app = _app()

    @app.get("/test")
    async def test_route():
        raise exc

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/test")

    assert response.status_code == status_code
    data = response.json()
    assert data["error"]["code"] == code
    assert data["error"]["message"] == exc.message
    assert "details" not in data["error"]


@pytest.mark.asyncio
async def test_unhandled_exception_returns_generic_500():
    """Unexpected exceptions never leak their message."""
    app = _app()

    @app.get("/test")
    async def test_route():
        raise RuntimeError("secret internals")

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/test")

    assert response.status_code == 500
    data = response.json()
    assert data["error"]["code"] == "INTERNAL_ERROR"
    assert "secret" not in data["error"]["message"]
