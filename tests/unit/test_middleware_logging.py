"""Tests for LoggingMiddleware."""

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from hiring_pipeline.middleware.logging import LoggingMiddleware


def _app():
    app = FastAPI()
    app.add_middleware(LoggingMiddleware)

    @app.post("/vapi-callback")
    async def callback_route():
        return {"message": "ok"}

    @app.get("/health")
    async def health_route():
        return {"status": "healthy"}

    return app


@pytest.mark.asyncio
async def test_logs_request_started_and_completed():
    """Callbacks are logged on the way in and out with status and timing."""
    transport = ASGITransport(app=_app())
    with patch("hiring_pipeline.middleware.logging.logger") as mock_logger:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            await client.post("/vapi-callback", json={})

    events = [call.args[0] for call in mock_logger.info.call_args_list]
    assert events == ["request_started", "request_completed"]

    completed = mock_logger.info.call_args_list[1].kwargs
    assert completed["status_code"] == 200
    assert completed["method"] == "POST"
    assert "duration_ms" in completed


@pytest.mark.asyncio
async def test_health_checks_not_logged():
    """Uptime checks are passed through silently."""
    transport = ASGITransport(app=_app())
    with patch("hiring_pipeline.middleware.logging.logger") as mock_logger:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")

    assert response.status_code == 200
    mock_logger.info.assert_not_called()
