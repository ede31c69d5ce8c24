"""E2E tests for the status endpoints."""

import pytest

pytestmark = pytest.mark.e2e


@pytest.mark.asyncio
async def test_health_check(http_client):
    """Health reports status and credential presence, never values."""
    response = await http_client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["uptime"] >= 0
    assert data["environment"]["hasOpenAIKey"] is True
    assert data["environment"]["hasGoogleSheetId"] is True
    assert data["environment"]["hasVapiKey"] is True
    assert "sk-test" not in response.text


@pytest.mark.asyncio
async def test_root_lists_endpoints(http_client):
    """The root endpoint lists every route and the pipeline stages."""
    response = await http_client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["version"] == "3.0.0"
    assert "POST /vapi-callback - Process phone call results" in data["availableEndpoints"]
    assert "POST /whaleagent-callback - Process video interview results" in (
        data["availableEndpoints"]
    )
    assert data["recruitmentPipeline"]["stage2"] == "LionAgent - Technical Interview"


@pytest.mark.asyncio
async def test_responses_carry_request_id(http_client):
    """Every response echoes a request id."""
    response = await http_client.get("/health", headers={"X-Request-ID": "req-health-1"})

    assert response.headers["X-Request-ID"] == "req-health-1"
