"""E2E test fixtures for HTTP testing."""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from hiring_pipeline.main import app
from hiring_pipeline.middleware.rate_limit import limiter

APP_STATE_SERVICES = ("dispatcher", "triggers", "resume_transfer")


@pytest.fixture
def triggers():
    """Stage trigger double; each trigger returns a canned provider response."""
    mock = AsyncMock()
    mock.trigger_screening_call.return_value = {"status": "call scheduled"}
    mock.trigger_technical_call.return_value = {"status": "LionAgent call scheduled"}
    mock.trigger_video_interview.return_value = {"conversationId": "conv_new"}
    return mock


@pytest.fixture
def resume_transfer():
    """Résumé transfer double."""
    mock = AsyncMock()
    mock.transfer.return_value = {"success": True, "fileName": "Jane_Doe.docx"}
    return mock


@pytest_asyncio.fixture
async def http_client(dispatcher, triggers, resume_transfer):
    """HTTP client for testing actual FastAPI app.

    The app's lifespan is not run; the collaborators it would build are
    placed on app.state directly so no Google, OpenAI or provider client is
    ever constructed.
    """
    app.state.dispatcher = dispatcher
    app.state.triggers = triggers
    app.state.resume_transfer = resume_transfer
    limiter.reset()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    for name in APP_STATE_SERVICES:
        if hasattr(app.state, name):
            delattr(app.state, name)
