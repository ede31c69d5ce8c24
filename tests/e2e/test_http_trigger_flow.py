"""E2E tests for the stage trigger and résumé transfer endpoints."""

from unittest.mock import patch

import pytest

from hiring_pipeline.core.config import settings
from hiring_pipeline.core.errors import ConfigurationError
from hiring_pipeline.main import app
from tests.fixtures.factories import create_phone_trigger, create_video_trigger

pytestmark = pytest.mark.e2e


@pytest.mark.asyncio
async def test_screening_trigger(http_client, triggers):
    """The screening trigger validates the body and starts the call."""
    response = await http_client.post("/zebraagent-trigger", json=create_phone_trigger(row=12))

    assert response.status_code == 200
    assert response.json() == {"status": "call scheduled"}
    request = triggers.trigger_screening_call.await_args.args[0]
    assert request.name == "Ada Lovelace"
    assert request.phone == "+447700900123"
    assert request.row == 12


@pytest.mark.asyncio
async def test_phone_trigger_accepts_numeric_phone(http_client, triggers):
    """Sheet automations sometimes send phone numbers as numbers."""
    body = {"name": "Ada Lovelace", "phone": 447700900123, "row": ""}

    response = await http_client.post("/lionagent-trigger", json=body)

    assert response.status_code == 200
    request = triggers.trigger_technical_call.await_args.args[0]
    assert request.phone == "447700900123"
    assert request.row is None


@pytest.mark.asyncio
async def test_phone_trigger_missing_fields(http_client, triggers):
    """Missing name or phone is a 400 naming both fields."""
    response = await http_client.post("/lionagent-trigger", json={"name": "Ada Lovelace"})

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Missing required fields: name or phone"
    triggers.trigger_technical_call.assert_not_awaited()


@pytest.mark.asyncio
async def test_trigger_configuration_error(http_client, triggers):
    """Unconfigured provider credentials surface as a 500."""
    triggers.trigger_screening_call.side_effect = ConfigurationError(
        "VAPI_ASSISTANT_ID and VAPI_PHONE_NUMBER_ID are required"
    )

    response = await http_client.post("/zebraagent-trigger", json=create_phone_trigger())

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "CONFIGURATION_ERROR"


@pytest.mark.asyncio
async def test_video_trigger_uses_request_base_url(http_client, triggers):
    """Without PUBLIC_BASE_URL the callback points back at this host."""
    with patch.object(settings, "public_base_url", None):
        response = await http_client.post("/whaleagent-trigger", json=create_video_trigger())

    assert response.status_code == 200
    assert response.json() == {"conversationId": "conv_new"}
    request, callback_base_url = triggers.trigger_video_interview.await_args.args
    assert request.candidate_email == "ada@example.com"
    assert callback_base_url == "http://test/"


@pytest.mark.asyncio
async def test_video_trigger_uses_public_base_url(http_client, triggers):
    """A configured public URL wins over the request host."""
    with patch.object(settings, "public_base_url", "https://hooks.example.com"):
        await http_client.post("/whaleagent-trigger", json=create_video_trigger())

    assert triggers.trigger_video_interview.await_args.args[1] == "https://hooks.example.com"


@pytest.mark.asyncio
async def test_video_trigger_missing_fields(http_client, triggers):
    """Missing candidate details are a 400."""
    response = await http_client.post("/whaleagent-trigger", json={"candidateName": "Ada"})

    assert response.status_code == 400
    assert response.json()["error"]["message"] == (
        "Missing required fields: candidateName or candidateEmail"
    )


@pytest.mark.asyncio
async def test_resume_webhook(http_client, resume_transfer):
    """The résumé webhook hands the file id and name to the transfer service."""
    response = await http_client.post(
        "/webhook", json={"fileId": 123, "applicantName": "Jane Doe"}
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "fileName": "Jane_Doe.docx"}
    resume_transfer.transfer.assert_awaited_once_with("123", "Jane Doe")


@pytest.mark.asyncio
async def test_resume_webhook_missing_file_id(http_client, resume_transfer):
    """A body without fileId is a 400."""
    response = await http_client.post("/webhook", json={"applicantName": "Jane Doe"})

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Missing fileId"
    resume_transfer.transfer.assert_not_awaited()


@pytest.mark.asyncio
async def test_resume_webhook_unconfigured(http_client):
    """Without HubSpot and SharePoint credentials the webhook is unavailable."""
    app.state.resume_transfer = None

    response = await http_client.post("/webhook", json={"fileId": "123"})

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "CONFIGURATION_ERROR"
