"""Tests for the Google Sheets and SharePoint clients."""

from unittest.mock import MagicMock, patch

import pytest

from hiring_pipeline.clients.sharepoint import SharePointClient
from hiring_pipeline.clients.sheets import SheetsRecordStore, a1_range
from hiring_pipeline.core.errors import ExternalServiceError


def test_a1_range_row_span():
    """Multi-column ranges repeat the row on both ends."""
    assert a1_range("Call Queue", "M", 12, "O") == "'Call Queue'!M12:O12"


def test_a1_range_single_cell():
    """Without an end column the range is one cell."""
    assert a1_range("Call Queue", "L", 12) == "'Call Queue'!L12"


@pytest.fixture
def authorized_http():
    with patch("hiring_pipeline.clients.sheets.AuthorizedHttp") as authorized:
        authorized.side_effect = lambda credentials, http: MagicMock(name="authorized_http")
        yield authorized


@pytest.fixture
def sheets_service(authorized_http):
    with (
        patch("hiring_pipeline.clients.sheets.Credentials") as credentials,
        patch("hiring_pipeline.clients.sheets.build") as build,
    ):
        credentials.from_service_account_info.return_value = "creds"
        yield build.return_value


@pytest.mark.asyncio
async def test_sheets_update_writes_user_entered(sheets_service):
    """Writes go through values().update with USER_ENTERED input."""
    values_api = sheets_service.spreadsheets.return_value.values.return_value
    values_api.update.return_value.execute.return_value = {"updatedCells": 3}
    store = SheetsRecordStore({"client_email": "a@b", "private_key": "k"})

    updated = await store.update("sheet-test", "'Call Queue'!M12:O12", [["t", "4", "e"]])

    assert updated == 3
    values_api.update.assert_called_once_with(
        spreadsheetId="sheet-test",
        range="'Call Queue'!M12:O12",
        valueInputOption="USER_ENTERED",
        body={"values": [["t", "4", "e"]]},
    )


@pytest.mark.asyncio
async def test_sheets_read_column_pads_empty_rows(sheets_service):
    """Empty rows read back as "" so positions stay aligned with row numbers."""
    values_api = sheets_service.spreadsheets.return_value.values.return_value
    values_api.get.return_value.execute.return_value = {
        "values": [["Conversation ID"], [], ["conv_abc"]]
    }
    store = SheetsRecordStore({"client_email": "a@b", "private_key": "k"})

    column = await store.read_column("sheet-test", "'Call Queue'!Q:Q")

    assert column == ["Conversation ID", "", "conv_abc"]
    values_api.get.assert_called_once_with(spreadsheetId="sheet-test", range="'Call Queue'!Q:Q")


@pytest.mark.asyncio
async def test_sheets_read_column_empty_sheet(sheets_service):
    """A range with no values reads as an empty list."""
    values_api = sheets_service.spreadsheets.return_value.values.return_value
    values_api.get.return_value.execute.return_value = {}
    store = SheetsRecordStore({"client_email": "a@b", "private_key": "k"})

    assert await store.read_column("sheet-test", "'Call Queue'!Q:Q") == []


@pytest.mark.asyncio
async def test_sheets_requests_use_their_own_transport(sheets_service, authorized_http):
    """Each request executes on a new authorized httplib2 transport."""
    values_api = sheets_service.spreadsheets.return_value.values.return_value
    values_api.update.return_value.execute.return_value = {"updatedCells": 1}
    values_api.get.return_value.execute.return_value = {}
    store = SheetsRecordStore({"client_email": "a@b", "private_key": "k"})

    await store.update("sheet-test", "'Call Queue'!L12", [["Completed"]])
    await store.update("sheet-test", "'Call Queue'!L13", [["Completed"]])
    await store.read_column("sheet-test", "'Call Queue'!Q:Q")

    assert authorized_http.call_count == 3
    raw_transports = [c.kwargs["http"] for c in authorized_http.call_args_list]
    assert len({id(t) for t in raw_transports}) == 3
    assert all(c.args[0] == "creds" for c in authorized_http.call_args_list)

    update_calls = values_api.update.return_value.execute.call_args_list
    assert update_calls[0].kwargs["http"] is not update_calls[1].kwargs["http"]


def _sharepoint():
    with patch("hiring_pipeline.clients.sharepoint.msal.ConfidentialClientApplication"):
        return SharePointClient(
            client_id="client",
            tenant_id="tenant",
            client_secret="secret",
            site_url="https://contoso.sharepoint.com/sites/hr",
        )


def test_sharepoint_site_path():
    """Site URLs are converted to Graph's host:path form."""
    assert _sharepoint()._site_path() == "contoso.sharepoint.com:sites:hr"


@pytest.mark.asyncio
async def test_sharepoint_token_acquired():
    """An app-only token is returned as-is."""
    client = _sharepoint()
    client.app = MagicMock()
    client.app.acquire_token_for_client.return_value = {"access_token": "tok"}

    assert await client.get_access_token() == "tok"


@pytest.mark.asyncio
async def test_sharepoint_token_refused():
    """A refused client-credentials grant is an external service error."""
    client = _sharepoint()
    client.app = MagicMock()
    client.app.acquire_token_for_client.return_value = {
        "error": "invalid_client",
        "error_description": "AADSTS7000215: Invalid client secret provided.",
    }

    with pytest.raises(ExternalServiceError) as exc_info:
        await client.get_access_token()

    assert exc_info.value.context["service"] == "sharepoint"
    assert exc_info.value.context["error"] == "invalid_client"
