"""Google Sheets client acting as the pipeline's system of record."""

from __future__ import annotations

import asyncio
from typing import Any

import httplib2
from google.oauth2.service_account import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from structlog import get_logger

logger = get_logger()

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def a1_range(sheet_name: str, start_column: str, row: int, end_column: str | None = None) -> str:
    """
    Build an A1 range for a single row, e.g. ``'Call Queue'!M12:O12``.

    Args:
        sheet_name: Tab name (quoted so spaces are allowed)
        start_column: First column letter
        row: 1-based row number
        end_column: Last column letter, or None for a single cell

    Returns:
        A1 range expression
    """
    if end_column is None:
        return f"'{sheet_name}'!{start_column}{row}"
    return f"'{sheet_name}'!{start_column}{row}:{end_column}{row}"


class SheetsRecordStore:
    """Range-addressed reads and writes against Google Sheets."""

    def __init__(self, credentials_info: dict[str, Any]) -> None:
        """Build the Sheets v4 service from service-account info."""
        self.credentials = Credentials.from_service_account_info(
            credentials_info, scopes=SHEETS_SCOPES
        )
        self.service = build("sheets", "v4", credentials=self.credentials, cache_discovery=False)

    def _authorized_http(self) -> AuthorizedHttp:
        """New transport per request; httplib2.Http must not be shared across threads."""
        return AuthorizedHttp(self.credentials, http=httplib2.Http())

    async def update(
        self, spreadsheet_id: str, cell_range: str, values: list[list[Any]]
    ) -> int:
        """
        Write a block of values to a range.

        Args:
            spreadsheet_id: Target spreadsheet
            cell_range: A1 range expression
            values: Rows of cell values

        Returns:
            Number of cells updated

        Raises:
            googleapiclient.errors.HttpError: On API failure
        """
        request = (
            self.service.spreadsheets()
            .values()
            .update(
                spreadsheetId=spreadsheet_id,
                range=cell_range,
                valueInputOption="USER_ENTERED",
                body={"values": values},
            )
        )
        result: dict[str, Any] = await asyncio.to_thread(
            request.execute, http=self._authorized_http()
        )
        updated = int(result.get("updatedCells", 0))

        logger.info("sheet_updated", range=cell_range, updated_cells=updated)
        return updated

    async def read_column(self, spreadsheet_id: str, cell_range: str) -> list[str]:
        """
        Read the first cell of every row in a range.

        Empty rows come back as empty strings so list index + 1 is the row number
        when the range starts at row 1.

        Raises:
            googleapiclient.errors.HttpError: On API failure
        """
        request = (
            self.service.spreadsheets()
            .values()
            .get(spreadsheetId=spreadsheet_id, range=cell_range)
        )
        result: dict[str, Any] = await asyncio.to_thread(
            request.execute, http=self._authorized_http()
        )
        rows: list[list[Any]] = result.get("values", [])

        return [str(row[0]) if row else "" for row in rows]
