"""Structural types for the external collaborators the core depends on.

The dispatcher and trigger services only rely on these shapes, so tests
can pass AsyncMock doubles or in-memory fakes in place of the SDK-backed
clients in hiring_pipeline.clients.
"""

from typing import Any, Protocol


class RecordStore(Protocol):
    """Range-addressed tabular store (Google Sheets in production)."""

    async def update(
        self, spreadsheet_id: str, cell_range: str, values: list[list[Any]]
    ) -> int: ...

    async def read_column(self, spreadsheet_id: str, cell_range: str) -> list[str]: ...


class DocumentStore(Protocol):
    """File store that accepts uploads (SharePoint in production)."""

    async def upload(
        self, content: bytes, file_name: str, content_type: str = ...
    ) -> dict[str, Any]: ...
