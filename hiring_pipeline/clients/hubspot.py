"""HubSpot Files API client for résumé downloads."""

from __future__ import annotations

from typing import Any

import aiohttp
from structlog import get_logger

logger = get_logger()


class HubSpotFilesClient:
    """Resolve HubSpot file ids to signed URLs and download them."""

    def __init__(self, token: str) -> None:
        self.base_url = "https://api.hubapi.com"
        self.timeout = aiohttp.ClientTimeout(total=30)
        self.headers = {"Authorization": f"Bearer {token}"}

    async def get_signed_url(self, file_id: str) -> str | None:
        """
        Fetch a short-lived download URL for a file.

        Returns:
            Signed URL, or None if HubSpot returned none

        Raises:
            aiohttp.ClientResponseError: On non-2xx response
        """
        url = f"{self.base_url}/files/v3/files/{file_id}/signed-url"

        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.get(url, headers=self.headers) as response:
                response.raise_for_status()
                result: dict[str, Any] = await response.json()

        return result.get("url") or None

    async def download(self, signed_url: str) -> bytes:
        """Download raw file bytes from a signed URL."""
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.get(signed_url) as response:
                response.raise_for_status()
                content = await response.read()

        logger.info("hubspot_file_downloaded", size_bytes=len(content))
        return content
