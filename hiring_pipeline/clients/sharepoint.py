"""SharePoint document store client over Microsoft Graph."""

from __future__ import annotations

import asyncio
from typing import Any

import aiohttp
import msal
from structlog import get_logger

from hiring_pipeline.core.errors import ExternalServiceError

logger = get_logger()

GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"
GRAPH_SCOPES = ["https://graph.microsoft.com/.default"]
DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class SharePointClient:
    """Upload files into a SharePoint document library."""

    def __init__(
        self,
        client_id: str,
        tenant_id: str,
        client_secret: str,
        site_url: str,
        folder_path: str = "Shared Documents",
    ) -> None:
        self.site_url = site_url
        self.folder_path = folder_path
        self.timeout = aiohttp.ClientTimeout(total=60)
        self.app = msal.ConfidentialClientApplication(
            client_id,
            authority=f"https://login.microsoftonline.com/{tenant_id}",
            client_credential=client_secret,
        )

    async def get_access_token(self) -> str:
        """
        Acquire an app-only Graph token.

        Raises:
            ExternalServiceError: If Azure AD refuses the client credentials
        """
        result: dict[str, Any] = await asyncio.to_thread(
            self.app.acquire_token_for_client, scopes=GRAPH_SCOPES
        )
        token = result.get("access_token")
        if not token:
            raise ExternalServiceError(
                result.get("error_description") or "Could not acquire Graph token",
                service="sharepoint",
                context={"error": result.get("error")},
            )
        return str(token)

    def _site_path(self) -> str:
        # https://contoso.sharepoint.com/sites/hr -> contoso.sharepoint.com:sites:hr
        return self.site_url.replace("https://", "").replace("/", ":")

    async def upload(
        self, content: bytes, file_name: str, content_type: str = DOCX_CONTENT_TYPE
    ) -> dict[str, Any]:
        """
        Upload a file into the configured folder of the site's first drive.

        Returns:
            Graph driveItem JSON (includes ``id`` and ``webUrl``)

        Raises:
            aiohttp.ClientResponseError: On non-2xx response
        """
        token = await self.get_access_token()
        headers = {"Authorization": f"Bearer {token}"}

        async with aiohttp.ClientSession(timeout=self.timeout, headers=headers) as session:
            async with session.get(f"{GRAPH_BASE_URL}/sites/{self._site_path()}") as response:
                response.raise_for_status()
                site_id = (await response.json())["id"]

            async with session.get(f"{GRAPH_BASE_URL}/sites/{site_id}/drives") as response:
                response.raise_for_status()
                drive_id = (await response.json())["value"][0]["id"]

            upload_url = (
                f"{GRAPH_BASE_URL}/drives/{drive_id}/root:/{self.folder_path}/{file_name}:/content"
            )
            async with session.put(
                upload_url, data=content, headers={"Content-Type": content_type}
            ) as response:
                response.raise_for_status()
                result: dict[str, Any] = await response.json()

        logger.info("sharepoint_file_uploaded", file_name=file_name, item_id=result.get("id"))
        return result
