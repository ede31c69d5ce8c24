"""Tavus API client for AI video conversations."""

from __future__ import annotations

from typing import Any

import aiohttp
from structlog import get_logger

logger = get_logger()


class TavusClient:
    """HTTP client for the Tavus conversations API."""

    def __init__(self, api_key: str) -> None:
        self.base_url = "https://tavusapi.com/v2"
        self.timeout = aiohttp.ClientTimeout(total=30)
        self.headers = {
            "x-api-key": api_key,
            "Content-Type": "application/json",
        }

    async def create_conversation(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Create a conversation and return its id and join URL.

        Returns:
            Response JSON containing ``conversation_id`` and ``conversation_url``

        Raises:
            aiohttp.ClientResponseError: On non-2xx response
        """
        logger.info("tavus_conversation_request", name=payload.get("conversation_name"))

        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.post(
                f"{self.base_url}/conversations", json=payload, headers=self.headers
            ) as response:
                if response.status >= 400:
                    body = await response.text()
                    logger.error("tavus_api_error", status=response.status, body=body[:500])
                response.raise_for_status()
                result: dict[str, Any] = await response.json()

        logger.info("tavus_conversation_created", conversation_id=result.get("conversation_id"))
        return result
