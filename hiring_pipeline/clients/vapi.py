"""Vapi API client for outbound AI phone calls."""

from __future__ import annotations

from typing import Any

import aiohttp
from structlog import get_logger

logger = get_logger()


class VapiClient:
    """HTTP client for the Vapi phone-call API with bearer auth."""

    def __init__(self, api_key: str) -> None:
        self.base_url = "https://api.vapi.ai"
        self.timeout = aiohttp.ClientTimeout(total=30)
        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    async def create_phone_call(
        self,
        assistant_id: str,
        phone_number_id: str,
        customer_number: str,
        metadata: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Place an outbound call with an assistant.

        The metadata dict is echoed back on the call's end-of-call report,
        which is how callbacks find their sheet row.

        Raises:
            aiohttp.ClientResponseError: On non-2xx response
        """
        payload = {
            "assistantId": assistant_id,
            "phoneNumberId": phone_number_id,
            "customer": {"number": customer_number},
            "metadata": metadata,
        }

        logger.info("vapi_call_request", assistant_id=assistant_id, stage=metadata.get("stage"))

        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.post(
                f"{self.base_url}/call/phone", json=payload, headers=self.headers
            ) as response:
                if response.status >= 400:
                    body = await response.text()
                    logger.error("vapi_api_error", status=response.status, body=body[:500])
                response.raise_for_status()
                result: dict[str, Any] = await response.json()

        logger.info("vapi_call_created", call_id=result.get("id"))
        return result
