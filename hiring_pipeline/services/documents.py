"""Résumé transfer from HubSpot into the SharePoint document library."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Any

from structlog import get_logger

from hiring_pipeline.clients.hubspot import HubSpotFilesClient
from hiring_pipeline.core.errors import ExternalServiceError, service_boundary
from hiring_pipeline.types import DocumentStore

logger = get_logger()

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9\-_.]")


def resume_file_name(applicant_name: str | None) -> str:
    """``Jane Doe`` -> ``Jane_Doe.docx``; no name -> ``cv.docx``."""
    stem = _UNSAFE_FILENAME_CHARS.sub("_", applicant_name or "cv")
    return f"{stem}.docx"


class ResumeTransferService:
    """Copy an applicant's uploaded résumé into the document store."""

    def __init__(self, hubspot: HubSpotFilesClient, document_store: DocumentStore) -> None:
        self.hubspot = hubspot
        self.document_store = document_store

    @service_boundary
    async def transfer(self, file_id: str, applicant_name: str | None) -> dict[str, Any]:
        """
        Download a HubSpot file and upload it to SharePoint.

        Args:
            file_id: HubSpot file id
            applicant_name: Used for the destination file name

        Returns:
            Upload summary with the SharePoint item id and web URL

        Raises:
            ExternalServiceError: HubSpot gave no signed URL, or either API failed
        """
        file_name = resume_file_name(applicant_name)
        logger.info("resume_transfer_started", file_id=file_id, file_name=file_name)

        signed_url = await self.hubspot.get_signed_url(file_id)
        if not signed_url:
            raise ExternalServiceError(
                "No valid signed URL from HubSpot",
                service="hubspot",
                context={"file_id": file_id},
            )

        content = await self.hubspot.download(signed_url)
        uploaded = await self.document_store.upload(content, file_name)

        logger.info(
            "resume_transfer_completed",
            file_id=file_id,
            file_name=file_name,
            size_bytes=len(content),
        )

        return {
            "success": True,
            "id": uploaded.get("id"),
            "webUrl": uploaded.get("webUrl"),
            "message": "Uploaded to SharePoint successfully",
            "fileName": file_name,
            "timestamp": datetime.now(UTC).isoformat(),
        }
