"""Stage triggers and résumé transfer webhooks called by the sheet automation."""

from typing import Any

from fastapi import APIRouter, Depends, Request

from hiring_pipeline.api.dependencies import get_resume_transfer, get_triggers
from hiring_pipeline.api.parsing import parse_json_body
from hiring_pipeline.core.config import settings
from hiring_pipeline.middleware.rate_limit import limiter
from hiring_pipeline.models.triggers import (
    PhoneTriggerRequest,
    ResumeTransferRequest,
    VideoTriggerRequest,
)
from hiring_pipeline.services.documents import ResumeTransferService
from hiring_pipeline.services.triggers import StageTriggers

router = APIRouter(tags=["triggers"])

PHONE_FIELDS_MISSING = "Missing required fields: name or phone"
VIDEO_FIELDS_MISSING = "Missing required fields: candidateName or candidateEmail"


@router.post("/zebraagent-trigger")
@limiter.limit(settings.trigger_rate_limit)
async def trigger_screening(
    request: Request,
    triggers: StageTriggers = Depends(get_triggers),
) -> dict[str, Any]:
    """Start the phone screening call for a candidate row."""
    body = await parse_json_body(request, PhoneTriggerRequest, PHONE_FIELDS_MISSING)
    return await triggers.trigger_screening_call(body)


@router.post("/lionagent-trigger")
@limiter.limit(settings.trigger_rate_limit)
async def trigger_technical(
    request: Request,
    triggers: StageTriggers = Depends(get_triggers),
) -> dict[str, Any]:
    """Start the technical phone interview for a candidate row."""
    body = await parse_json_body(request, PhoneTriggerRequest, PHONE_FIELDS_MISSING)
    return await triggers.trigger_technical_call(body)


@router.post("/whaleagent-trigger")
@limiter.limit(settings.trigger_rate_limit)
async def trigger_video(
    request: Request,
    triggers: StageTriggers = Depends(get_triggers),
) -> dict[str, Any]:
    """Create the video interview and return the invitation email text."""
    body = await parse_json_body(request, VideoTriggerRequest, VIDEO_FIELDS_MISSING)
    callback_base_url = settings.public_base_url or str(request.base_url)
    return await triggers.trigger_video_interview(body, callback_base_url)


@router.post("/webhook")
@limiter.limit(settings.trigger_rate_limit)
async def transfer_resume(
    request: Request,
    service: ResumeTransferService = Depends(get_resume_transfer),
) -> dict[str, Any]:
    """Copy an applicant's résumé from HubSpot into SharePoint."""
    body = await parse_json_body(request, ResumeTransferRequest, "Missing fileId")
    return await service.transfer(body.file_id, body.applicant_name)
