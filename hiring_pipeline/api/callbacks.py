"""Provider completion callbacks (Vapi calls, Tavus conversations)."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from structlog import get_logger

from hiring_pipeline.api.dependencies import get_dispatcher
from hiring_pipeline.api.parsing import parse_json_body
from hiring_pipeline.models.callbacks import (
    TavusCallbackPayload,
    VapiCallbackPayload,
    decode_call_callback,
    decode_conversation_callback,
)
from hiring_pipeline.models.pipeline import CallbackOutcome, DispatchResult
from hiring_pipeline.services.dispatcher import CallbackDispatcher

logger = get_logger()
router = APIRouter(tags=["callbacks"])


def call_callback_response(result: DispatchResult, evaluation_key: str) -> dict[str, Any]:
    """Shape a phone-stage result the way the sheet automation reads it."""
    if result.outcome != CallbackOutcome.PROCESSED:
        return {"message": result.message}

    return {
        "message": result.message,
        "candidateName": result.candidate_name,
        evaluation_key: result.evaluation,
        "overallScore": result.score,
        "row": result.row,
        "stage": result.stage_tag,
    }


def conversation_callback_response(result: DispatchResult) -> dict[str, Any]:
    """Shape a video-stage result."""
    if result.outcome in (CallbackOutcome.IGNORED, CallbackOutcome.ACKNOWLEDGED_EMPTY):
        return {"message": result.message}

    return {
        "message": result.message,
        "conversationId": result.conversation_id,
        "overallScore": result.score,
        "analysisLength": len(result.evaluation or ""),
        "recordingUrl": result.recording_url or "Not available",
        "row": result.row,
    }


@router.post("/vapi-callback")
async def handle_call_callback(
    request: Request,
    dispatcher: CallbackDispatcher = Depends(get_dispatcher),
) -> dict[str, Any]:
    """
    Handle a Vapi server message for the screening and technical stages.

    Only ``end-of-call-report`` messages with a transcript and a row number
    reach the evaluator; everything else is acknowledged with 200 so Vapi
    does not redeliver it.
    """
    payload = await parse_json_body(request, VapiCallbackPayload)
    event = decode_call_callback(payload)

    result = await dispatcher.dispatch(event)

    evaluation_key = "analysis"
    if result.stage is not None:
        evaluation_key = dispatcher.registry.rule_for(result.stage).evaluation_key

    logger.info("call_callback_handled", outcome=result.outcome.value, row=result.row)
    return call_callback_response(result, evaluation_key)


@router.post("/whaleagent-callback")
async def handle_conversation_callback(
    request: Request,
    dispatcher: CallbackDispatcher = Depends(get_dispatcher),
) -> dict[str, Any]:
    """
    Handle a Tavus conversation callback for the video stage.

    Anything other than status ``ended`` is acknowledged and ignored.
    """
    payload = await parse_json_body(request, TavusCallbackPayload)
    event = decode_conversation_callback(payload)

    result = await dispatcher.dispatch(event)

    logger.info(
        "conversation_callback_handled",
        outcome=result.outcome.value,
        conversation_id=result.conversation_id,
        row=result.row,
    )
    return conversation_callback_response(result)
