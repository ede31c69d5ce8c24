"""Stage triggers: mark the sheet row and start the provider interaction."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from structlog import get_logger

from hiring_pipeline.clients.tavus import TavusClient
from hiring_pipeline.clients.vapi import VapiClient
from hiring_pipeline.core.config import Settings
from hiring_pipeline.core.errors import ConfigurationError, ExternalServiceError, service_boundary
from hiring_pipeline.models.pipeline import Stage
from hiring_pipeline.models.triggers import PhoneTriggerRequest, VideoTriggerRequest
from hiring_pipeline.services.prompts import (
    VIDEO_INTERVIEW_CONTEXT,
    VIDEO_INVITATION_BODY,
    VIDEO_INVITATION_SUBJECT,
)
from hiring_pipeline.services.rubrics import RubricRegistry
from hiring_pipeline.types import RecordStore

logger = get_logger()

# Tavus conversation limits, in seconds
MAX_CALL_DURATION = 2400
PARTICIPANT_LEFT_TIMEOUT = 300
PARTICIPANT_ABSENT_TIMEOUT = 600


class StageTriggers:
    """Start each interview stage for a candidate row."""

    def __init__(
        self,
        settings: Settings,
        record_store: RecordStore,
        vapi_client: VapiClient,
        tavus_client: TavusClient | None = None,
        registry: RubricRegistry | None = None,
    ) -> None:
        self.settings = settings
        self.record_store = record_store
        self.vapi_client = vapi_client
        self.tavus_client = tavus_client
        self.registry = registry or RubricRegistry(settings.sheet_name)

    async def _mark_triggered(self, stage: Stage, row: int) -> None:
        rubric = self.registry.rule_for(stage)
        await self.record_store.update(
            self.settings.google_sheet_id,
            rubric.status_range(row),
            [[rubric.triggered_status]],
        )
        logger.info(
            "stage_status_updated",
            stage=stage.value,
            row=row,
            status=rubric.triggered_status,
        )

    @service_boundary
    async def trigger_screening_call(self, request: PhoneTriggerRequest) -> dict[str, Any]:
        """
        Start the phone screening call.

        The "Called" status is written first so the sheet automation does not
        dial the same candidate twice; if that write fails the call still goes out.

        Raises:
            ConfigurationError: Screening assistant or phone number not configured
            ExternalServiceError: Vapi rejected the call
        """
        assistant_id = self.settings.vapi_assistant_id
        phone_number_id = self.settings.vapi_phone_number_id
        if not assistant_id or not phone_number_id:
            raise ConfigurationError("VAPI_ASSISTANT_ID and VAPI_PHONE_NUMBER_ID are required")

        if request.row is not None:
            try:
                await self._mark_triggered(Stage.SCREENING, request.row)
            except Exception as e:
                logger.warning("screening_status_update_failed", row=request.row, error=str(e))

        rubric = self.registry.rule_for(Stage.SCREENING)
        call = await self.vapi_client.create_phone_call(
            assistant_id,
            phone_number_id,
            request.phone,
            metadata={
                "candidateName": request.name,
                "rowNumber": str(request.row) if request.row is not None else "",
                "stage": rubric.tag,
            },
        )

        return {
            "status": "call scheduled",
            "callResponse": call,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    @service_boundary
    async def trigger_technical_call(self, request: PhoneTriggerRequest) -> dict[str, Any]:
        """
        Start the technical phone interview.

        Raises:
            ConfigurationError: Technical assistant or phone number not configured
            RecordStoreError: Status write failed (no call is placed)
            ExternalServiceError: Vapi rejected the call
        """
        assistant_id = self.settings.lionagent_vapi_assistant_id
        phone_number_id = self.settings.lionagent_phone_number_id
        if not assistant_id or not phone_number_id:
            raise ConfigurationError(
                "LIONAGENT_VAPI_ASSISTANT_ID and LIONAGENT_PHONE_NUMBER_ID are required"
            )

        if request.row is not None:
            await self._mark_triggered(Stage.TECHNICAL, request.row)

        rubric = self.registry.rule_for(Stage.TECHNICAL)
        call = await self.vapi_client.create_phone_call(
            assistant_id,
            phone_number_id,
            request.phone,
            metadata={
                "candidateName": request.name,
                "rowNumber": request.row,
                "stage": rubric.tag,
            },
        )

        return {"status": "LionAgent call scheduled", "data": call}

    @service_boundary
    async def trigger_video_interview(
        self, request: VideoTriggerRequest, callback_base_url: str
    ) -> dict[str, Any]:
        """
        Create the video interview and store its id against the row.

        The conversation id written here is what the correlator scans for
        when the provider's completion callback arrives.

        Args:
            request: Candidate details
            callback_base_url: Public base URL the provider should call back

        Raises:
            ConfigurationError: Tavus credentials not configured
            ExternalServiceError: Tavus rejected the conversation
        """
        if (
            self.tavus_client is None
            or not self.settings.tavus_replica_id
            or not self.settings.tavus_persona_id
        ):
            raise ConfigurationError(
                "TAVUS_API_KEY, TAVUS_REPLICA_ID and TAVUS_PERSONA_ID are required"
            )

        if request.row is not None:
            await self._mark_triggered(Stage.VIDEO, request.row)

        payload = {
            "replica_id": self.settings.tavus_replica_id,
            "persona_id": self.settings.tavus_persona_id,
            "callback_url": f"{callback_base_url.rstrip('/')}/whaleagent-callback",
            "conversation_name": f"Behavioral Interview - {request.candidate_name}",
            "conversational_context": VIDEO_INTERVIEW_CONTEXT.format(
                candidate_name=request.candidate_name
            ),
            "properties": {
                "max_call_duration": MAX_CALL_DURATION,
                "participant_left_timeout": PARTICIPANT_LEFT_TIMEOUT,
                "participant_absent_timeout": PARTICIPANT_ABSENT_TIMEOUT,
                "enable_recording": True,
                "enable_transcription": True,
            },
        }
        conversation = await self.tavus_client.create_conversation(payload)

        conversation_id = conversation.get("conversation_id")
        conversation_url = conversation.get("conversation_url")
        if not conversation_id:
            raise ExternalServiceError("Tavus returned no conversation_id", service="tavus")

        if request.row is not None:
            rubric = self.registry.rule_for(Stage.VIDEO)
            await self.record_store.update(
                self.settings.google_sheet_id,
                rubric.correlation_range(request.row),
                [[conversation_id, conversation_url or "", datetime.now(UTC).isoformat()]],
            )

        logger.info(
            "video_interview_created",
            conversation_id=conversation_id,
            row=request.row,
        )

        return {
            "status": "Video interview invitation created",
            "conversationId": conversation_id,
            "conversationUrl": conversation_url,
            "candidateName": request.candidate_name,
            "candidateEmail": request.candidate_email,
            "emailSubject": VIDEO_INVITATION_SUBJECT,
            "emailBody": VIDEO_INVITATION_BODY.format(
                candidate_name=request.candidate_name,
                conversation_url=conversation_url,
            ),
            "message": (
                "Video interview link ready - send email manually or integrate with email service"
            ),
        }
