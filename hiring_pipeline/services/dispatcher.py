"""Callback dispatch: turn provider completion events into sheet results.

Every delivery is handled to completion on its own. There is no dedup of
redelivered events; a second delivery re-evaluates the transcript and
overwrites the same cells (last write wins).
"""

from __future__ import annotations

import time
from datetime import UTC, datetime

from structlog import get_logger

from hiring_pipeline.core.errors import service_boundary
from hiring_pipeline.models.callbacks import (
    CallbackEvent,
    CallEnded,
    ConversationEnded,
    IgnoredEvent,
)
from hiring_pipeline.models.pipeline import CallbackOutcome, DispatchResult, Stage
from hiring_pipeline.services.correlator import ConversationCorrelator
from hiring_pipeline.services.evaluator import TranscriptEvaluator
from hiring_pipeline.services.rubrics import Rubric, RubricRegistry
from hiring_pipeline.services.scoring import extract_score
from hiring_pipeline.types import DocumentStore, RecordStore

logger = get_logger()


class CallbackDispatcher:
    """Validate, evaluate and record one provider callback at a time."""

    def __init__(
        self,
        record_store: RecordStore,
        evaluator: TranscriptEvaluator,
        correlator: ConversationCorrelator,
        spreadsheet_id: str,
        registry: RubricRegistry | None = None,
        document_store: DocumentStore | None = None,
    ) -> None:
        self.record_store = record_store
        self.evaluator = evaluator
        self.correlator = correlator
        self.spreadsheet_id = spreadsheet_id
        self.registry = registry or RubricRegistry()
        self.document_store = document_store

    async def dispatch(self, event: CallbackEvent) -> DispatchResult:
        """Route a decoded event to its handler."""
        match event:
            case ConversationEnded():
                return await self.handle_conversation_event(event)
            case CallEnded():
                return await self.handle_call_event(event)
            case IgnoredEvent(source="conversation"):
                return await self.handle_conversation_event(event)
            case _:
                return await self.handle_call_event(event)

    @service_boundary
    async def handle_call_event(self, event: CallEnded | IgnoredEvent) -> DispatchResult:
        """
        Process a phone-stage callback.

        The row and stage come straight from the metadata attached when the
        call was placed; a missing stage tag means screening.

        Returns:
            DispatchResult describing which terminal state the callback reached

        Raises:
            EvaluationError: Model call failed (nothing written)
            RecordStoreError: Sheet write failed (evaluation is lost)
        """
        if isinstance(event, IgnoredEvent):
            logger.info("call_callback_ignored", status=event.status)
            return DispatchResult(
                outcome=CallbackOutcome.IGNORED,
                message="Not end-of-call-report; ignoring.",
            )

        if not event.transcript:
            logger.info("call_callback_without_transcript", row=event.row)
            return DispatchResult(
                outcome=CallbackOutcome.ACKNOWLEDGED_EMPTY,
                message="No transcript; nothing to process.",
                candidate_name=event.candidate_name,
                row=event.row,
            )

        if event.row is None:
            logger.warning("call_callback_without_row", call_id=event.call_id)
            return DispatchResult(
                outcome=CallbackOutcome.ROW_UNRESOLVED,
                message="No row number; nothing to process.",
                candidate_name=event.candidate_name,
            )

        stage = self.registry.resolve_stage(event.stage_tag)
        rubric = self.registry.rule_for(stage)

        logger.info(
            "call_callback_processing",
            stage=stage.value,
            row=event.row,
            candidate_name=event.candidate_name,
            transcript_length=len(event.transcript),
        )

        score, evaluation = await self._evaluate_and_record(
            rubric, event.row, event.transcript
        )

        return DispatchResult(
            outcome=CallbackOutcome.PROCESSED,
            message=f"{stage.value.capitalize()} callback processed and sheet updated",
            stage=stage,
            stage_tag=rubric.tag,
            candidate_name=event.candidate_name,
            row=event.row,
            score=score,
            evaluation=evaluation,
        )

    @service_boundary
    async def handle_conversation_event(
        self, event: ConversationEnded | IgnoredEvent
    ) -> DispatchResult:
        """
        Process a video-stage callback.

        Video callbacks carry only the provider's conversation id, so the row
        is found through the correlator before anything else happens.

        Raises:
            EvaluationError: Model call failed (nothing written)
            RecordStoreError: Correlation read or sheet write failed
        """
        if isinstance(event, IgnoredEvent):
            logger.info("conversation_callback_ignored", status=event.status)
            return DispatchResult(
                outcome=CallbackOutcome.IGNORED,
                message=f"Conversation status: {event.status}",
            )

        if not event.transcript:
            logger.info(
                "conversation_callback_without_transcript",
                conversation_id=event.conversation_id,
            )
            return DispatchResult(
                outcome=CallbackOutcome.ACKNOWLEDGED_EMPTY,
                message="No transcript available",
                conversation_id=event.conversation_id,
            )

        rubric = self.registry.rule_for(Stage.VIDEO)
        row = await self.correlator.find_row_by_conversation_id(event.conversation_id, rubric)

        if row is None:
            return DispatchResult(
                outcome=CallbackOutcome.ROW_UNRESOLVED,
                message="No row found for conversation; nothing recorded.",
                stage=Stage.VIDEO,
                stage_tag=rubric.tag,
                conversation_id=event.conversation_id,
                recording_url=event.recording_url,
            )

        logger.info(
            "conversation_callback_processing",
            conversation_id=event.conversation_id,
            row=row,
            transcript_length=len(event.transcript),
        )

        score, evaluation = await self._evaluate_and_record(
            rubric, row, event.transcript, recording_url=event.recording_url
        )

        if self.document_store is not None:
            await self._archive_analysis(self.document_store, event.conversation_id, evaluation)

        return DispatchResult(
            outcome=CallbackOutcome.PROCESSED,
            message="Video interview processed successfully",
            stage=Stage.VIDEO,
            stage_tag=rubric.tag,
            row=row,
            score=score,
            evaluation=evaluation,
            conversation_id=event.conversation_id,
            recording_url=event.recording_url,
        )

    async def _evaluate_and_record(
        self,
        rubric: Rubric,
        row: int,
        transcript: str,
        recording_url: str | None = None,
    ) -> tuple[str, str]:
        """Evaluate once, extract the score, write results then status."""
        evaluation = await self.evaluator.evaluate(rubric.prompt_template, transcript)
        score = extract_score(evaluation, rubric.score_pattern)

        await self.record_store.update(
            self.spreadsheet_id,
            rubric.result_range(row),
            rubric.result_values(
                transcript=transcript,
                score=score,
                evaluation=evaluation,
                recording_url=recording_url,
            ),
        )
        await self.record_store.update(
            self.spreadsheet_id,
            rubric.status_range(row),
            [[rubric.completed_status]],
        )

        logger.info(
            "callback_recorded",
            stage=rubric.stage.value,
            row=row,
            score=score or None,
        )
        return score, evaluation

    async def _archive_analysis(
        self, document_store: DocumentStore, conversation_id: str | None, evaluation: str
    ) -> None:
        """Upload a text copy of the video analysis; failures never fail the callback."""
        file_name = f"WhaleAgent_Analysis_{conversation_id}_{int(time.time() * 1000)}.txt"
        content = (
            "WHALEAGENT VIDEO INTERVIEW ANALYSIS\n\n"
            f"Conversation ID: {conversation_id}\n"
            f"Date: {datetime.now(UTC).isoformat()}\n\n"
            f"{evaluation}"
        ).encode()

        try:
            await document_store.upload(content, file_name, content_type="text/plain")
            logger.info("video_analysis_archived", file_name=file_name)
        except Exception as e:
            logger.warning("video_analysis_archive_failed", file_name=file_name, error=str(e))
