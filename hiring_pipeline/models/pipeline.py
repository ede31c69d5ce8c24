"""Pydantic models for pipeline stages and callback outcomes."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class Stage(StrEnum):
    """A stop in the recruitment pipeline."""

    SCREENING = "screening"
    TECHNICAL = "technical"
    VIDEO = "video"


class CallbackOutcome(StrEnum):
    """How a single callback delivery was resolved."""

    IGNORED = "ignored"  # non-terminal provider status
    ACKNOWLEDGED_EMPTY = "acknowledged_empty"  # terminal, no transcript
    ROW_UNRESOLVED = "row_unresolved"  # terminal, transcript, no sheet row
    PROCESSED = "processed"


class DispatchResult(BaseModel):
    """Summary of one callback's handling, returned to the API layer."""

    outcome: CallbackOutcome
    message: str
    stage: Stage | None = None
    stage_tag: str | None = None
    candidate_name: str | None = None
    row: int | None = None
    score: str = ""
    evaluation: str | None = None
    conversation_id: str | None = None
    recording_url: str | None = None

    @property
    def wrote_record(self) -> bool:
        """True when the sheet was written for this callback."""
        return self.outcome == CallbackOutcome.PROCESSED
