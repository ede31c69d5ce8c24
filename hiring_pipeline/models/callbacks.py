"""Inbound provider callback payloads and their decoded event variants.

Raw payloads are validated once at the HTTP boundary and decoded into one of
three variants so the dispatcher never inspects provider JSON directly:

- CallEnded: a Vapi end-of-call report
- ConversationEnded: a Tavus conversation that reached ``ended``
- IgnoredEvent: any other status ping from either provider
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

CALL_TERMINAL_STATUS = "end-of-call-report"
CONVERSATION_TERMINAL_STATUS = "ended"


# ============================================
# Raw payloads (Vapi)
# ============================================


class CallMetadata(BaseModel):
    """Metadata attached when the call was placed and echoed back by Vapi."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    candidate_name: str | None = Field(default=None, alias="candidateName")
    row_number: Any = Field(default=None, alias="rowNumber")
    stage: str | None = None

    @property
    def row(self) -> int | None:
        """Row number as an int, or None for anything but a positive integer."""
        if isinstance(self.row_number, bool):
            return None
        if isinstance(self.row_number, int):
            return self.row_number if self.row_number > 0 else None
        if isinstance(self.row_number, str) and self.row_number.strip().isdigit():
            row = int(self.row_number.strip())
            return row if row > 0 else None
        return None


class VapiCall(BaseModel):
    """Call object nested in a Vapi server message."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    metadata: CallMetadata | None = None


class VapiMessage(BaseModel):
    """Vapi server message envelope."""

    model_config = ConfigDict(extra="ignore")

    type: str | None = None
    transcript: str | None = None
    call: VapiCall | None = None


class VapiCallbackPayload(BaseModel):
    """Body POSTed by Vapi to the call callback URL."""

    model_config = ConfigDict(extra="ignore")

    message: VapiMessage | None = None


# ============================================
# Raw payloads (Tavus)
# ============================================


class TavusCallbackPayload(BaseModel):
    """Body POSTed by Tavus to the conversation callback URL."""

    model_config = ConfigDict(extra="ignore")

    conversation_id: str | None = None
    status: str | None = None
    transcript: str | list[dict[str, Any]] | None = None
    recording_url: str | None = None

    def transcript_text(self) -> str:
        """Flatten a turn list into ``role: content`` lines; pass text through."""
        if self.transcript is None:
            return ""
        if isinstance(self.transcript, str):
            return self.transcript
        lines = [
            f"{turn.get('role', 'unknown')}: {turn.get('content', '')}"
            for turn in self.transcript
            if turn.get("content")
        ]
        return "\n".join(lines)


# ============================================
# Decoded events
# ============================================


class CallEnded(BaseModel):
    """Terminal phone-call event."""

    kind: Literal["call_ended"] = "call_ended"
    transcript: str
    candidate_name: str = "Unknown"
    row: int | None = None
    stage_tag: str | None = None
    call_id: str | None = None


class ConversationEnded(BaseModel):
    """Terminal video-conversation event."""

    kind: Literal["conversation_ended"] = "conversation_ended"
    transcript: str
    conversation_id: str | None = None
    recording_url: str | None = None


class IgnoredEvent(BaseModel):
    """Non-terminal status update from either provider."""

    kind: Literal["ignored"] = "ignored"
    source: Literal["call", "conversation"]
    status: str | None = None


CallbackEvent = CallEnded | ConversationEnded | IgnoredEvent


def decode_call_callback(payload: VapiCallbackPayload) -> CallEnded | IgnoredEvent:
    """Decode a Vapi body into a terminal call event or an ignorable ping."""
    message = payload.message
    if message is None or message.type != CALL_TERMINAL_STATUS:
        return IgnoredEvent(source="call", status=message.type if message else None)

    call = message.call or VapiCall()
    metadata = call.metadata or CallMetadata()

    return CallEnded(
        transcript=message.transcript or "",
        candidate_name=metadata.candidate_name or "Unknown",
        row=metadata.row,
        stage_tag=metadata.stage,
        call_id=call.id,
    )


def decode_conversation_callback(
    payload: TavusCallbackPayload,
) -> ConversationEnded | IgnoredEvent:
    """Decode a Tavus body into a terminal conversation event or an ignorable ping."""
    if payload.status != CONVERSATION_TERMINAL_STATUS:
        return IgnoredEvent(source="conversation", status=payload.status)

    return ConversationEnded(
        transcript=payload.transcript_text(),
        conversation_id=payload.conversation_id,
        recording_url=payload.recording_url,
    )
