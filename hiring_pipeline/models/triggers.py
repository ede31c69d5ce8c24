"""Pydantic models for stage-trigger and résumé-transfer requests."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _TriggerBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    row: int | None = None

    @field_validator("row", mode="before")
    @classmethod
    def blank_row_is_none(cls, v: object) -> object:
        """Sheet automations send "" for rows they could not resolve."""
        if v == "" or v is None:
            return None
        return v


class PhoneTriggerRequest(_TriggerBase):
    """Body for the screening and technical call triggers."""

    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)


class VideoTriggerRequest(_TriggerBase):
    """Body for the video interview trigger."""

    candidate_name: str = Field(min_length=1, alias="candidateName")
    candidate_email: str = Field(min_length=1, alias="candidateEmail")


class ResumeTransferRequest(BaseModel):
    """Body for the HubSpot → SharePoint résumé transfer webhook."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    file_id: str = Field(min_length=1, alias="fileId")
    applicant_name: str | None = Field(default=None, alias="applicantName")
