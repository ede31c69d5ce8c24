"""Rubric registry: per-stage prompts, score patterns and sheet targets.

Adding a stage is a new row in STAGE_RUBRICS; nothing downstream branches
on the stage.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Literal

from pydantic import BaseModel, ConfigDict
from structlog import get_logger

from hiring_pipeline.clients.sheets import a1_range
from hiring_pipeline.core.errors import NotFoundError
from hiring_pipeline.models.pipeline import Stage
from hiring_pipeline.services.prompts import (
    SCREENING_EVALUATION_PROMPT,
    TECHNICAL_EVALUATION_PROMPT,
    VIDEO_EVALUATION_PROMPT,
)

logger = get_logger()

DEFAULT_SHEET_NAME = "Call Queue"

ResultField = Literal["transcript", "score", "evaluation", "recording_url"]

# Each pattern matches the phrasing its stage prompt asks for; keep them separate.
TECHNICAL_SCORE_PATTERN = re.compile(r"overall assessment score.*?([1-5])", re.IGNORECASE)
VIDEO_SCORE_PATTERN = re.compile(r"overall score.*?([1-5])", re.IGNORECASE)


class Rubric(BaseModel):
    """Everything the dispatcher needs to evaluate and record one stage."""

    model_config = ConfigDict(frozen=True)

    stage: Stage
    tag: str  # agent tag carried in call metadata
    prompt_template: str
    score_pattern: re.Pattern[str] | None = None
    result_columns: tuple[str, str]
    result_layout: tuple[ResultField, ...]
    status_column: str
    triggered_status: str
    completed_status: str
    evaluation_key: str = "analysis"  # response field the evaluation text is returned under
    # Columns holding [conversationId, conversationUrl, sentAt] for stages whose
    # callbacks carry only a provider id.
    correlation_columns: tuple[str, str] | None = None
    sheet_name: str = DEFAULT_SHEET_NAME

    def result_range(self, row: int) -> str:
        """A1 range of the stage's result cells for a row."""
        start, end = self.result_columns
        return a1_range(self.sheet_name, start, row, end)

    def status_range(self, row: int) -> str:
        """A1 address of the stage's status cell for a row."""
        return a1_range(self.sheet_name, self.status_column, row)

    def correlation_range(self, row: int) -> str:
        """A1 range where the provider conversation details are stored for a row."""
        if self.correlation_columns is None:
            raise NotFoundError(
                f"Stage {self.stage} has no correlation columns",
                context={"stage": str(self.stage)},
            )
        start, end = self.correlation_columns
        return a1_range(self.sheet_name, start, row, end)

    def correlation_column_range(self) -> str:
        """Whole-column A1 range of the conversation id column."""
        if self.correlation_columns is None:
            raise NotFoundError(
                f"Stage {self.stage} has no correlation columns",
                context={"stage": str(self.stage)},
            )
        column = self.correlation_columns[0]
        return f"'{self.sheet_name}'!{column}:{column}"

    def result_values(
        self,
        *,
        transcript: str,
        score: str,
        evaluation: str,
        recording_url: str | None = None,
    ) -> list[list[str]]:
        """Order the result fields into the single sheet row this stage writes."""
        fields: dict[ResultField, str] = {
            "transcript": transcript,
            "score": score,
            "evaluation": evaluation,
            "recording_url": recording_url or "",
        }
        return [[fields[name] for name in self.result_layout]]


STAGE_RUBRICS: tuple[Rubric, ...] = (
    Rubric(
        stage=Stage.SCREENING,
        tag="zebraagent",
        prompt_template=SCREENING_EVALUATION_PROMPT,
        result_columns=("G", "I"),
        result_layout=("transcript", "score", "evaluation"),
        status_column="F",
        triggered_status="Called",
        completed_status="Completed",
    ),
    Rubric(
        stage=Stage.TECHNICAL,
        tag="lionagent",
        prompt_template=TECHNICAL_EVALUATION_PROMPT,
        score_pattern=TECHNICAL_SCORE_PATTERN,
        result_columns=("M", "O"),
        result_layout=("transcript", "score", "evaluation"),
        status_column="L",
        triggered_status="LionAgent Called",
        completed_status="Completed",
        evaluation_key="aiFeedback",
    ),
    Rubric(
        stage=Stage.VIDEO,
        tag="whaleagent",
        prompt_template=VIDEO_EVALUATION_PROMPT,
        score_pattern=VIDEO_SCORE_PATTERN,
        result_columns=("T", "W"),
        result_layout=("transcript", "score", "evaluation", "recording_url"),
        status_column="P",
        triggered_status="Video Interview Sent",
        completed_status="Video Completed",
        correlation_columns=("Q", "S"),
    ),
)


class RubricRegistry:
    """Keyed lookup from stage (or agent tag) to rubric."""

    def __init__(
        self,
        sheet_name: str = DEFAULT_SHEET_NAME,
        rubrics: Iterable[Rubric] = STAGE_RUBRICS,
    ) -> None:
        self._by_stage: dict[Stage, Rubric] = {
            rubric.stage: rubric.model_copy(update={"sheet_name": sheet_name})
            for rubric in rubrics
        }
        self._by_tag: dict[str, Stage] = {}
        for rubric in self._by_stage.values():
            self._by_tag[rubric.tag] = rubric.stage
            self._by_tag[rubric.stage.value] = rubric.stage

    def rule_for(self, stage: Stage) -> Rubric:
        """
        Return the rubric for a stage.

        Raises:
            NotFoundError: If no rubric is registered for the stage
        """
        try:
            return self._by_stage[stage]
        except KeyError:
            raise NotFoundError(
                f"No rubric registered for stage {stage}", context={"stage": str(stage)}
            ) from None

    def resolve_stage(self, tag: str | None, default: Stage = Stage.SCREENING) -> Stage:
        """
        Map a metadata stage tag to a stage.

        Accepts agent tags ("lionagent") and stage names ("technical").
        Missing or unknown tags fall back to ``default``.
        """
        if not tag:
            return default

        stage = self._by_tag.get(tag.strip().lower())
        if stage is None:
            logger.warning("unknown_stage_tag", tag=tag, default=default.value)
            return default
        return stage

    def stages(self) -> list[Stage]:
        """Registered stages in registration order."""
        return list(self._by_stage)
