"""Transcript evaluation through the OpenAI chat completions API."""

from __future__ import annotations

from openai import AsyncOpenAI
from structlog import get_logger

from hiring_pipeline.core.errors import EvaluationError

logger = get_logger()


def render_prompt(prompt_template: str, transcript: str) -> str:
    """Interpolate the raw transcript into a stage template."""
    return prompt_template.format(transcript=transcript)


class TranscriptEvaluator:
    """Single-shot transcript grader; one model call per invocation, no retry."""

    def __init__(self, client: AsyncOpenAI, model: str = "gpt-4o-mini") -> None:
        self.client = client
        self.model = model

    async def evaluate(self, prompt_template: str, transcript: str) -> str:
        """
        Grade a transcript with a stage rubric.

        Args:
            prompt_template: Stage template containing ``{transcript}``
            transcript: Full interview transcript

        Returns:
            The model's evaluation text

        Raises:
            openai.OpenAIError: On transport or API failure
            EvaluationError: If the model returned no content
        """
        prompt = render_prompt(prompt_template, transcript)

        logger.info(
            "evaluation_requested",
            model=self.model,
            transcript_length=len(transcript),
        )

        completion = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
        )

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise EvaluationError(
                "Model returned an empty evaluation",
                service="openai",
                context={"model": self.model},
            )

        logger.info("evaluation_generated", model=self.model, evaluation_length=len(content))
        return content
