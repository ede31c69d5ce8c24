"""Score extraction from free-text model evaluations."""

from __future__ import annotations

import re

from structlog import get_logger

logger = get_logger()


def extract_score(evaluation_text: str, pattern: re.Pattern[str] | None) -> str:
    """
    Pull a 1-5 score out of a model's evaluation.

    Best effort: the model is asked for an overall score but nothing forces
    it to follow the format, so a miss returns "" rather than raising.

    Args:
        evaluation_text: Raw model output
        pattern: Stage score pattern whose first group captures the digit,
            or None for stages that record no score

    Returns:
        "1" through "5", or "" when there is no pattern or no match
    """
    if pattern is None or not evaluation_text:
        return ""

    match = pattern.search(evaluation_text)
    if not match:
        logger.info("score_not_found", pattern=pattern.pattern)
        return ""

    return match.group(1)
