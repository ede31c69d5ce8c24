"""Request body parsing shared by the webhook routes."""

from __future__ import annotations

import json
from typing import Any, TypeVar

from fastapi import HTTPException, Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from structlog import get_logger

logger = get_logger()

M = TypeVar("M", bound=BaseModel)


async def parse_json_body(
    request: Request, model: type[M], error_message: str = "Invalid payload"
) -> M:
    """
    Read and validate a JSON body.

    Providers and sheet automations post loosely-typed JSON, so bodies are
    parsed here instead of through FastAPI's signature binding; that keeps
    malformed input a 400 rather than a 422.

    Raises:
        HTTPException: 400 on invalid JSON, a non-object body, or a failed validation
    """
    body = await request.body()

    try:
        raw: Any = json.loads(body) if body else {}
    except json.JSONDecodeError as e:
        logger.warning("request_body_invalid_json", error=str(e))
        raise HTTPException(status_code=400, detail="Invalid JSON payload") from e

    if not isinstance(raw, dict):
        raise HTTPException(status_code=400, detail="JSON body must be an object")

    try:
        return model.model_validate(raw)
    except PydanticValidationError as e:
        logger.warning(
            "request_body_invalid",
            model=model.__name__,
            fields=[".".join(str(p) for p in err["loc"]) for err in e.errors()],
        )
        raise HTTPException(status_code=400, detail=error_message) from e
