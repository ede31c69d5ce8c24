"""Domain exceptions and service boundary decorator."""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

import aiohttp
import openai
from googleapiclient.errors import HttpError
from structlog import get_logger

logger = get_logger()

P = ParamSpec("P")
T = TypeVar("T")


class DomainError(Exception):
    """Base exception for all domain errors."""

    code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class NotFoundError(DomainError):
    """Resource not found."""

    code = "NOT_FOUND"


class ValidationError(DomainError):
    """Input validation failed."""

    code = "VALIDATION_ERROR"


class ExternalServiceError(DomainError):
    """External service (Vapi, Tavus, HubSpot, SharePoint) failed."""

    code = "EXTERNAL_SERVICE_ERROR"

    def __init__(
        self,
        message: str,
        service: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        ctx = context or {}
        if service:
            ctx["service"] = service
        super().__init__(message, ctx)


class EvaluationError(ExternalServiceError):
    """Language model call failed or returned nothing usable."""

    code = "EVALUATION_ERROR"


class RecordStoreError(ExternalServiceError):
    """Spreadsheet read or write failed."""

    code = "RECORD_STORE_ERROR"


class ConfigurationError(DomainError):
    """System misconfigured."""

    code = "CONFIGURATION_ERROR"


def service_boundary(func: Callable[P, T]) -> Callable[P, T]:
    """
    Convert native exceptions to domain exceptions at service entry points.

    Low-level SDK exceptions are translated so the API layer only ever
    sees DomainError subclasses.

    Usage:
        @service_boundary
        async def process_callback():
            await openai_client.chat.completions.create(...)  # OpenAIError -> EvaluationError
            await record_store.update(...)                    # HttpError -> RecordStoreError

    Args:
        func: Async service function to wrap

    Returns:
        Wrapped function that converts exceptions
    """

    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return await func(*args, **kwargs)  # type: ignore[misc]
        except DomainError:
            # Already a domain error, pass through
            raise
        except openai.OpenAIError as e:
            logger.error("model_api_error", function=func.__name__, error=str(e))
            raise EvaluationError(
                str(e), service="openai", context={"function": func.__name__}
            ) from e
        except HttpError as e:
            logger.error("record_store_error", function=func.__name__, error=str(e))
            raise RecordStoreError(
                str(e), service="google_sheets", context={"function": func.__name__}
            ) from e
        except aiohttp.ClientError as e:
            logger.error("external_api_error", function=func.__name__, error=str(e))
            raise ExternalServiceError(str(e), context={"function": func.__name__}) from e
        except Exception as e:
            logger.exception("unexpected_error", function=func.__name__)
            raise DomainError(
                str(e), context={"function": func.__name__, "type": type(e).__name__}
            ) from e

    return wrapper  # type: ignore[return-value]
