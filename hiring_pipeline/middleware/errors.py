"""Standardized error handling."""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from structlog import get_logger

from hiring_pipeline.core.config import settings
from hiring_pipeline.core.errors import DomainError

logger = get_logger()

# Map domain error codes to HTTP status codes
ERROR_STATUS_MAP = {
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "VALIDATION_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "EXTERNAL_SERVICE_ERROR": status.HTTP_502_BAD_GATEWAY,
    "EVALUATION_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "RECORD_STORE_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "CONFIGURATION_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "DOMAIN_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error_body(request: Request, code: str, message: str) -> dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "request_id": getattr(request.state, "request_id", None),
        }
    }


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """
    Translate a domain exception into its HTTP response.

    Callback processing failures (evaluation or sheet write) surface here as
    500s so the provider knows the delivery was not recorded.
    """
    http_status = ERROR_STATUS_MAP.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.warning(
        "domain_error_handled",
        error_code=exc.code,
        http_status=http_status,
        message=exc.message,
        context=exc.context,
    )

    content = _error_body(request, exc.code, exc.message)
    if settings.expose_error_details and exc.context:
        content["error"]["details"] = exc.context

    return JSONResponse(status_code=http_status, content=content)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Handle HTTPException and return standardized error format.

    Error format:
    {
        "error": {
            "code": "HTTP_XXX",
            "message": "Error message",
            "request_id": "uuid"
        }
    }
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, f"HTTP_{exc.status_code}", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle RequestValidationError with the Pydantic error list attached."""
    content = _error_body(request, "VALIDATION_ERROR", "Invalid request data")
    content["error"]["details"] = exc.errors()
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=content)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the unexpected exception with its traceback and return a generic 500."""
    logger.exception("unhandled_exception", error_type=type(exc).__name__)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(request, "INTERNAL_ERROR", "An unexpected error occurred"),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Configure exception handlers for the application.

    Registers handlers for:
    - DomainError
    - HTTPException
    - RequestValidationError
    - General Exception (catch-all)
    """
    app.add_exception_handler(DomainError, domain_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, general_exception_handler)  # type: ignore[arg-type]
