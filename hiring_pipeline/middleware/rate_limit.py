"""Rate limiting for endpoints that dial candidates."""

from fastapi import FastAPI
from slowapi import (
    Limiter,
    _rate_limit_exceeded_handler,  # type: ignore[reportPrivateUsage]
)
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

# Shared by the trigger routes' @limiter.limit decorators.
limiter = Limiter(key_func=get_remote_address)


def setup_rate_limiting(app: FastAPI) -> Limiter:
    """
    Attach the shared limiter to the application.

    Returns:
        Limiter instance used in route decorators
    """
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[reportUnknownMemberType]  # FastAPI handler
    return limiter
