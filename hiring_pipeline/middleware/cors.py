"""CORS middleware configuration."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hiring_pipeline.core.config import settings


def setup_cors(app: FastAPI) -> None:
    """
    Allow the sheet automation and dashboards to call the triggers.

    A wildcard origin cannot be combined with credentials, so credentials are
    only allowed when explicit origins are configured.
    """
    origins = settings.frontend_urls
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )
