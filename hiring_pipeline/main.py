"""FastAPI application entry point."""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI
from openai import AsyncOpenAI

from hiring_pipeline.api.callbacks import router as callbacks_router
from hiring_pipeline.api.triggers import router as triggers_router
from hiring_pipeline.clients.hubspot import HubSpotFilesClient
from hiring_pipeline.clients.sharepoint import SharePointClient
from hiring_pipeline.clients.sheets import SheetsRecordStore
from hiring_pipeline.clients.tavus import TavusClient
from hiring_pipeline.clients.vapi import VapiClient
from hiring_pipeline.core.config import Settings, settings
from hiring_pipeline.core.logging import logger, setup_logging
from hiring_pipeline.middleware import (
    LoggingMiddleware,
    RequestIDMiddleware,
    setup_cors,
    setup_exception_handlers,
    setup_rate_limiting,
)
from hiring_pipeline.services.correlator import ConversationCorrelator
from hiring_pipeline.services.dispatcher import CallbackDispatcher
from hiring_pipeline.services.documents import ResumeTransferService
from hiring_pipeline.services.evaluator import TranscriptEvaluator
from hiring_pipeline.services.rubrics import RubricRegistry
from hiring_pipeline.services.triggers import StageTriggers

VERSION = "3.0.0"

# Configure logging
setup_logging()

_started_at = time.monotonic()


def build_services(app: FastAPI, config: Settings) -> AsyncOpenAI:
    """
    Construct every external collaborator once and store them on app.state.

    Returns:
        The OpenAI client, so the lifespan can close it on shutdown
    """
    record_store = SheetsRecordStore(config.google_credentials)
    openai_client = AsyncOpenAI(api_key=config.openai_api_key)
    registry = RubricRegistry(config.sheet_name)

    document_store: SharePointClient | None = None
    if config.sharepoint_configured:
        document_store = SharePointClient(
            client_id=config.sp_client_id or "",
            tenant_id=config.sp_tenant_id or "",
            client_secret=config.sp_client_secret or "",
            site_url=config.sp_site_url or "",
            folder_path=config.sp_folder_path,
        )

    app.state.dispatcher = CallbackDispatcher(
        record_store=record_store,
        evaluator=TranscriptEvaluator(openai_client, config.openai_model),
        correlator=ConversationCorrelator(record_store, config.google_sheet_id),
        spreadsheet_id=config.google_sheet_id,
        registry=registry,
        document_store=document_store,
    )
    app.state.triggers = StageTriggers(
        settings=config,
        record_store=record_store,
        vapi_client=VapiClient(config.vapi_api_key),
        tavus_client=TavusClient(config.tavus_api_key) if config.tavus_api_key else None,
        registry=registry,
    )
    app.state.resume_transfer = (
        ResumeTransferService(HubSpotFilesClient(config.hubspot_token), document_store)
        if config.hubspot_token and document_store is not None
        else None
    )

    return openai_client


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    # Startup
    logger.info("application_starting", sheet_name=settings.sheet_name)
    openai_client = build_services(app, settings)
    logger.info(
        "application_ready",
        sharepoint=settings.sharepoint_configured,
        video_stage=bool(settings.tavus_api_key),
    )

    yield

    # Shutdown
    logger.info("application_shutting_down")
    await openai_client.close()
    logger.info("application_stopped")


# Create FastAPI app
app = FastAPI(
    title="AI Recruitment Pipeline",
    description="Webhook glue between the candidate sheet and the AI interview stages",
    version=VERSION,
    lifespan=lifespan,
)

# Last added runs first: the request ID is bound before LoggingMiddleware logs
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestIDMiddleware)
setup_cors(app)
setup_rate_limiting(app)
setup_exception_handlers(app)

# Include routers
app.include_router(triggers_router)
app.include_router(callbacks_router)


@app.get("/health")
async def health_check() -> dict[str, Any]:
    """
    Health check endpoint.

    Reports which credentials are configured (never their values).

    Returns:
        dict: Health status, uptime and configuration presence flags
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "uptime": round(time.monotonic() - _started_at, 3),
        "environment": {
            "hasHubspotToken": bool(settings.hubspot_token),
            "hasOpenAIKey": bool(settings.openai_api_key),
            "hasGoogleSheetId": bool(settings.google_sheet_id),
            "hasSharePointConfig": settings.sharepoint_configured,
            "hasVapiKey": bool(settings.vapi_api_key),
            "hasVapiAssistantId": bool(settings.vapi_assistant_id),
            "hasLionAgentAssistantId": bool(settings.lionagent_vapi_assistant_id),
            "hasLionAgentPhoneId": bool(settings.lionagent_phone_number_id),
            "hasTavusApiKey": bool(settings.tavus_api_key),
            "hasTavusPersonaId": bool(settings.tavus_persona_id),
            "hasTavusReplicaId": bool(settings.tavus_replica_id),
        },
    }


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint."""
    return {
        "message": "AI Recruitment Pipeline",
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "availableEndpoints": [
            "GET / - Server status",
            "GET /health - Health check",
            "POST /webhook - SharePoint file upload",
            "POST /zebraagent-trigger - Phone screening",
            "POST /lionagent-trigger - Technical interview",
            "POST /whaleagent-trigger - Video behavioral interview",
            "POST /vapi-callback - Process phone call results",
            "POST /whaleagent-callback - Process video interview results",
        ],
        "recruitmentPipeline": {
            "stage1": "ZebraAgent - Phone Screening",
            "stage2": "LionAgent - Technical Interview",
            "stage3": "WhaleAgent - Video Behavioral Interview",
            "stage4": "Human Decision",
        },
        "version": VERSION,
    }
