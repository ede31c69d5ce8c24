"""FastAPI dependencies resolving the collaborators built at startup."""

from fastapi import Request

from hiring_pipeline.core.errors import ConfigurationError
from hiring_pipeline.services.dispatcher import CallbackDispatcher
from hiring_pipeline.services.documents import ResumeTransferService
from hiring_pipeline.services.triggers import StageTriggers


def get_dispatcher(request: Request) -> CallbackDispatcher:
    """Callback dispatcher stored on app.state by the lifespan."""
    dispatcher: CallbackDispatcher | None = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        raise ConfigurationError("Callback dispatcher not initialized")
    return dispatcher


def get_triggers(request: Request) -> StageTriggers:
    """Stage trigger service stored on app.state by the lifespan."""
    triggers: StageTriggers | None = getattr(request.app.state, "triggers", None)
    if triggers is None:
        raise ConfigurationError("Stage triggers not initialized")
    return triggers


def get_resume_transfer(request: Request) -> ResumeTransferService:
    """Résumé transfer service; absent when HubSpot or SharePoint is unconfigured."""
    service: ResumeTransferService | None = getattr(request.app.state, "resume_transfer", None)
    if service is None:
        raise ConfigurationError(
            "Résumé transfer needs HUBSPOT_TOKEN and SharePoint credentials"
        )
    return service
