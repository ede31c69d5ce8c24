"""Application configuration."""

import json
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Google Sheets (record store)
    google_sheet_id: str
    google_credentials_json: str
    sheet_name: str = "Call Queue"

    # OpenAI
    openai_api_key: str
    openai_model: str = "gpt-4o-mini"

    # Vapi (phone stages)
    vapi_api_key: str
    vapi_assistant_id: str | None = None
    vapi_phone_number_id: str | None = None
    lionagent_vapi_assistant_id: str | None = None
    lionagent_phone_number_id: str | None = None

    # Tavus (video stage)
    tavus_api_key: str | None = None
    tavus_replica_id: str | None = None
    tavus_persona_id: str | None = None

    # HubSpot / SharePoint (document transfer)
    hubspot_token: str | None = None
    sp_client_id: str | None = None
    sp_tenant_id: str | None = None
    sp_client_secret: str | None = None
    sp_site_url: str | None = None
    sp_folder_path: str = "Shared Documents"

    # Application
    log_level: str = "INFO"
    public_base_url: str | None = None
    trigger_rate_limit: str = "10/minute"
    expose_error_details: bool = False

    # Frontend (for CORS)
    frontend_url: str = "*"

    @property
    def frontend_urls(self) -> list[str]:
        """Parse frontend URLs from comma-separated env var."""
        return [url.strip() for url in self.frontend_url.split(",")]

    @property
    def google_credentials(self) -> dict[str, Any]:
        """Service-account info with the private key newlines restored."""
        info: dict[str, Any] = json.loads(self.google_credentials_json)
        info["private_key"] = info["private_key"].replace("\\n", "\n")
        return info

    @property
    def sharepoint_configured(self) -> bool:
        """True when every SharePoint credential is present."""
        return all(
            (self.sp_client_id, self.sp_tenant_id, self.sp_client_secret, self.sp_site_url)
        )

    @field_validator("google_credentials_json")
    @classmethod
    def validate_google_credentials(cls, v: str) -> str:
        """Validate the service-account JSON carries what JWT auth needs."""
        try:
            info = json.loads(v)
        except json.JSONDecodeError as e:
            raise ValueError("GOOGLE_CREDENTIALS_JSON must be valid JSON") from e

        if not isinstance(info, dict):
            raise ValueError("GOOGLE_CREDENTIALS_JSON must be a JSON object")

        missing = [key for key in ("client_email", "private_key") if not info.get(key)]
        if missing:
            raise ValueError(f"GOOGLE_CREDENTIALS_JSON is missing: {', '.join(missing)}")
        return v


settings = Settings()
