"""Entra group members configuration settings."""

from typing import Any, List
import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog

logger = structlog.stdlib.get_logger().bind(component="config")


class EntraSettings(BaseSettings):
    """Microsoft Entra ID / Graph configuration settings."""

    AZURE_TENANT_ID: str = Field(default="", alias="AZURE_TENANT_ID")
    AZURE_CLIENT_ID: str = Field(default="", alias="AZURE_CLIENT_ID")
    AZURE_CLIENT_SECRET: str | None = Field(default=None, alias="AZURE_CLIENT_SECRET")
    GRAPH_API_ENDPOINT: str = Field(
        default="https://graph.microsoft.com/v1.0", alias="GRAPH_API_ENDPOINT"
    )
    # JSON list or comma separated string, see `scopes`
    GRAPH_SCOPES: str = Field(
        default="https://graph.microsoft.com/.default", alias="GRAPH_SCOPES"
    )
    GRAPH_TIMEOUT_SECONDS: int = Field(default=60, alias="GRAPH_TIMEOUT_SECONDS")
    GRAPH_MAX_RETRIES: int = Field(default=3, alias="GRAPH_MAX_RETRIES")
    GRAPH_PAGE_SIZE: int = Field(default=999, alias="GRAPH_PAGE_SIZE")

    @field_validator("GRAPH_SCOPES", mode="before")
    @classmethod
    def _validate_scopes(cls, v: Any) -> Any:
        """Validate the GRAPH_SCOPES field.

        Args:
            cls: The class itself.
            v: The raw value of the GRAPH_SCOPES field.

        Returns:
            The value as a string, JSON lists are checked for validity.
        """
        if v is None:
            return "https://graph.microsoft.com/.default"
        if isinstance(v, (list, tuple)):
            return json.dumps(list(v))
        if isinstance(v, str) and v.strip().startswith("["):
            try:
                json.loads(v)
            except (json.JSONDecodeError, ValueError) as e:
                logger.error("failed_to_parse_graph_scopes", error=str(e))
                raise ValueError(f"GRAPH_SCOPES must be valid JSON: {e}")
        return v

    @property
    def scopes(self) -> List[str]:
        """Parsed list of OAuth scopes requested for Graph tokens."""
        s = self.GRAPH_SCOPES.strip()
        if s.startswith("["):
            return [str(scope) for scope in json.loads(s)]
        return [scope.strip() for scope in s.split(",") if scope.strip()]

    @property
    def authority(self) -> str:
        """Login authority for the configured tenant."""
        return f"https://login.microsoftonline.com/{self.AZURE_TENANT_ID}"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class MembershipReportSettings(BaseSettings):
    """Group membership report settings."""

    GROUP_NAME_PREFIX: str = Field(default="", alias="GROUP_NAME_PREFIX")
    REPORT_OUTPUT_PATH: str = Field(default="", alias="REPORT_OUTPUT_PATH")
    # "HH:MM" daily run time for the scheduler; empty disables scheduling
    REPORT_SCHEDULE_TIME: str = Field(default="", alias="REPORT_SCHEDULE_TIME")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Entra group members configuration settings."""

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    # Integration settings
    entra: EntraSettings

    # Functionality settings
    membership_report: MembershipReportSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production."""
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        settings_map = {
            "entra": EntraSettings,
            "membership_report": MembershipReportSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the settings instance
settings = Settings()
