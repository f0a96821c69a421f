"""
Application Settings (Pydantic Settings).

Loads configuration from environment variables (.env file or system env).

The Notion session cookies (``token_v2`` and ``file_token``) are read once at
process start and handed to the exporter explicitly; nothing in the export
core reads the environment.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # ========================================================================
    # NOTION CREDENTIALS (opaque session cookies)
    # ========================================================================
    NOTION_TOKEN_V2: str = Field(default="", description="Notion `token_v2` cookie value")
    NOTION_FILE_TOKEN: str = Field(default="", description="Notion `file_token` cookie value")
    NOTION_API_BASE_URL: str = Field(
        default="https://www.notion.so/api/v3/",
        description="Base URL of Notion's private v3 API",
    )

    # ========================================================================
    # EXPORT DEFAULTS
    # ========================================================================
    EXPORT_TIME_ZONE: str = Field(default="UTC")
    EXPORT_LOCALE: str = Field(default="en")
    EXPORT_COLLECTION_VIEW_EXPORT_TYPE: str = Field(
        default="all",
        description="Export all database rows or only the current view",
        pattern="^(currentView|all)$",
    )
    EXPORT_POLL_INTERVAL_MS: int = Field(
        default=1000, gt=0, description="Delay before each export task poll in milliseconds"
    )
    EXPORT_TIMEOUT_SECONDS: float = Field(
        default=0,
        ge=0,
        description="Deadline for an export task to finish (0 = wait indefinitely)",
    )

    # ========================================================================
    # HTTP
    # ========================================================================
    HTTP_TIMEOUT_SECONDS: float = Field(
        default=30, gt=0, description="Timeout for each individual Notion HTTP call"
    )

    # ========================================================================
    # LOGGING
    # ========================================================================
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    LOG_FORMAT: str = Field(default="json", pattern="^(json|text)$")

    @property
    def export_timeout(self) -> float | None:
        """Export deadline in seconds, or None for no deadline."""
        return self.EXPORT_TIMEOUT_SECONDS or None
