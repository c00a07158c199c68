"""Application settings loaded from the environment and an optional ``.env`` file."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the Vangmaya API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    API_PREFIX: str = "/v1"
    LOG_LEVEL: str = "INFO"
    SERVICE_NAME: str = "vangmaya-api"
    CORS_ORIGINS: str = "*"

    # Ingestion is disabled while the secret is empty.
    SCRIPTURE_ADMIN_SECRET: str = ""
    SCRIPTURE_DATA_DIR: Path = Path("data/scripture")
    SCRIPTURE_SLUG: str = Field(default="bhagavad-gita", min_length=1)
    SCRIPTURE_FS_EPHEMERAL: bool = False

    METRICS_ENABLED: bool = True
    METRICS_NAMESPACE: str = "vangmaya"

    def get_cors_origins_list(self) -> list[str]:
        """Split the comma-separated ``CORS_ORIGINS`` value."""

        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
