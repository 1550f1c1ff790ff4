"""Application configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Network loaded at startup (JSON network document)
    network_path: Optional[Path] = None

    # Application
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
