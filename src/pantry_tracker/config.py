"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    environment: str = _ENVIRONMENT
    debug: bool = False
    log_level: str = "INFO"
    display_max_digits: int = 2
    table_max_digits: int = 1

    model_config = SettingsConfigDict(
        env_prefix="PANTRY_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
