"""Application-wide configuration powered by pydantic-settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_VERSION = "0.1.0"


class Settings(BaseSettings):
    """Runtime settings loaded from environment or .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    environment: Literal["development", "staging", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )
    # Upper bound for a single provider round trip; a timeout surfaces as NetworkError.
    gateway_timeout_seconds: float = Field(default=60.0, alias="GATEWAY_TIMEOUT_SECONDS")
    ollama_url: str = Field(default="http://localhost:11434", alias="OLLAMA_URL")

    # Prompt and response bodies may hold secrets or private code; opt in explicitly.
    log_payloads: bool = Field(default=False, alias="LOG_PAYLOADS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    command_timeout_seconds: float = Field(default=120.0, alias="COMMAND_TIMEOUT_SECONDS")
    editor_command: str = Field(default="code", alias="EDITOR_COMMAND")

    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=8765, alias="PORT")


@lru_cache(1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
