"""
Runtime configuration helpers for the FastAPI application.

Loads DATABASE_URL and the remaining settings from the process environment,
falling back to the .env file located in the project root.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the project root
BASE_DIR = Path(__file__).resolve().parents[1]

# Absolute path to .env
ENV_PATH = BASE_DIR / ".env"

# Load .env defaults without overriding environment variables provided by the platform
load_dotenv(dotenv_path=ENV_PATH, override=False)


class Settings(BaseSettings):
    # Required field, read from the environment or .env
    database_url: str = Field(..., alias="DATABASE_URL")

    app_name: str = Field(default="Social Backend", alias="APP_NAME")
    api_version: str = Field(default="0.1.0", alias="API_VERSION")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Two-factor authentication
    two_factor_issuer: str = Field(default="TRANSCENDENCE", alias="TWO_FACTOR_ISSUER")
    totp_valid_window: int = Field(default=1, ge=0, alias="TOTP_VALID_WINDOW")

    # Avatar uploads
    avatar_max_bytes: int = Field(default=2 * 1024 * 1024, gt=0, alias="AVATAR_MAX_BYTES")

    # Password policy bounds
    password_min_length: int = Field(default=8, ge=1, alias="PASSWORD_MIN_LENGTH")
    password_max_length: int = Field(default=20, ge=1, alias="PASSWORD_MAX_LENGTH")

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def allowed_origins(self) -> list[str]:
        origins = [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
        return origins or ["*"]


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
