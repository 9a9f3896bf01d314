"""
Application configuration models and helpers.

Centralizes settings management so the companion API, the terminal client and
the core services share one read-only configuration surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file into the process env."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        os.environ[key] = value.strip().strip('"').strip("'")


_load_env_file()


class UnsplashSettings(BaseSettings):
    """Credentials and endpoints for the Unsplash OAuth and REST APIs."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    access_key: str = Field(..., validation_alias="UNSPLASH_ACCESS_KEY")
    secret_key: str = Field(..., validation_alias="UNSPLASH_SECRET_KEY")
    redirect_uri: str = Field(
        "urn:ietf:wg:oauth:2.0:oob",
        validation_alias="UNSPLASH_REDIRECT_URI",
        description="Redirect target registered for the application.",
    )
    access_scope: str = Field(
        "public read_user write_likes",
        validation_alias="UNSPLASH_ACCESS_SCOPE",
        description="Space separated scopes requested during authorization.",
    )
    auth_base_url: str = Field(
        "https://unsplash.com", validation_alias="UNSPLASH_AUTH_BASE_URL"
    )
    api_base_url: str = Field(
        "https://api.unsplash.com", validation_alias="UNSPLASH_API_BASE_URL"
    )

    @field_validator("auth_base_url", "api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")


class FeedSettings(BaseSettings):
    """Pagination parameters for the photo feed."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    page_size: int = Field(10, ge=1, le=30, validation_alias="IMAGEFEED_FEED_PAGE_SIZE")


class SecuritySettings(BaseSettings):
    """Where and how the bearer token is kept."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    token_encryption_secret: Optional[str] = Field(
        None,
        validation_alias="TOKEN_ENCRYPTION_SECRET",
        description="Secret used to derive the key that encrypts the stored token.",
    )
    token_db_path: Optional[str] = Field(
        None,
        validation_alias="TOKEN_DB_PATH",
        description="SQLite file for the token. The token stays in memory when unset.",
    )


class AppSettings(BaseSettings):
    """Root settings object."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    http_timeout_seconds: float = Field(
        10.0,
        gt=0,
        validation_alias="IMAGEFEED_HTTP_TIMEOUT",
        description="Default request timeout handed to the HTTP transport.",
    )
    unsplash: UnsplashSettings = Field(default_factory=UnsplashSettings)
    feed: FeedSettings = Field(default_factory=FeedSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "FeedSettings",
    "SecuritySettings",
    "UnsplashSettings",
    "get_settings",
]
