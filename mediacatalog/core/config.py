"""Application settings parsed from environment variables and defaults."""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAL_BASE_URL = "https://api.mystudieslist.net/v2/"


class Settings(BaseSettings):
    """Provider configuration loaded from environment variables."""

    app_name: str = "Media Catalog Providers"
    environment: str = "development"
    log_level: str = "INFO"

    mal_client_id: Optional[str] = None
    mal_base_url: str = DEFAULT_MAL_BASE_URL
    mal_page_limit: int = 20

    http_timeout_seconds: float = 15.0
    http_max_attempts: int = 3

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str | None) -> str:
        """Upper-case log levels so `debug` and `DEBUG` behave the same."""
        if not value or not str(value).strip():
            return "INFO"
        return str(value).strip().upper()

    @field_validator("mal_base_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        """Keep relative namespace paths joined under the versioned prefix."""
        stripped = value.strip()
        if not stripped:
            return DEFAULT_MAL_BASE_URL
        return stripped if stripped.endswith("/") else f"{stripped}/"

    @field_validator("mal_page_limit", "http_max_attempts")
    @classmethod
    def _require_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings to avoid re-parsing environment variables."""
    return Settings()


settings = get_settings()
