"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Optional so the session still starts; analysis reports a configuration error instead.
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-3.5-turbo"
    openai_base_url: str | None = None
    github_token: SecretStr | None = None
    tree_ref: str = "main"
    max_content_chars: int = 5_000
    analysis_temperature: float = 0.2
    analysis_max_tokens: int = 1_000
    rate_limit_retry_delay: float = 30.0
    max_rate_limit_retries: int = 1
    http_timeout: float = 30.0
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
