"""
Application configuration using Pydantic Settings.
Loads configuration from environment variables with sensible defaults.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Inline queue settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="INLINE_QUEUE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Lifecycle hooks are opt-in; reset() falls back to this value
    hooks_enabled: bool = False

    # Observability
    service_name: str = "inline-queue"
    metrics_enabled: bool = True
    log_level: str = "INFO"
    log_format: str = "console"  # json or console


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
