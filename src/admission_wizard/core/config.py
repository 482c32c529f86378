"""
Application Configuration

Settings are read from environment variables (prefix ``ADMISSION_``) or a
local ``.env`` file.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

MEGABYTE = 1024 * 1024


class Settings(BaseSettings):
    """Runtime settings for the admission wizard engine."""

    model_config = SettingsConfigDict(
        env_prefix="ADMISSION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    python_env: str = "development"
    log_level: str = "INFO"

    # Backend
    api_base_url: str = "http://localhost:8080/api"
    request_timeout_seconds: float = 30.0
    dashboard_url: str = "http://localhost:5173/familia"

    # Upload limits (the wizard and the standalone uploader differ)
    wizard_max_file_size_bytes: int = 5 * MEGABYTE
    uploader_max_file_size_bytes: int = 10 * MEGABYTE

    @property
    def is_production(self) -> bool:
        return self.python_env == "production"

    @property
    def is_development(self) -> bool:
        return self.python_env == "development"


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()


settings = get_settings()
