"""
Application configuration using pydantic-settings.
"""
from enum import Enum
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class WriteErrorPolicy(str, Enum):
    """What a mutation does with a database error."""
    IGNORE = "ignore"
    LOG = "log"
    RAISE = "raise"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "contribution-store"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./contributions.db"
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: float = 30.0

    # Store behaviour
    write_error_policy: WriteErrorPolicy = WriteErrorPolicy.IGNORE
    exclusive_outcomes: bool = False

    @field_validator("database_url")
    @classmethod
    def use_async_driver(cls, value: str) -> str:
        """Rewrite a driverless sqlite URL to the aiosqlite dialect."""
        if value.startswith("sqlite:"):
            return "sqlite+aiosqlite:" + value[len("sqlite:"):]
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
