"""
Service settings.
Loaded from environment variables prefixed with RETIREPLAN_ (or a local .env).
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the HTTP service."""

    model_config = SettingsConfigDict(
        env_prefix="RETIREPLAN_",
        env_file=".env",
        extra="ignore",
    )

    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    HOST: str = "127.0.0.1"
    PORT: int = 3000

    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ]
    )

    # request bodies above this size are rejected with 413
    MAX_CONTENT_LENGTH: int = 1024 * 1024

    # minimum retirement age for /calculate; None keeps the server rule (desired > current)
    DESIRED_AGE_FLOOR: Optional[int] = Field(default=None, ge=18, le=100)


@lru_cache
def get_settings() -> Settings:
    return Settings()
