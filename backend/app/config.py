"""
Configuration for CodeSense Backend.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000)
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    # CORS
    ALLOWED_ORIGINS: str = Field(default="*")

    # Archive (Redis)
    REDIS_URL: Optional[str] = Field(default=None)
    REDIS_TIMEOUT_SECONDS: int = Field(default=2)
    ARCHIVE_TTL_SECONDS: Optional[int] = Field(default=None)  # None keeps reports forever
    ARCHIVE_RETRY_ATTEMPTS: int = Field(default=3)

    # Request limits
    MAX_REQUEST_SIZE: int = Field(default=1_048_576)  # 1 MB
    MAX_CODE_LENGTH: int = Field(default=50_000)

    @property
    def cors_origins(self) -> list[str]:
        origins = [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]
        if "*" in origins:
            return ["*"]
        return origins

    @property
    def archive_enabled(self) -> bool:
        return bool(self.REDIS_URL)


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()


# Logging setup
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("redis").setLevel(logging.WARNING)

logger = logging.getLogger("codesense.api")
