"""
Configuration management for wrap-snake.
Uses pydantic-settings for environment variable parsing.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from .constants import BASE_TICK_INTERVAL_MS


class Settings(BaseSettings):
    """Application settings loaded from WRAPSNAKE_* environment variables."""

    # Server
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8765)

    # Game loop
    base_tick_interval_ms: float = Field(
        default=BASE_TICK_INTERVAL_MS,
        gt=0,
        description="Tick interval at 1x speed, in milliseconds"
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for food placement; unset means a fresh random sequence"
    )

    # Logging
    log_level: str = Field(default="INFO")

    class Config:
        env_prefix = "wrapsnake_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
