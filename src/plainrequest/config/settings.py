"""Application settings and configuration management."""

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


class Settings:
    """Configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Load environment variables from .env file."""
        load_dotenv()

    @property
    def origin(self) -> Optional[str]:
        """Default origin used by the command line when given a bare path."""
        return os.getenv("PLAINREQUEST_ORIGIN") or None

    @property
    def port(self) -> Optional[int]:
        """Default port bound alongside the origin."""
        value = os.getenv("PLAINREQUEST_PORT")
        return int(value) if value else None

    @property
    def log_level(self) -> str:
        """Log level for the package logger."""
        return os.getenv("PLAINREQUEST_LOG_LEVEL", "WARNING")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance (singleton pattern)."""
    return Settings()
