"""Application settings loaded from environment variables."""

import logging
import os
from functools import lru_cache

from pydantic import BaseModel, Field


DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173"


class AppSettings(BaseModel):
    """Application settings."""

    cors_origins: list[str] = Field(default_factory=lambda: DEFAULT_CORS_ORIGINS.split(","))
    review_batch_limit: int = Field(100, ge=1, le=1000)  # Max cards returned per due-list request
    log_level: str = "INFO"

    @property
    def log_level_value(self) -> int:
        """Numeric logging level, falling back to INFO for unknown names."""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


@lru_cache()
def get_app_settings() -> AppSettings:
    """Get cached application settings from environment variables."""
    origins = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)

    return AppSettings(
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        review_batch_limit=int(os.getenv("REVIEW_BATCH_LIMIT", "100")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


def configure_logging(settings: AppSettings | None = None) -> None:
    """Configure root logging once for the application process."""
    settings = settings or get_app_settings()
    logging.basicConfig(
        level=settings.log_level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
