"""Settings loaded from the environment, and logging setup."""

import logging
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from ``SQL_REVIEW_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SQL_REVIEW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "INFO"

    # Judge
    judge_base_url: str = "https://api.openai.com/v1"
    judge_api_key: str = ""
    judge_model: str = "gpt-4o-mini"
    judge_temperature: float = 0.1
    judge_max_retries: int = 3

    # Orchestration
    max_concurrency: int = 3
    worker_timeout: float = 60.0
    batch_concurrency: int = 2
    max_batch_size: int = 50
    cache_max_size: int = 100
    knowledge_top_k: int = 3

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_VALID_LOG_LEVELS}, got '{v}'")
        return upper

    @model_validator(mode="after")
    def validate_limits_positive(self) -> "Settings":
        for field_name in (
            "max_concurrency",
            "worker_timeout",
            "batch_concurrency",
            "max_batch_size",
            "cache_max_size",
            "knowledge_top_k",
        ):
            value = getattr(self, field_name)
            if value <= 0:
                raise ValueError(f"{field_name} must be positive, got {value}")
        if self.judge_max_retries < 0:
            raise ValueError(f"judge_max_retries must not be negative, got {self.judge_max_retries}")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Send ``sql_review`` logs to stderr at ``level``, or at the configured ``log_level``."""
    if level is None:
        level = get_settings().log_level
    package_logger = logging.getLogger("sql_review")
    package_logger.setLevel(level.upper())
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
