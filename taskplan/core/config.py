"""Application configuration using Pydantic Settings.

Environment variables are loaded from .env files and system environment.
"""

from functools import lru_cache
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    All settings can be overridden via environment variables.
    Environment variables take precedence over .env file values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "Task Planner API"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"

    # CORS
    ALLOWED_ORIGINS: list[str] = ["http://localhost:3000"]

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def parse_allowed_origins(cls, v: Any) -> list[str]:
        """Parse ALLOWED_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        if isinstance(v, list):
            return v
        return ["http://localhost:3000"]

    # Datasets
    DATA_DIR: str = "data"
    RESULTS_DIR: str = "results"
    DEFAULT_DATASETS: list[str] = [
        "small_dag.json",
        "small_cycle.json",
        "small_mixed.json",
        "medium_multiple_scc.json",
        "medium_complex_dag.json",
        "medium_mixed.json",
        "large_sparse.json",
        "large_medium.json",
        "large_complex_scc.json",
    ]

    # Limits for graphs submitted over HTTP
    MAX_NODES: int = 10000
    MAX_EDGES: int = 50000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None  # Defaults to logs/app.log
    LOG_JSON_FORMAT: bool = True  # Use JSON format for file logs


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are cached after first load for performance.
    """
    return Settings()


# Global settings instance
settings = get_settings()
