"""Application configuration loading via Pydantic settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables.

    Every field has a default, so an empty environment yields the stock
    sidecar: all interfaces on port 3000.
    """

    host: str = Field(default="0.0.0.0", alias="METRICS_SERVER_HOST")
    port: int = Field(default=3000, ge=1, le=65535, alias="METRICS_SERVER_PORT")
    log_level: LogLevel = Field(default="INFO", alias="METRICS_SERVER_LOG_LEVEL")
    eventloop_lag_interval: float = Field(default=0.5, gt=0, alias="METRICS_EVENTLOOP_LAG_INTERVAL")
    metrics_namespace: str = Field(default="", alias="METRICS_NAMESPACE")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()
