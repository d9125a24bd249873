"""Configuration schema — Pydantic models for ytlive config files."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URL = "https://youtube.googleapis.com/youtube/v3"
DEFAULT_TIMEOUT = 30.0

LogLevelName = Literal["debug", "info", "warn", "warning", "error"]


def _lower(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: Optional[LogLevelName] = None
    format: Optional[Literal["kv", "json", "pretty"]] = None
    console: Optional[bool] = None
    file: Optional[bool] = None
    dev_file: Optional[bool] = Field(None, alias="devFile")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("level", "format", mode="before")
    @classmethod
    def _normalize_case(cls, value: Any) -> Any:
        return _lower(value)


class Config(BaseModel):
    """Main configuration schema."""
    schema_: Optional[str] = Field(None, alias="$schema")
    api_key: Optional[str] = Field(None, alias="apiKey")
    base_url: str = Field(DEFAULT_BASE_URL, alias="baseUrl")
    timeout: float = DEFAULT_TIMEOUT
    log_level: Optional[LogLevelName] = Field(None, alias="logLevel")
    logging: Optional[LoggingConfig] = None

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_case(cls, value: Any) -> Any:
        return _lower(value)

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value
