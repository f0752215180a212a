"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).

It enforces the limit invariants shared by the parser and the validator: the default limit must be
a valid limit, and the maximum can never exceed the hard cap of 1000 results.
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.query.parser import DEFAULT_LIMIT
from src.query.validator import MAX_LIMIT, MIN_LIMIT


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_limit: int = Field(default=DEFAULT_LIMIT, alias="QUERY_DEFAULT_LIMIT")
    max_limit: int = Field(default=MAX_LIMIT, alias="QUERY_MAX_LIMIT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("max_limit")
    @classmethod
    def validate_max_limit(cls, value: int) -> int:
        """Validate that the configured maximum stays within `[1, 1000]`."""

        if value < MIN_LIMIT or value > MAX_LIMIT:
            raise ValueError(f"QUERY_MAX_LIMIT must be between {MIN_LIMIT} and {MAX_LIMIT}")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unsupported LOG_LEVEL: {value}")
        return level

    @model_validator(mode="after")
    def validate_default_limit(self) -> Settings:
        """Validate that the default limit would itself pass validation."""

        if self.default_limit < MIN_LIMIT or self.default_limit > self.max_limit:
            raise ValueError("QUERY_DEFAULT_LIMIT must be between 1 and QUERY_MAX_LIMIT")
        return self


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
