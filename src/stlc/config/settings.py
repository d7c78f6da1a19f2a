"""Library settings."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogProfile = Literal["default", "compact"]


class CalculusSettings(BaseSettings):
    """Checker, evaluator and logging settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STLC_",
        case_sensitive=False,
        extra="ignore",
    )

    log_filter: str = Field(default="info")
    log_profile: LogProfile = Field(default="default")
    trace: bool = Field(default=False)


def load_settings(**overrides: Any) -> CalculusSettings:
    """Load settings from the environment with optional overrides."""
    return CalculusSettings(**overrides)
