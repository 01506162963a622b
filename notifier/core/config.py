"""
Environment configuration — single source of truth for all settings.

Uses pydantic-settings for type-safe config with .env file support.
Every variable is prefixed with ``NOTIFIER_`` and has a sensible default.

Usage:
    from notifier.core.config import get_settings
    print(get_settings().UNMATCHED_POLICY)
"""

from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DeliveryWindow(BaseModel):
    """
    One time-of-day routing window: messages arriving in
    ``[start_hour, end_hour)`` go to ``channel``.

    A window with ``start_hour > end_hour`` wraps past midnight
    (e.g. 22 → 6).
    """

    start_hour: int = Field(..., ge=0, le=23)
    end_hour: int = Field(..., ge=0, le=24)
    channel: str = Field(..., min_length=1)

    @field_validator("channel")
    @classmethod
    def _normalise_channel(cls, value: str) -> str:
        return value.strip().lower()

    @model_validator(mode="after")
    def _check_non_empty(self) -> "DeliveryWindow":
        if self.start_hour == self.end_hour:
            raise ValueError("delivery window must not be empty")
        return self


def _default_windows() -> List[DeliveryWindow]:
    return [
        DeliveryWindow(start_hour=9, end_hour=17, channel="email"),
        DeliveryWindow(start_hour=17, end_hour=22, channel="sms"),
        DeliveryWindow(start_hour=22, end_hour=9, channel="push"),
    ]


class Settings(BaseSettings):
    """
    Application-wide settings loaded from environment variables or .env file.

    Precedence: env var > .env file > default value
    """

    model_config = SettingsConfigDict(
        env_prefix="NOTIFIER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ── Application ──
    APP_NAME: str = "notifier"
    ENVIRONMENT: str = "development"  # development | staging | production
    LOG_LEVEL: str = "INFO"  # DEBUG | INFO | WARNING | ERROR | CRITICAL
    LOG_FORMAT: str = "pretty"  # pretty | json

    # ── Dispatch ──
    ENABLE_LOGGING_DECORATOR: bool = False
    ENABLE_PERSISTENCE_DECORATOR: bool = False

    # ── Time-of-day routing ──
    UNMATCHED_POLICY: str = "log"  # drop | log | raise
    DELIVERY_WINDOWS: List[DeliveryWindow] = Field(default_factory=_default_windows)

    @field_validator("UNMATCHED_POLICY")
    @classmethod
    def _check_policy(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ("drop", "log", "raise"):
            raise ValueError(f"unknown unmatched policy: {value!r}")
        return value

    @field_validator("LOG_FORMAT")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ("pretty", "json"):
            raise ValueError(f"unknown log format: {value!r}")
        return value

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def use_json_logs(self) -> bool:
        return self.is_production or self.LOG_FORMAT == "json"


@lru_cache()
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
