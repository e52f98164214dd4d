"""Configuration for the availability grid and tutor API client."""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import pytz

from .constants import (
    DEFAULT_ANCHOR_LEAD_DAYS,
    DEFAULT_TIMEZONE,
    FULL_DAY_END_HOUR,
    FULL_DAY_START_HOUR,
    WORKING_WINDOW_END_HOUR,
    WORKING_WINDOW_START_HOUR,
)

if TYPE_CHECKING:
    from ..services.slot_grid import GridWindow


class Settings(BaseSettings):
    """Runtime settings loaded from environment."""

    api_base_url: str = "http://localhost:8080"
    access_token: SecretStr = SecretStr("")
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    timezone: str = DEFAULT_TIMEZONE
    editor_start_hour: int = Field(default=WORKING_WINDOW_START_HOUR, ge=0, le=24)
    editor_end_hour: int = Field(default=WORKING_WINDOW_END_HOUR, ge=0, le=24)
    viewer_start_hour: int = Field(default=FULL_DAY_START_HOUR, ge=0, le=24)
    viewer_end_hour: int = Field(default=FULL_DAY_END_HOUR, ge=0, le=24)
    anchor_lead_days: int = Field(default=DEFAULT_ANCHOR_LEAD_DAYS, ge=0)

    log_level: str = "INFO"
    environment: str = "development"

    model_config = SettingsConfigDict(env_prefix="TUTORING_AVAILABILITY_", env_file=".env")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            pytz.timezone(v)
        except pytz.UnknownTimeZoneError as exc:
            raise ValueError(f"Unknown timezone: {v}") from exc
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()

    @model_validator(mode="after")
    def validate_windows(self) -> "Settings":
        if self.editor_start_hour >= self.editor_end_hour:
            raise ValueError("editor_start_hour must be before editor_end_hour")
        if self.viewer_start_hour >= self.viewer_end_hour:
            raise ValueError("viewer_start_hour must be before viewer_end_hour")
        return self

    def editor_window(self) -> "GridWindow":
        from ..services.slot_grid import GridWindow

        return GridWindow(self.editor_start_hour, self.editor_end_hour)

    def viewer_window(self) -> "GridWindow":
        from ..services.slot_grid import GridWindow

        return GridWindow(self.viewer_start_hour, self.viewer_end_hour)


@lru_cache
def get_settings() -> Settings:
    return Settings()
