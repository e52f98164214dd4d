# src/tutoring_availability/schemas/availability.py
"""
Wire schemas for the tutor availability API.

The API speaks camelCase (startTime/endTime); fields are snake_case in
Python and populated by alias.
"""

from datetime import datetime, timezone
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ..core.enums import AvailabilityStatus

DataT = TypeVar("DataT")


def _ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _serialize_utc_datetime(value: datetime) -> str:
    """ISO 8601 with millisecond precision and a Z suffix."""
    value = _ensure_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class AvailabilityRecord(BaseModel):
    """One stored availability interval as returned by the API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[int] = None
    status: AvailabilityStatus
    start_time: datetime = Field(alias="startTime")
    end_time: datetime = Field(alias="endTime")

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_utc(cls, v: datetime) -> datetime:
        """Naive timestamps are taken as UTC."""
        return _ensure_utc(v)

    @field_validator("end_time")
    @classmethod
    def validate_time_order(cls, v: datetime, info: Any) -> datetime:
        """Ensure end time is after start time."""
        if (
            isinstance(getattr(info, "data", None), dict)
            and info.data.get("start_time")
            and v <= info.data["start_time"]
        ):
            raise ValueError("End time must be after start time")
        return v


class SlotPayload(BaseModel):
    """One available interval sent on save (status is implicitly AVAILABLE)."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    start_time: datetime = Field(alias="startTime")
    end_time: datetime = Field(alias="endTime")

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_utc(cls, v: datetime) -> datetime:
        return _ensure_utc(v)

    @field_validator("end_time")
    @classmethod
    def validate_time_order(cls, v: datetime, info: Any) -> datetime:
        if (
            isinstance(getattr(info, "data", None), dict)
            and info.data.get("start_time")
            and v <= info.data["start_time"]
        ):
            raise ValueError("End time must be after start time")
        return v

    @field_serializer("start_time", "end_time")
    def serialize_utc(self, value: datetime) -> str:
        return _serialize_utc_datetime(value)


class UpdateAvailabilityRequest(BaseModel):
    """Full replacement of the tutor's available ranges."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    slots: List[SlotPayload]


class ApiEnvelope(BaseModel, Generic[DataT]):
    """Standard response wrapper used by most tutor endpoints."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    server_date_time: Optional[str] = Field(default=None, alias="serverDateTime")
    status: Optional[Any] = None
    code: Optional[int] = None
    message: Optional[str] = None
    data: DataT
