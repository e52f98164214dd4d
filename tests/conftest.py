from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Callable

import pytest

from tutoring_availability.backends.memory import InMemoryAvailabilityBackend
from tutoring_availability.core.config import Settings
from tutoring_availability.core.enums import AvailabilityStatus, Weekday
from tutoring_availability.schemas.availability import AvailabilityRecord
from tutoring_availability.services.schedule_editor import ScheduleEditor
from tutoring_availability.services.slot_grid import GridWindow, SlotGrid, TimeRange

# Monday of a reference week; records are built relative to it.
REFERENCE_MONDAY = date(2026, 10, 19)
FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def make_record(
    status: AvailabilityStatus | str,
    day: Weekday | str,
    time_range: str,
    *,
    week_of: date = REFERENCE_MONDAY,
    record_id: int | None = None,
) -> AvailabilityRecord:
    """UTC record on the given weekday of the reference week."""
    weekday = day if isinstance(day, Weekday) else Weekday(day)
    parsed = TimeRange.parse(time_range)
    day_date = week_of + timedelta(days=weekday.index)
    midnight = datetime(day_date.year, day_date.month, day_date.day, tzinfo=timezone.utc)
    return AvailabilityRecord(
        id=record_id,
        status=AvailabilityStatus(status),
        start_time=midnight + timedelta(minutes=parsed.start),
        end_time=midnight + timedelta(minutes=parsed.end),
    )


@pytest.fixture
def record_factory() -> Callable[..., AvailabilityRecord]:
    return make_record


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_base_url="https://api.tutoring.test",
        access_token="svc-token",
        timezone="UTC",
        _env_file=None,
    )


@pytest.fixture
def small_grid() -> SlotGrid:
    return SlotGrid(GridWindow(8, 10))


@pytest.fixture
def working_grid() -> SlotGrid:
    return SlotGrid()


@pytest.fixture
def backend() -> InMemoryAvailabilityBackend:
    return InMemoryAvailabilityBackend()


@pytest.fixture
def editor_factory(working_grid: SlotGrid) -> Callable[..., ScheduleEditor]:
    def _build(backend: InMemoryAvailabilityBackend, grid: SlotGrid | None = None) -> ScheduleEditor:
        return ScheduleEditor(
            backend,
            grid or working_grid,
            tz="UTC",
            lead_days=7,
            clock=lambda: FIXED_NOW,
        )

    return _build


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW
