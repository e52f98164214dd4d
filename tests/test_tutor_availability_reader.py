import pytest
import respx

from tutoring_availability.clients.auth import TokenAuth
from tutoring_availability.clients.tutor_client import TutorApiClient
from tutoring_availability.core.enums import CellStatus, Weekday
from tutoring_availability.core.exceptions import AvailabilityLoadError
from tutoring_availability.services.slot_grid import FULL_DAY_WINDOW, SlotGrid, TimeRange
from tutoring_availability.services.tutor_availability_reader import fetch_tutor_timetable

TUTOR_URL = "https://api.tutoring.test/api/v1/tutors/42/availability"


@pytest.mark.asyncio
@respx.mock
async def test_fetch_tutor_timetable(settings):
    respx.get(TUTOR_URL).respond(
        200,
        json={
            "data": [
                {"status": "AVAILABLE", "startTime": "2026-10-19T14:00:00Z", "endTime": "2026-10-19T16:00:00Z"},
                {"status": "BOOKED", "startTime": "2026-10-20T09:00:00Z", "endTime": "2026-10-20T10:00:00Z"},
            ]
        },
    )

    async with TutorApiClient(settings, TokenAuth(settings)) as client:
        result = await fetch_tutor_timetable(
            client, 42, grid=SlotGrid(FULL_DAY_WINDOW), tz="UTC", compact=True
        )

    assert result.parsed.available_slots == ["Mon 2:00 PM-4:00 PM"]
    view = result.view
    assert view.editable is False
    assert view.status_of(Weekday.MONDAY, TimeRange.parse("14:00-15:00")) is CellStatus.AVAILABLE
    assert view.status_of(Weekday.MONDAY, TimeRange.parse("15:00-16:00")) is CellStatus.AVAILABLE
    # the student view only shows what is open
    assert view.status_of(Weekday.TUESDAY, TimeRange.parse("09:00-10:00")) is CellStatus.EMPTY
    assert view.rows[14].start_label == "2PM"


@pytest.mark.asyncio
@respx.mock
async def test_fetch_tutor_timetable_wraps_backend_errors(settings):
    respx.get(TUTOR_URL).respond(404)

    async with TutorApiClient(settings, TokenAuth(settings)) as client:
        with pytest.raises(AvailabilityLoadError) as exc_info:
            await fetch_tutor_timetable(client, 42, grid=SlotGrid(), tz="UTC")

    assert exc_info.value.details["tutor_id"] == 42
    assert exc_info.value.code == "AVAILABILITY_LOAD_FAILED"
