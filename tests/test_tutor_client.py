import json
from datetime import datetime, timezone

import httpx
import pytest
import respx

from tutoring_availability.backends.base import AvailabilityBackend
from tutoring_availability.clients.auth import AuthenticationError, TokenAuth
from tutoring_availability.clients.tutor_client import (
    BackendAuthError,
    BackendConnectionError,
    BackendNotFoundError,
    BackendRequestError,
    BackendResponseError,
    TutorApiClient,
)
from tutoring_availability.core.config import Settings
from tutoring_availability.core.enums import AvailabilityStatus, EditorState
from tutoring_availability.schemas.availability import SlotPayload
from tutoring_availability.services.schedule_editor import ScheduleEditor

MY_URL = "https://api.tutoring.test/api/v1/tutors/me/availability"

RECORDS = [
    {
        "id": 11,
        "status": "AVAILABLE",
        "startTime": "2026-10-19T08:00:00.000Z",
        "endTime": "2026-10-19T09:00:00.000Z",
    },
    {
        "id": 12,
        "status": "BOOKED",
        "startTime": "2026-10-21T10:00:00.000Z",
        "endTime": "2026-10-21T11:00:00.000Z",
        "tutorId": 7,
    },
]


def _client(settings):
    return TutorApiClient(settings, TokenAuth(settings))


def test_client_satisfies_backend_port(settings):
    assert isinstance(_client(settings), AvailabilityBackend)


@pytest.mark.asyncio
@respx.mock
async def test_get_my_availability_success(settings):
    route = respx.get(MY_URL).respond(200, json=RECORDS)

    async with _client(settings) as client:
        records = await client.get_my_availability()

    assert [r.id for r in records] == [11, 12]
    assert records[1].status is AvailabilityStatus.BOOKED
    assert records[0].start_time == datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)
    request = route.calls[0].request
    assert request.headers["Authorization"] == "Bearer svc-token"
    assert request.headers.get("X-Request-Id")


@pytest.mark.asyncio
@respx.mock
async def test_get_my_availability_empty_body(settings):
    respx.get(MY_URL).respond(200, json=[])

    async with _client(settings) as client:
        assert await client.get_my_availability() == []


@pytest.mark.asyncio
@respx.mock
async def test_get_tutor_availability_unwraps_envelope(settings):
    respx.get("https://api.tutoring.test/api/v1/tutors/7/availability").respond(
        200,
        json={"serverDateTime": "2026-10-19T12:00:00Z", "code": 200, "data": RECORDS[:1]},
    )

    async with _client(settings) as client:
        records = await client.get_tutor_availability(7)

    assert len(records) == 1
    assert records[0].status is AvailabilityStatus.AVAILABLE


@pytest.mark.asyncio
@respx.mock
async def test_update_my_availability_sends_camel_case_body(settings):
    route = respx.put(MY_URL).respond(204)
    slots = [
        SlotPayload(
            start_time=datetime(2026, 10, 27, 14, 0, tzinfo=timezone.utc),
            end_time=datetime(2026, 10, 27, 15, 0, tzinfo=timezone.utc),
        )
    ]

    async with _client(settings) as client:
        assert await client.update_my_availability(slots) is None

    body = json.loads(route.calls[0].request.content)
    assert body == {
        "slots": [{"startTime": "2026-10-27T14:00:00.000Z", "endTime": "2026-10-27T15:00:00.000Z"}]
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status,error",
    [
        (401, BackendAuthError),
        (403, BackendAuthError),
        (404, BackendNotFoundError),
        (500, BackendRequestError),
    ],
)
async def test_error_statuses(respx_mock, settings, status, error):
    respx_mock.get(MY_URL).respond(status)

    async with _client(settings) as client:
        with pytest.raises(error):
            await client.get_my_availability()


@pytest.mark.asyncio
@respx.mock
async def test_request_error_keeps_status_code(settings):
    respx.put(MY_URL).respond(503)

    async with _client(settings) as client:
        with pytest.raises(BackendRequestError) as exc_info:
            await client.update_my_availability([])

    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
@respx.mock
async def test_network_error(settings):
    respx.get(MY_URL).mock(side_effect=httpx.ConnectError("boom"))

    async with _client(settings) as client:
        with pytest.raises(BackendConnectionError):
            await client.get_my_availability()


@pytest.mark.asyncio
@respx.mock
async def test_timeout_is_connection_error(settings):
    respx.get(MY_URL).mock(side_effect=httpx.ReadTimeout("slow"))

    async with _client(settings) as client:
        with pytest.raises(BackendConnectionError, match="backend_timeout"):
            await client.get_my_availability()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>oops</html>"),
        httpx.Response(200, json=[{"status": "AVAILABLE", "startTime": "not a date"}]),
        httpx.Response(200, json={"unexpected": True}),
    ],
)
async def test_invalid_payload(respx_mock, settings, response):
    respx_mock.get(MY_URL).mock(return_value=response)

    async with _client(settings) as client:
        with pytest.raises(BackendResponseError):
            await client.get_my_availability()


@pytest.mark.asyncio
async def test_missing_token_fails_before_request():
    settings = Settings(api_base_url="https://api.tutoring.test", _env_file=None)
    with respx.mock(assert_all_called=False) as router:
        route = router.get(MY_URL).respond(200, json=[])
        async with _client(settings) as client:
            with pytest.raises(AuthenticationError):
                await client.get_my_availability()
        assert not route.called


@pytest.mark.asyncio
@respx.mock
async def test_editor_round_trip_over_http(settings):
    respx.get(MY_URL).respond(200, json=RECORDS)
    put_route = respx.put(MY_URL).respond(204)

    async with _client(settings) as client:
        editor = ScheduleEditor(
            client,
            tz="UTC",
            clock=lambda: datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc),
        )
        await editor.load()
        editor.toggle("Wednesday", "10:00-11:00")  # booked, ignored
        editor.toggle("Tuesday", "14:00-15:00")
        assert editor.state is EditorState.DIRTY
        await editor.save()

    assert editor.state is EditorState.CLEAN
    body = json.loads(put_route.calls[0].request.content)
    assert body["slots"] == [
        {"startTime": "2026-11-02T08:00:00.000Z", "endTime": "2026-11-02T09:00:00.000Z"},
        {"startTime": "2026-10-27T14:00:00.000Z", "endTime": "2026-10-27T15:00:00.000Z"},
    ]
