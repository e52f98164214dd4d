from datetime import date, datetime, timezone

import pytest

from tutoring_availability.core.exceptions import EditorStateError, MalformedRangeError
from tutoring_availability.services.timezone_service import TimezoneService


def test_local_to_utc_respects_dst():
    summer = TimezoneService.local_to_utc(date(2026, 7, 6), 9 * 60, "America/New_York")
    winter = TimezoneService.local_to_utc(date(2026, 12, 7), 9 * 60, "America/New_York")

    assert summer == datetime(2026, 7, 6, 13, 0, tzinfo=timezone.utc)
    assert winter == datetime(2026, 12, 7, 14, 0, tzinfo=timezone.utc)


def test_end_of_day_maps_to_next_midnight():
    assert TimezoneService.local_to_utc(date(2026, 11, 1), 1440, "UTC") == datetime(
        2026, 11, 2, 0, 0, tzinfo=timezone.utc
    )


def test_ambiguous_time_uses_first_occurrence():
    # 01:30 happens twice on 2026-11-01 in New York; the first is still EDT
    result = TimezoneService.local_to_utc(date(2026, 11, 1), 90, "America/New_York")
    assert result == datetime(2026, 11, 1, 5, 30, tzinfo=timezone.utc)


def test_nonexistent_time_raises():
    with pytest.raises(ValueError, match="does not exist"):
        TimezoneService.local_to_utc(date(2026, 3, 8), 150, "America/New_York")


def test_unknown_timezone_falls_back_to_default():
    assert TimezoneService.get_timezone("Nowhere/Special").zone == "UTC"
    assert TimezoneService.get_timezone(None).zone == "UTC"


def test_local_today_and_naive_input():
    now = datetime(2026, 10, 20, 2, 0)
    assert TimezoneService.local_today(now, "America/Los_Angeles") == date(2026, 10, 19)
    assert TimezoneService.utc_to_local(now, "UTC").tzinfo is not None


def test_domain_errors_serialize():
    assert MalformedRangeError("10:00-09:00", "start must be before end").to_dict() == {
        "message": "Malformed time range '10:00-09:00': start must be before end",
        "code": "MALFORMED_RANGE",
        "details": {"range": "10:00-09:00", "reason": "start must be before end"},
    }
    assert EditorStateError("toggle", "saving").to_dict()["details"] == {
        "operation": "toggle",
        "state": "saving",
    }
