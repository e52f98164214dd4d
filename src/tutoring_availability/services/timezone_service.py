"""
Timezone handling for availability timestamps.

Rules:
- The weekly template is expressed in the tutor's local timezone
- The API exchanges absolute timestamps (ISO 8601)
- Weekday and HH:MM are always derived in the local timezone
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

import pytz

from ..core.constants import DEFAULT_TIMEZONE, MINUTES_PER_DAY


class TimezoneService:
    """Handles all timezone conversions consistently."""

    DEFAULT_TIMEZONE = DEFAULT_TIMEZONE

    @staticmethod
    def get_timezone(tz_str: Optional[str]) -> pytz.BaseTzInfo:
        """Get timezone object, with fallback to default."""
        try:
            return pytz.timezone(tz_str or TimezoneService.DEFAULT_TIMEZONE)
        except pytz.UnknownTimeZoneError:
            return pytz.timezone(TimezoneService.DEFAULT_TIMEZONE)

    @staticmethod
    def local_to_utc(local_date: date, minutes: int, timezone_str: str) -> datetime:
        """
        Convert a local date plus minutes since midnight to UTC.

        1440 minutes maps to midnight of the following day. Uses the timezone
        rules valid on local_date, so DST transitions are respected.

        Raises:
            ValueError: If the time doesn't exist (DST spring-forward gap)
        """
        if not 0 <= minutes <= MINUTES_PER_DAY:
            raise ValueError(f"minutes out of range: {minutes}")
        day_offset, minute_of_day = divmod(minutes, MINUTES_PER_DAY)
        target_date = local_date + timedelta(days=day_offset)
        tz = TimezoneService.get_timezone(timezone_str)
        naive_dt = datetime.combine(target_date, time(minute_of_day // 60, minute_of_day % 60))

        try:
            # is_dst=None raises exception for ambiguous/nonexistent times
            local_dt = tz.localize(naive_dt, is_dst=None)
        except pytz.exceptions.AmbiguousTimeError:
            # Fall back (time exists twice) - use first occurrence
            local_dt = tz.localize(naive_dt, is_dst=True)
        except pytz.exceptions.NonExistentTimeError:
            raise ValueError(
                f"The time {naive_dt.strftime('%I:%M %p')} does not exist on "
                f"{target_date} in {timezone_str} due to Daylight Saving Time."
            )

        return local_dt.astimezone(timezone.utc)

    @staticmethod
    def utc_to_local(utc_dt: datetime, timezone_str: str) -> datetime:
        """Convert an aware (or naive UTC) datetime to the local timezone."""
        if utc_dt.tzinfo is None:
            utc_dt = utc_dt.replace(tzinfo=timezone.utc)

        tz = TimezoneService.get_timezone(timezone_str)
        return utc_dt.astimezone(tz)

    @staticmethod
    def local_today(now: datetime, timezone_str: str) -> date:
        return TimezoneService.utc_to_local(now, timezone_str).date()
