# src/tutoring_availability/services/availability_codec.py
"""
Conversions at the boundary with the tutor API.

Load: absolute AVAILABLE/BOOKED records -> per-weekday TimeRange lists in the
tutor's local timezone (deduplicated, sorted).

Save: the editable weekly template -> absolute intervals anchored to the next
occurrence of each weekday strictly after now + lead days, so a freshly saved
slot never lands in a week whose sessions are already settled.

Malformed input (inverted, empty or cross-midnight ranges) is rejected here
and never reaches grid classification.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
import logging
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from ..core.constants import CELL_MINUTES, DEFAULT_ANCHOR_LEAD_DAYS, MINUTES_PER_DAY
from ..core.enums import AvailabilityStatus, Weekday
from ..core.exceptions import MalformedRangeError
from ..schemas.availability import AvailabilityRecord, SlotPayload
from ..utils.time_utils import format_12h
from .slot_grid import AvailabilitySet, TimeRange, empty_day_map
from .timezone_service import TimezoneService

logger = logging.getLogger(__name__)


class ParsedAvailability(NamedTuple):
    """Student read view of a tutor's availability."""

    availability: AvailabilitySet
    available_slots: List[str]


def record_to_range(record: AvailabilityRecord, tz: str) -> Tuple[Weekday, TimeRange]:
    """
    Derive (weekday, local range) from an absolute record.

    The weekday is taken from the local start. An end at local midnight of the
    following day is allowed (end of day); any other day change is rejected.
    """
    local_start = TimezoneService.utc_to_local(record.start_time, tz)
    local_end = TimezoneService.utc_to_local(record.end_time, tz)
    start = local_start.hour * 60 + local_start.minute
    end = local_end.hour * 60 + local_end.minute

    day_delta = (local_end.date() - local_start.date()).days
    if day_delta == 1 and end == 0:
        end = MINUTES_PER_DAY
    elif day_delta != 0:
        raise MalformedRangeError(
            f"{local_start.isoformat()}/{local_end.isoformat()}", "range crosses midnight"
        )

    weekday = Weekday.from_index(local_start.weekday())
    return weekday, TimeRange(start, end)


def records_to_day_map(
    records: Iterable[AvailabilityRecord],
    status: AvailabilityStatus,
    tz: str,
) -> AvailabilitySet:
    """Partition by status, dedupe identical (weekday, range) pairs, sort each day."""
    day_sets: Dict[Weekday, set] = {day: set() for day in Weekday}
    for record in records:
        if record.status != status:
            continue
        weekday, time_range = record_to_range(record, tz)
        day_sets[weekday].add(time_range)
    return {day: sorted(ranges) for day, ranges in day_sets.items()}


def split_records(
    records: Sequence[AvailabilityRecord], tz: str
) -> Tuple[AvailabilitySet, AvailabilitySet]:
    """Return (available, booked) day maps; UNAVAILABLE records are ignored."""
    available = records_to_day_map(records, AvailabilityStatus.AVAILABLE, tz)
    booked = records_to_day_map(records, AvailabilityStatus.BOOKED, tz)
    return available, booked


def next_weekday_anchor(
    day: Weekday,
    now: datetime,
    tz: str,
    lead_days: int = DEFAULT_ANCHOR_LEAD_DAYS,
) -> date:
    """First local date falling on ``day`` strictly after now + lead_days."""
    base = TimezoneService.local_today(now, tz) + timedelta(days=lead_days)
    days_to_add = day.index - base.weekday()
    if days_to_add <= 0:
        days_to_add += 7
    return base + timedelta(days=days_to_add)


def serialize_day_map(
    day_map: Mapping[Weekday, Sequence[TimeRange]],
    *,
    tz: str,
    now: Optional[datetime] = None,
    lead_days: int = DEFAULT_ANCHOR_LEAD_DAYS,
) -> List[SlotPayload]:
    """Anchor every stored range of the weekly template to a concrete upcoming date."""
    now = now or datetime.now(timezone.utc)
    slots: List[SlotPayload] = []
    for day in Weekday:
        ranges = day_map.get(day) or []
        if not ranges:
            continue
        anchor = next_weekday_anchor(day, now, tz, lead_days)
        for time_range in sorted(ranges):
            slots.append(
                SlotPayload(
                    start_time=TimezoneService.local_to_utc(anchor, time_range.start, tz),
                    end_time=TimezoneService.local_to_utc(anchor, time_range.end, tz),
                )
            )
    return slots


def deserialize_slots(slots: Iterable[SlotPayload], tz: str) -> AvailabilitySet:
    """Inverse of serialize_day_map: absolute slots back to the weekly template."""
    records = [
        AvailabilityRecord(
            status=AvailabilityStatus.AVAILABLE,
            start_time=slot.start_time,
            end_time=slot.end_time,
        )
        for slot in slots
    ]
    return records_to_day_map(records, AvailabilityStatus.AVAILABLE, tz)


def _hourly_pieces(time_range: TimeRange) -> List[TimeRange]:
    pieces: List[TimeRange] = []
    current = time_range.start
    while current < time_range.end:
        nxt = min(current + CELL_MINUTES, time_range.end)
        pieces.append(TimeRange(current, nxt))
        current = nxt
    return pieces


def readable_slot(day: Weekday, time_range: TimeRange) -> str:
    """E.g. "Mon 2:00 PM-4:00 PM"."""
    start = format_12h(time_range.start, spaced=True)
    end = format_12h(time_range.end, spaced=True)
    return f"{day.short_name} {start}-{end}"


def parse_availability(records: Iterable[AvailabilityRecord], tz: str) -> ParsedAvailability:
    """
    Build the student-facing view of a tutor's AVAILABLE records.

    Each record expands into consecutive one-hour pieces on its weekday (a
    trailing partial hour stays as a shorter piece) and yields one readable
    label per record.
    """
    day_sets: Dict[Weekday, set] = {day: set() for day in Weekday}
    available_slots: List[str] = []
    for record in records:
        if record.status != AvailabilityStatus.AVAILABLE:
            continue
        weekday, time_range = record_to_range(record, tz)
        day_sets[weekday].update(_hourly_pieces(time_range))
        available_slots.append(readable_slot(weekday, time_range))

    availability = empty_day_map()
    for day, pieces in day_sets.items():
        availability[day] = sorted(pieces)
    logger.debug(
        "availability_parsed",
        extra={"ranges": sum(len(v) for v in availability.values()), "labels": len(available_slots)},
    )
    return ParsedAvailability(availability=availability, available_slots=available_slots)
