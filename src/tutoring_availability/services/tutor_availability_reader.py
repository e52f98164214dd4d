"""Read-only availability of another tutor, as shown to students."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple

from ..core.exceptions import AvailabilityLoadError
from .availability_codec import ParsedAvailability, parse_availability
from .slot_grid import SlotGrid
from .timetable_view import TimetableView, build_timetable

if TYPE_CHECKING:
    from ..clients.tutor_client import TutorApiClient

logger = logging.getLogger(__name__)


class TutorTimetable(NamedTuple):
    parsed: ParsedAvailability
    view: TimetableView


async def fetch_tutor_timetable(
    client: "TutorApiClient",
    tutor_id: int,
    *,
    grid: SlotGrid,
    tz: str,
    compact: bool = False,
) -> TutorTimetable:
    """Load a tutor's AVAILABLE records and lay them out on the read-only grid."""
    try:
        records = await client.get_tutor_availability(tutor_id)
        parsed = parse_availability(records, tz)
    except Exception as exc:
        logger.error("tutor_availability_load_failed", extra={"tutor_id": tutor_id}, exc_info=exc)
        raise AvailabilityLoadError(
            f"Failed to load availability for tutor {tutor_id}",
            details={"tutor_id": tutor_id, "reason": str(exc)},
        ) from exc

    view = build_timetable(grid, parsed.availability, editable=False, compact=compact)
    return TutorTimetable(parsed=parsed, view=view)
