# src/tutoring_availability/services/schedule_editor.py
"""
Schedule Editor for tutor availability.

Owns the editable working copy of one tutor's weekly availability template:
loads it (with the booked ranges) from the persistence backend, applies cell
toggles, tracks changes against the last loaded/saved copy and writes the
whole template back on save.

States:
    LOADING    -> CLEAN on successful load, LOAD_ERROR on failure
    CLEAN      -> DIRTY on any edit that changes the working copy
    DIRTY      -> CLEAN on discard, or SAVING on save
    SAVING     -> CLEAN on success (saved copy becomes the original),
                  DIRTY on failure (edits kept for retry)

CLEAN vs DIRTY is derived by comparing the working copy to the original, so
toggling a cell twice, or clearing an already empty schedule, leaves the
editor CLEAN.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Callable, List, Optional, Union

import pytz

from ..backends.base import AvailabilityBackend
from ..core.config import Settings
from ..core.constants import DEFAULT_ANCHOR_LEAD_DAYS, DEFAULT_TIMEZONE
from ..core.enums import CellStatus, EditorState, Weekday
from ..core.exceptions import (
    AvailabilityLoadError,
    AvailabilitySaveError,
    EditorStateError,
    ValidationException,
)
from ..schemas.availability import SlotPayload
from .availability_codec import serialize_day_map, split_records
from .availability_reconciler import GridClassification, classify, classify_grid
from .slot_grid import (
    AvailabilitySet,
    SlotGrid,
    TimeRange,
    copy_day_map,
    empty_day_map,
    to_weekday,
    total_slots,
)
from .timetable_view import TimetableView, build_timetable

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _validated_timezone(tz: str) -> str:
    try:
        pytz.timezone(tz)
    except pytz.UnknownTimeZoneError:
        raise ValidationException(
            f"Unknown timezone: {tz}", code="UNKNOWN_TIMEZONE", details={"timezone": tz}
        ) from None
    return tz


class ScheduleEditor:
    """Editable lifecycle of a single tutor's availability template."""

    def __init__(
        self,
        backend: AvailabilityBackend,
        grid: Optional[SlotGrid] = None,
        *,
        tz: str = DEFAULT_TIMEZONE,
        lead_days: int = DEFAULT_ANCHOR_LEAD_DAYS,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.backend = backend
        self.grid = grid or SlotGrid()
        self.tz = _validated_timezone(tz)
        self.lead_days = lead_days
        self._clock = clock or _utc_now

        self._loading = True
        self._fetching = False
        self._saving = False
        self._schedule: Optional[AvailabilitySet] = None
        self._original: Optional[AvailabilitySet] = None
        self._booked: Optional[AvailabilitySet] = None
        self.last_error: Optional[Exception] = None

    @classmethod
    def from_settings(
        cls,
        backend: AvailabilityBackend,
        settings: Settings,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "ScheduleEditor":
        return cls(
            backend,
            SlotGrid(settings.editor_window()),
            tz=settings.timezone,
            lead_days=settings.anchor_lead_days,
            clock=clock,
        )

    # ----- state -----

    @property
    def state(self) -> EditorState:
        if self._saving:
            return EditorState.SAVING
        if self._schedule is None:
            return EditorState.LOADING if self._loading else EditorState.LOAD_ERROR
        return EditorState.DIRTY if self.has_changes else EditorState.CLEAN

    @property
    def has_changes(self) -> bool:
        if self._schedule is None or self._original is None:
            return False
        return self._schedule != self._original

    @property
    def schedule(self) -> AvailabilitySet:
        return copy_day_map(self._require_loaded("read schedule"))

    @property
    def original(self) -> AvailabilitySet:
        self._require_loaded("read original")
        return copy_day_map(self._original or {})

    @property
    def booked(self) -> AvailabilitySet:
        self._require_loaded("read booked slots")
        return copy_day_map(self._booked or {})

    @property
    def total_slots(self) -> int:
        return total_slots(self._schedule or {})

    def _require_loaded(self, operation: str) -> AvailabilitySet:
        if self._schedule is None:
            raise EditorStateError(operation, self.state.value)
        return self._schedule

    def _require_editable(self, operation: str) -> AvailabilitySet:
        if self._saving:
            raise EditorStateError(operation, EditorState.SAVING.value)
        return self._require_loaded(operation)

    # ----- load / save -----

    async def load(self) -> None:
        """Fetch stored availability and bookings; replaces any working copy."""
        if self._saving:
            raise EditorStateError("load", EditorState.SAVING.value)
        if self._fetching:
            raise EditorStateError("load", EditorState.LOADING.value)
        self._loading = True
        self._fetching = True
        self._schedule = self._original = self._booked = None
        try:
            records = await self.backend.get_my_availability()
            available, booked = split_records(records, self.tz)
        except Exception as exc:
            self._loading = False
            self._fetching = False
            error = AvailabilityLoadError(details={"reason": str(exc)})
            self.last_error = error
            logger.error("availability_load_failed", exc_info=exc)
            raise error from exc

        self._loading = False
        self._fetching = False
        self._original = available
        self._schedule = copy_day_map(available)
        self._booked = booked
        self.last_error = None
        logger.info(
            "availability_loaded",
            extra={
                "records": len(records),
                "available": total_slots(available),
                "booked": total_slots(booked),
            },
        )

    async def save(self) -> List[SlotPayload]:
        """
        Persist the whole working copy as a replacement of the stored ranges.

        Returns the slots that were sent. On failure the working copy is left
        untouched and AvailabilitySaveError is raised.
        """
        working = self._require_editable("save")
        snapshot = copy_day_map(working)
        self._saving = True
        try:
            slots = serialize_day_map(
                snapshot, tz=self.tz, now=self._clock(), lead_days=self.lead_days
            )
            await self.backend.update_my_availability(slots)
        except Exception as exc:
            error = AvailabilitySaveError(details={"reason": str(exc)})
            self.last_error = error
            logger.error("availability_save_failed", exc_info=exc)
            raise error from exc
        finally:
            self._saving = False

        self._original = snapshot
        self.last_error = None
        logger.info("availability_saved", extra={"slots": len(slots)})
        return slots

    # ----- edits -----

    def _resolve_cell(self, cell: Union[str, TimeRange]) -> TimeRange:
        resolved = self.grid.find_cell(cell)
        if resolved is None:
            raise ValidationException(
                f"{cell} is not a cell of {self.grid!r}",
                code="UNKNOWN_CELL",
                details={"cell": str(cell)},
            )
        return resolved

    def toggle(self, day: Union[str, Weekday], cell: Union[str, TimeRange]) -> bool:
        """
        Flip one grid cell in the working copy.

        Booked cells are never editable: the call is a no-op and returns False.
        Otherwise the exact cell range is removed if present, or added and the
        day re-sorted. Returns True when the working copy changed.
        """
        schedule = self._require_editable("toggle")
        weekday = to_weekday(day)
        target = self._resolve_cell(cell)

        if classify(weekday, target, {}, self._booked) is CellStatus.BOOKED:
            logger.debug(
                "toggle_ignored_booked_cell",
                extra={"day": weekday.value, "cell": target.label},
            )
            return False

        day_ranges = list(schedule.get(weekday, []))
        if target in day_ranges:
            day_ranges = [r for r in day_ranges if r != target]
        else:
            day_ranges.append(target)
            day_ranges.sort()
        schedule[weekday] = day_ranges
        return True

    def clear_all(self) -> None:
        self._require_editable("clear")
        self._schedule = empty_day_map()
        logger.debug("schedule_cleared")

    def discard(self) -> None:
        self._require_editable("discard")
        self._schedule = copy_day_map(self._original or {})
        logger.debug("changes_discarded")

    # ----- views -----

    def serialize(self, now: Optional[datetime] = None) -> List[SlotPayload]:
        schedule = self._require_loaded("serialize")
        return serialize_day_map(
            schedule, tz=self.tz, now=now or self._clock(), lead_days=self.lead_days
        )

    def classify(self, day: Union[str, Weekday], cell: Union[str, TimeRange]) -> CellStatus:
        schedule = self._require_loaded("classify")
        target = cell if isinstance(cell, TimeRange) else TimeRange.parse(cell)
        return classify(to_weekday(day), target, schedule, self._booked)

    def classification(self) -> GridClassification:
        return classify_grid(self.grid, self._require_loaded("classify"), self._booked)

    def timetable(self) -> TimetableView:
        return build_timetable(
            self.grid, self._require_loaded("render"), self._booked, editable=True
        )
