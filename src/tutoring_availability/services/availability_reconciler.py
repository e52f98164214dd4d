"""
Cell classification for the weekly availability grid.

Every (weekday, cell) pair of a SlotGrid gets exactly one CellStatus:
booked if any booked range covers it, else available if any availability
range covers it, else empty.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Sequence, Tuple

from ..core.enums import CellStatus, Weekday
from .slot_grid import SlotGrid, TimeRange, covers

DayRanges = Mapping[Weekday, Sequence[TimeRange]]
GridClassification = Dict[Tuple[Weekday, TimeRange], CellStatus]


def _any_covers(ranges: Optional[Sequence[TimeRange]], cell: TimeRange) -> bool:
    return any(covers(stored, cell) for stored in ranges or ())


def classify(
    day: Weekday,
    cell: TimeRange,
    availability: DayRanges,
    booked: Optional[DayRanges] = None,
) -> CellStatus:
    if booked and _any_covers(booked.get(day), cell):
        return CellStatus.BOOKED
    if _any_covers(availability.get(day), cell):
        return CellStatus.AVAILABLE
    return CellStatus.EMPTY


def classify_grid(
    grid: SlotGrid,
    availability: DayRanges,
    booked: Optional[DayRanges] = None,
) -> GridClassification:
    """Classify every cell of the grid; missing days classify as empty."""
    return {(day, cell): classify(day, cell, availability, booked) for day, cell in grid}


def count_by_status(classification: GridClassification) -> Dict[CellStatus, int]:
    counts = {status: 0 for status in CellStatus}
    for status in classification.values():
        counts[status] += 1
    return counts
