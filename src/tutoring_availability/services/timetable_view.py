"""Presentation model of the weekly timetable for the editor and read views."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..core.enums import CellStatus, Weekday
from ..utils.time_utils import format_12h, minutes_to_time_str
from .availability_reconciler import classify
from .slot_grid import SlotGrid, TimeRange, total_slots


@dataclass(frozen=True)
class TimetableCell:
    day: Weekday
    cell: TimeRange
    status: CellStatus
    clickable: bool
    title: str


@dataclass(frozen=True)
class TimetableRow:
    cell: TimeRange
    start_label: str
    end_label: str
    cells: Tuple[TimetableCell, ...]


@dataclass(frozen=True)
class TimetableView:
    rows: Tuple[TimetableRow, ...]
    day_totals: Dict[Weekday, int] = field(default_factory=dict)
    total_slots: int = 0
    editable: bool = False
    compact: bool = False

    def status_of(self, day: Weekday, cell: TimeRange) -> Optional[CellStatus]:
        for row in self.rows:
            if row.cell == cell:
                for item in row.cells:
                    if item.day == day:
                        return item.status
        return None


def _title(status: CellStatus, cell: TimeRange, editable: bool) -> str:
    if status is CellStatus.BOOKED:
        return "Booked"
    if status is CellStatus.AVAILABLE:
        return f"Available: {cell.label}"
    return "Click to mark as available" if editable else "Not available"


def _labels(cell: TimeRange, editable: bool, compact: bool) -> Tuple[str, str]:
    if editable:
        return minutes_to_time_str(cell.start), minutes_to_time_str(cell.end)
    return format_12h(cell.start, compact=compact), format_12h(cell.end, compact=compact)


def build_timetable(
    grid: SlotGrid,
    availability: Mapping[Weekday, Sequence[TimeRange]],
    booked: Optional[Mapping[Weekday, Sequence[TimeRange]]] = None,
    *,
    editable: bool = False,
    compact: bool = False,
) -> TimetableView:
    """Rows follow grid cell order; each row has one cell per weekday."""
    rows: List[TimetableRow] = []
    for cell in grid.cells:
        row_cells = []
        for day in grid.days:
            status = classify(day, cell, availability, booked)
            row_cells.append(
                TimetableCell(
                    day=day,
                    cell=cell,
                    status=status,
                    clickable=editable and status is not CellStatus.BOOKED,
                    title=_title(status, cell, editable),
                )
            )
        start_label, end_label = _labels(cell, editable, compact)
        rows.append(TimetableRow(cell, start_label, end_label, tuple(row_cells)))

    return TimetableView(
        rows=tuple(rows),
        day_totals={day: len(availability.get(day) or ()) for day in grid.days},
        total_slots=total_slots(availability),
        editable=editable,
        compact=compact,
    )
