"""Weekly tutor availability: slot grid, reconciliation and schedule editing."""

from .core.enums import AvailabilityStatus, CellStatus, EditorState, Weekday
from .services.availability_reconciler import classify, classify_grid
from .services.schedule_editor import ScheduleEditor
from .services.slot_grid import GridWindow, HourCell, SlotGrid, TimeRange, covers, total_slots

__all__ = [
    "AvailabilityStatus",
    "CellStatus",
    "EditorState",
    "GridWindow",
    "HourCell",
    "ScheduleEditor",
    "SlotGrid",
    "TimeRange",
    "Weekday",
    "classify",
    "classify_grid",
    "covers",
    "total_slots",
]
