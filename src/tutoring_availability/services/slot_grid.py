# src/tutoring_availability/services/slot_grid.py
"""
Slot grid for weekly tutor availability.

The grid is the fixed addressing scheme for everything else: seven weekdays
(Monday first) crossed with a contiguous run of one-hour cells covering a
configured window, e.g. 07:00-21:00 for the tutor editor or 00:00-24:00 for
the read-only timetable.

Times are minutes since midnight. An end of 1440 is midnight at the end of
the day and is labelled "00:00", so the last full-day cell reads
"23:00-00:00".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from ..core.constants import (
    CELL_MINUTES,
    FULL_DAY_END_HOUR,
    FULL_DAY_START_HOUR,
    MINUTES_PER_DAY,
    WORKING_WINDOW_END_HOUR,
    WORKING_WINDOW_START_HOUR,
)
from ..core.enums import Weekday
from ..core.exceptions import MalformedRangeError, UnknownWeekdayError
from ..utils.time_utils import format_range, parse_range


@dataclass(frozen=True, order=True)
class TimeRange:
    """Half-open interval [start, end) within a single day, in minutes."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if not 0 <= self.start < MINUTES_PER_DAY or not 0 < self.end <= MINUTES_PER_DAY:
            raise MalformedRangeError(f"{self.start}-{self.end}", "outside of a single day")
        if self.start >= self.end:
            raise MalformedRangeError(f"{self.start}-{self.end}", "start must be before end")

    @classmethod
    def parse(cls, value: str) -> "TimeRange":
        start, end = parse_range(value)
        return cls(start, end)

    @property
    def label(self) -> str:
        return format_range(self.start, self.end)

    @property
    def duration_minutes(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return self.label


# A cell is a one-hour TimeRange produced by a GridWindow; kept as an alias so
# cells and stored ranges compare by value.
HourCell = TimeRange

AvailabilitySet = Dict[Weekday, List[TimeRange]]
DayMapInput = Mapping[Union[str, Weekday], Iterable[Union[str, TimeRange]]]


@dataclass(frozen=True)
class GridWindow:
    """Hour boundaries of the grid, start inclusive and end exclusive."""

    start_hour: int
    end_hour: int

    def __post_init__(self) -> None:
        if not 0 <= self.start_hour < self.end_hour <= 24:
            raise ValueError(
                f"invalid grid window {self.start_hour}-{self.end_hour}: "
                "expected 0 <= start < end <= 24"
            )

    def cells(self) -> Tuple[TimeRange, ...]:
        return cells(self)


WORKING_WINDOW = GridWindow(WORKING_WINDOW_START_HOUR, WORKING_WINDOW_END_HOUR)
FULL_DAY_WINDOW = GridWindow(FULL_DAY_START_HOUR, FULL_DAY_END_HOUR)


def cells(window: GridWindow) -> Tuple[TimeRange, ...]:
    """Ordered one-hour cells covering the window."""
    return tuple(
        TimeRange(hour * 60, hour * 60 + CELL_MINUTES)
        for hour in range(window.start_hour, window.end_hour)
    )


def covers(stored: TimeRange, cell: TimeRange) -> bool:
    """
    True iff the stored range fully contains the cell.

    Partial overlap does not count: 09:30-10:30 does not cover 09:00-10:00.
    """
    return stored.start <= cell.start and stored.end >= cell.end


def total_slots(availability: Mapping[Weekday, Sequence[TimeRange]]) -> int:
    """Number of stored ranges across all days (not the number of covered cells)."""
    return sum(len(ranges) for ranges in availability.values())


def to_weekday(day: Union[str, Weekday]) -> Weekday:
    if isinstance(day, Weekday):
        return day
    try:
        return Weekday(day)
    except ValueError:
        raise UnknownWeekdayError(str(day)) from None


def empty_day_map() -> AvailabilitySet:
    return {day: [] for day in Weekday}


def copy_day_map(day_map: Mapping[Weekday, Sequence[TimeRange]]) -> AvailabilitySet:
    result = empty_day_map()
    for day, ranges in day_map.items():
        result[day] = list(ranges)
    return result


def build_day_map(raw: Optional[DayMapInput] = None) -> AvailabilitySet:
    """
    Build a normalized day map from day names and "HH:MM-HH:MM" strings.

    Every weekday is present; each day is deduplicated and sorted by start.
    """
    result = empty_day_map()
    for day, values in (raw or {}).items():
        weekday = to_weekday(day)
        ranges = {value if isinstance(value, TimeRange) else TimeRange.parse(value) for value in values}
        result[weekday] = sorted(ranges)
    return result


def day_map_labels(day_map: Mapping[Weekday, Sequence[TimeRange]]) -> Dict[str, List[str]]:
    """Plain {"Monday": ["08:00-09:00"], ...} form, handy for logs and display."""
    return {day.value: [r.label for r in day_map.get(day, [])] for day in Weekday}


class SlotGrid:
    """The fixed (weekday x hour-cell) address space for one window configuration."""

    def __init__(self, window: GridWindow = WORKING_WINDOW) -> None:
        self.window = window
        self.days: Tuple[Weekday, ...] = tuple(Weekday)
        self.cells: Tuple[TimeRange, ...] = cells(window)
        self._cell_set = frozenset(self.cells)

    def __iter__(self) -> Iterator[Tuple[Weekday, TimeRange]]:
        for cell in self.cells:
            for day in self.days:
                yield day, cell

    def __len__(self) -> int:
        return len(self.days) * len(self.cells)

    def __repr__(self) -> str:
        return f"SlotGrid({self.window.start_hour:02d}:00-{self.window.end_hour:02d}:00)"

    def has_cell(self, cell: TimeRange) -> bool:
        return cell in self._cell_set

    def find_cell(self, value: Union[str, TimeRange]) -> Optional[TimeRange]:
        """Return the grid cell matching the value exactly, or None."""
        cell = value if isinstance(value, TimeRange) else TimeRange.parse(value)
        return cell if self.has_cell(cell) else None

    def covered_cells(self, stored: TimeRange) -> List[TimeRange]:
        return [cell for cell in self.cells if covers(stored, cell)]

    @staticmethod
    def covers(stored: TimeRange, cell: TimeRange) -> bool:
        return covers(stored, cell)
