# src/tutoring_availability/core/enums.py
"""
Core enums for the availability grid.

String-valued so they compare equal to the raw values found in API payloads
and can be used directly as dictionary keys in day maps.
"""

from enum import Enum

from .constants import DAYS_OF_WEEK


class Weekday(str, Enum):
    """English weekday names, Monday first."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @property
    def index(self) -> int:
        """Position in the week, 0 for Monday (same as date.weekday())."""
        return DAYS_OF_WEEK.index(self.value)

    @property
    def short_name(self) -> str:
        return self.value[:3]

    @classmethod
    def from_index(cls, index: int) -> "Weekday":
        return cls(DAYS_OF_WEEK[index])


class AvailabilityStatus(str, Enum):
    """Status of an availability record returned by the tutor API."""

    AVAILABLE = "AVAILABLE"
    BOOKED = "BOOKED"
    UNAVAILABLE = "UNAVAILABLE"


class CellStatus(str, Enum):
    """Derived status of one grid cell. Priority: booked > available > empty."""

    AVAILABLE = "available"
    BOOKED = "booked"
    EMPTY = "empty"


class EditorState(str, Enum):
    """Lifecycle states of a ScheduleEditor."""

    LOADING = "loading"
    LOAD_ERROR = "load_error"
    CLEAN = "clean"
    DIRTY = "dirty"
    SAVING = "saving"
