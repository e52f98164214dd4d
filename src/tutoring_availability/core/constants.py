"""Application-wide constants for the availability grid."""

from __future__ import annotations

# Day of week mapping, Monday first (matches date.weekday())
DAYS_OF_WEEK = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
SHORT_DAYS_OF_WEEK = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

MINUTES_PER_DAY = 24 * 60
CELL_MINUTES = 60

# Tutor editing window (07:00-21:00) and the full-day read window
WORKING_WINDOW_START_HOUR = 7
WORKING_WINDOW_END_HOUR = 21
FULL_DAY_START_HOUR = 0
FULL_DAY_END_HOUR = 24

# Saved templates are anchored to weekdays strictly after now + this many days
DEFAULT_ANCHOR_LEAD_DAYS = 7

DEFAULT_TIMEZONE = "UTC"

# Tutor API paths
MY_AVAILABILITY_PATH = "/api/v1/tutors/me/availability"
TUTOR_AVAILABILITY_PATH = "/api/v1/tutors/{tutor_id}/availability"
