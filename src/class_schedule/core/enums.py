from __future__ import annotations

from enum import Enum
from typing import Optional


class SubjectColor(str, Enum):
    """Palette a subject can be tagged with."""

    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"
    ORANGE = "orange"
    PINK = "pink"
    TEAL = "teal"
    RED = "red"
    YELLOW = "yellow"


class ClassStatus(str, Enum):
    """Status of a dated class instance."""

    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"
    HOLIDAY = "holiday"


class Attendance(str, Enum):
    """Attendance mark of a class; UNMARKED until the student records it."""

    UNMARKED = "unmarked"
    ATTENDED = "attended"
    MISSED = "missed"

    @classmethod
    def from_flag(cls, value: Optional[bool]) -> "Attendance":
        if value is None:
            return cls.UNMARKED
        return cls.ATTENDED if value else cls.MISSED

    def as_flag(self) -> Optional[bool]:
        """Nullable boolean used by the storage layer."""
        if self is Attendance.UNMARKED:
            return None
        return self is Attendance.ATTENDED


class ReminderKind(str, Enum):
    BEFORE_CLASS = "reminder"
    ATTENDANCE = "attendance"
