from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import GOOD_STANDING_PERCENTAGE
from ..core.enums import Attendance, ClassStatus


@dataclass(frozen=True)
class ScheduledClass:
    """Domain entity: one dated occurrence of a timetable slot.

    subject_id and timetable_id are weak references; look them up, never assume
    they still resolve.
    """

    id: str
    subject_id: str
    timetable_id: str
    date: str
    start_time: str
    end_time: str
    status: ClassStatus = ClassStatus.SCHEDULED
    attended: Attendance = Attendance.UNMARKED
    reminder_sent: bool = False
    attendance_reminder_sent: bool = False

    @property
    def is_marked(self) -> bool:
        return self.attended is not Attendance.UNMARKED

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "subjectId": self.subject_id,
            "timetableId": self.timetable_id,
            "date": self.date,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "status": self.status.value,
            "attended": self.attended.as_flag(),
            "reminderSent": self.reminder_sent,
            "attendanceReminderSent": self.attendance_reminder_sent,
        }


@dataclass(frozen=True)
class AttendanceStats:
    """Read-model derived from the class collection; never stored."""

    total_classes: int = 0
    attended_classes: int = 0
    missed_classes: int = 0
    percentage: int = 0

    def meets_threshold(self, threshold: int = GOOD_STANDING_PERCENTAGE) -> bool:
        return self.percentage >= threshold

    def to_dict(self) -> dict:
        return {
            "totalClasses": self.total_classes,
            "attendedClasses": self.attended_classes,
            "missedClasses": self.missed_classes,
            "percentage": self.percentage,
        }
