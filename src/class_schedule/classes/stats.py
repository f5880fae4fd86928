from __future__ import annotations

from typing import Iterable, Optional

from ..core.enums import Attendance
from ..subjects.model import Subject
from .model import AttendanceStats, ScheduledClass


def round_half_up_percentage(part: int, total: int) -> int:
    """round(part / total * 100) with halves rounded up; 0 when total is 0."""
    if total <= 0:
        return 0
    # Integer arithmetic keeps .5 exact.
    return (part * 200 + total) // (2 * total)


def compute_attendance_stats(classes: Iterable[ScheduledClass], subject_id: Optional[str] = None) -> AttendanceStats:
    """Aggregate marked classes, optionally for one subject.

    Unmarked classes do not count toward any total.
    """
    marked = [c for c in classes if c.is_marked]
    if subject_id:
        marked = [c for c in marked if c.subject_id == subject_id]

    attended = sum(1 for c in marked if c.attended is Attendance.ATTENDED)
    missed = sum(1 for c in marked if c.attended is Attendance.MISSED)
    total = len(marked)

    return AttendanceStats(
        total_classes=total,
        attended_classes=attended,
        missed_classes=missed,
        percentage=round_half_up_percentage(attended, total),
    )


def stats_by_subject(classes: Iterable[ScheduledClass], subjects: Iterable[Subject]) -> dict[str, AttendanceStats]:
    classes = list(classes)
    return {s.id: compute_attendance_stats(classes, s.id) for s in subjects}
