"""Read-only views over the class collection (dashboard, calendar)."""
from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional

from ..common.datetime_utils import combine, format_iso_date
from ..core.enums import ClassStatus
from .model import ScheduledClass


def classes_on(classes: Iterable[ScheduledClass], day: date) -> list[ScheduledClass]:
    key = format_iso_date(day)
    return [c for c in classes if c.date == key]


def today_classes(classes: Iterable[ScheduledClass], today: date) -> list[ScheduledClass]:
    """Classes dated today, de-duplicated on (subject, start, date), by start time.

    Note: the first occurrence of a duplicate wins.
    """
    unique: dict[tuple[str, str, str], ScheduledClass] = {}
    for c in classes_on(classes, today):
        unique.setdefault((c.subject_id, c.start_time, c.date), c)
    return sorted(unique.values(), key=lambda c: c.start_time)


def upcoming_class(classes: Iterable[ScheduledClass], now: datetime) -> Optional[ScheduledClass]:
    """Earliest class later today that is not cancelled."""
    today = format_iso_date(now.date())
    current = now.strftime("%H:%M")
    candidates = [
        c
        for c in classes
        if c.date == today and c.start_time > current and c.status != ClassStatus.CANCELLED
    ]
    candidates.sort(key=lambda c: c.start_time)
    return candidates[0] if candidates else None


def format_time_until(scheduled: ScheduledClass, now: datetime) -> str:
    """Human readable wait: '45 min' under an hour, otherwise '1h 5m'."""
    minutes = int((combine(scheduled.date, scheduled.start_time) - now).total_seconds() // 60)
    if minutes < 60:
        return f"{minutes} min"
    return f"{minutes // 60}h {minutes % 60}m"
