"""Expand a weekly timetable into dated class instances."""
from __future__ import annotations

from datetime import date
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import add_days, day_of_week, format_iso_date, today_local
from ..common.ids import new_id
from ..core.constants import DAYS_PER_MONTH
from ..timetables.model import Timetable
from .model import ScheduledClass


def horizon_days(horizon_months: int) -> int:
    """Number of days after the start date the generator walks.

    Note: months are a fixed 30 days; 0 or negative horizons walk the start date only.
    """
    return max(int(horizon_months) * DAYS_PER_MONTH, 0)


def generate_schedule(
    timetable: Timetable,
    horizon_months: int,
    *,
    today: Optional[date] = None,
    id_factory: Callable[[], str] = new_id,
) -> list[ScheduledClass]:
    """One ScheduledClass per matching slot for every day in [today, today + horizon]."""
    start = today or today_local()
    out: list[ScheduledClass] = []
    if not timetable.slots:
        return out

    for offset in range(horizon_days(horizon_months) + 1):
        current = add_days(start, offset)
        for slot in timetable.slots_on(day_of_week(current)):
            out.append(
                ScheduledClass(
                    id=id_factory(),
                    subject_id=slot.subject_id,
                    timetable_id=timetable.id,
                    date=format_iso_date(current),
                    start_time=slot.start_time,
                    end_time=slot.end_time,
                )
            )
    return out


def replace_timetable_classes(
    existing: Iterable[ScheduledClass],
    timetable_id: str,
    generated: Iterable[ScheduledClass],
) -> list[ScheduledClass]:
    """Drop every class of timetable_id, keep the others, append the new batch."""
    kept = [c for c in existing if c.timetable_id != timetable_id]
    return kept + list(generated)
