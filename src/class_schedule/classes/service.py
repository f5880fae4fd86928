from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local, today_local
from ..core.enums import ClassStatus
from ..persistence.gateway import PersistenceGateway
from ..persistence.writes import DurableWriter, Mutation
from ..state import CLASSES, ScheduleState
from .generator import generate_schedule, replace_timetable_classes
from .model import AttendanceStats, ScheduledClass
from .queries import classes_on, today_classes, upcoming_class
from .stats import compute_attendance_stats, stats_by_subject

logger = logging.getLogger(__name__)


class ScheduleService:
    """Use case: generate the dated schedule and answer read queries on it."""

    def __init__(self, state: ScheduleState, gateway: PersistenceGateway, writer: DurableWriter):
        self._state = state
        self._gateway = gateway
        self._writer = writer

    def generate(self, horizon_months: int, *, today: Optional[date] = None) -> Mutation[list[ScheduledClass]]:
        """Regenerate the active timetable's classes over the horizon.

        Destructive: previous classes of that timetable, with any status or
        attendance recorded on them, are replaced. Other timetables are untouched.
        Without an active timetable this is a no-op.
        """
        with self._state.lock:
            timetable = self._state.active_timetable
            if timetable is None:
                logger.warning("user=%s generate skipped: no active timetable", self._gateway.user_id)
                return Mutation([])

            generated = generate_schedule(timetable, horizon_months, today=today)
            stale = [c for c in self._state.classes if c.timetable_id == timetable.id]
            self._state.classes = replace_timetable_classes(self._state.classes, timetable.id, generated)
            self._state.notify(CLASSES)

            writes = [
                self._writer.write("delete_scheduled_class", c.id, self._gateway.delete_scheduled_class, c.id)
                for c in stale
            ]
            writes += [
                self._writer.write("save_scheduled_class", c.id, self._gateway.save_scheduled_class, c)
                for c in generated
            ]

        logger.info(
            "user=%s generated %d class(es) for timetable %s over %s month(s), replaced %d",
            self._gateway.user_id,
            len(generated),
            timetable.id,
            horizon_months,
            len(stale),
        )
        return Mutation(generated, tuple(writes))

    def has_recorded_attendance(self, timetable_id: str) -> bool:
        """True when regenerating this timetable would discard recorded data."""
        return any(
            c.timetable_id == timetable_id and (c.is_marked or c.status != ClassStatus.SCHEDULED)
            for c in self._state.classes
        )

    # --- queries ---

    def list_classes(self, *, day: Optional[date] = None) -> list[ScheduledClass]:
        if day is None:
            return list(self._state.classes)
        return classes_on(self._state.classes, day)

    def today(self, *, today: Optional[date] = None) -> list[ScheduledClass]:
        return today_classes(self._state.classes, today or today_local())

    def upcoming(self, *, now: Optional[datetime] = None) -> Optional[ScheduledClass]:
        return upcoming_class(self._state.classes, now or now_local())

    def stats(self, subject_id: Optional[str] = None) -> AttendanceStats:
        return compute_attendance_stats(self._state.classes, subject_id)

    def stats_by_subject(self) -> dict[str, AttendanceStats]:
        return stats_by_subject(self._state.classes, self._state.subjects)
