from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import format_iso_date, today_local
from ..common.validators import require_status
from ..core.enums import Attendance, ClassStatus
from ..core.exceptions import NotFoundError
from ..persistence.gateway import PersistenceGateway
from ..persistence.writes import DurableWriter, Mutation
from ..state import ScheduleState
from .model import ScheduledClass

logger = logging.getLogger(__name__)


class ClassLifecycleService:
    """Use case: status and attendance transitions of scheduled classes.

    Any status may be set from any status, and attendance can be marked
    whatever the status is.
    """

    def __init__(self, state: ScheduleState, gateway: PersistenceGateway, writer: DurableWriter):
        self._state = state
        self._gateway = gateway
        self._writer = writer

    def _apply(self, class_id: str, **changes) -> Mutation[ScheduledClass]:
        with self._state.lock:
            updated = self._state.update_class(class_id, **changes)
            if updated is None:
                raise NotFoundError(f"Class {class_id} not found")
            result = self._writer.write("update_scheduled_class", class_id, self._gateway.update_scheduled_class, updated)
            return Mutation(updated, (result,))

    def update_status(self, class_id: str, status: ClassStatus | str) -> Mutation[ScheduledClass]:
        return self._apply(class_id, status=require_status(status))

    def mark_attendance(self, class_id: str, attended: bool) -> Mutation[ScheduledClass]:
        return self._apply(class_id, attended=Attendance.from_flag(bool(attended)))

    def reset_attendance(self, class_id: str) -> Mutation[ScheduledClass]:
        return self._apply(class_id, attended=Attendance.UNMARKED)

    def reset_class_status(self, class_id: str) -> Mutation[ScheduledClass]:
        """Full undo: back to scheduled and unmarked in one record update."""
        return self._apply(class_id, status=ClassStatus.SCHEDULED, attended=Attendance.UNMARKED)

    def mark_reminder_sent(self, class_id: str) -> Mutation[ScheduledClass]:
        return self._apply(class_id, reminder_sent=True)

    def mark_attendance_reminder_sent(self, class_id: str) -> Mutation[ScheduledClass]:
        return self._apply(class_id, attendance_reminder_sent=True)

    def mark_today_as_holiday(self, today: Optional[date] = None) -> Mutation[list[ScheduledClass]]:
        """Every class dated today that is still scheduled becomes a holiday."""
        key = format_iso_date(today or today_local())
        with self._state.lock:
            targets = [c.id for c in self._state.classes if c.date == key and c.status == ClassStatus.SCHEDULED]
            updated: list[ScheduledClass] = []
            writes = []
            for class_id in targets:
                cls = self._state.update_class(class_id, status=ClassStatus.HOLIDAY)
                updated.append(cls)
                writes.append(self._writer.write("update_scheduled_class", class_id, self._gateway.update_scheduled_class, cls))

        logger.info("Marked %d class(es) on %s as holiday", len(updated), key)
        return Mutation(updated, tuple(writes))
