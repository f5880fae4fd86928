from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..common.datetime_utils import now_iso
from ..common.ids import new_id
from ..common.validators import require_day_of_week, require_hhmm, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..persistence.gateway import PersistenceGateway
from ..persistence.writes import DurableWriter, Mutation
from ..state import CLASSES, TIMETABLES, ScheduleState
from .model import TimeSlot, Timetable

logger = logging.getLogger(__name__)


class TimetableService:
    """Use case: manage timetables and their weekly slots.

    At most one timetable is active at a time.
    """

    def __init__(self, state: ScheduleState, gateway: PersistenceGateway, writer: DurableWriter):
        self._state = state
        self._gateway = gateway
        self._writer = writer

    def list(self) -> list[Timetable]:
        return list(self._state.timetables)

    def active(self) -> Optional[Timetable]:
        return self._state.active_timetable

    def _require(self, timetable_id: str) -> Timetable:
        timetable = self._state.find_timetable(timetable_id)
        if timetable is None:
            raise NotFoundError(f"Timetable {timetable_id} not found")
        return timetable

    def _save(self, timetable: Timetable):
        return self._writer.write("save_timetable", timetable.id, self._gateway.save_timetable, timetable)

    def add(self, name: str) -> Mutation[Timetable]:
        """Create a timetable; the first one a user creates becomes active."""
        name = require_non_empty(name, "Timetable name")
        with self._state.lock:
            timetable = Timetable(
                id=new_id(),
                name=name,
                created_at=now_iso(),
                is_active=not self._state.timetables,
            )
            self._state.put_timetable(timetable)
            result = self._save(timetable)
        return Mutation(timetable, (result,))

    def set_active(self, timetable_id: str) -> Mutation[Timetable]:
        with self._state.lock:
            self._require(timetable_id)
            self._state.timetables = [replace(t, is_active=t.id == timetable_id) for t in self._state.timetables]
            self._state.notify(TIMETABLES)
            writes = tuple(self._save(t) for t in self._state.timetables)
            return Mutation(self._state.find_timetable(timetable_id), writes)

    def delete(self, timetable_id: str) -> Mutation[Timetable]:
        """Delete a timetable and its classes.

        If it was active, the first remaining timetable is promoted.
        """
        with self._state.lock:
            timetable = self._require(timetable_id)
            writes = [self._writer.write("delete_timetable", timetable_id, self._gateway.delete_timetable, timetable_id)]

            remaining = [t for t in self._state.timetables if t.id != timetable_id]
            if remaining and not any(t.is_active for t in remaining):
                remaining[0] = replace(remaining[0], is_active=True)
                writes.append(self._save(remaining[0]))
            self._state.timetables = remaining
            self._state.notify(TIMETABLES)

            doomed = [c for c in self._state.classes if c.timetable_id == timetable_id]
            self._state.classes = [c for c in self._state.classes if c.timetable_id != timetable_id]
            self._state.notify(CLASSES)
            for c in doomed:
                writes.append(self._writer.write("delete_scheduled_class", c.id, self._gateway.delete_scheduled_class, c.id))

        logger.info("Deleted timetable %s with %d class(es)", timetable_id, len(doomed))
        return Mutation(timetable, tuple(writes))

    def add_slot(
        self,
        timetable_id: str,
        *,
        subject_id: str,
        day_of_week: int,
        start_time: str,
        end_time: str,
    ) -> Mutation[TimeSlot]:
        """Append a weekly slot. Overlapping slots are allowed."""
        day = require_day_of_week(day_of_week)
        start = require_hhmm(start_time, "Start time")
        end = require_hhmm(end_time, "End time")
        if end <= start:
            raise ValidationError("End time must be after start time")

        with self._state.lock:
            timetable = self._require(timetable_id)
            if self._state.find_subject(subject_id) is None:
                raise NotFoundError(f"Subject {subject_id} not found")

            slot = TimeSlot(id=new_id(), subject_id=subject_id, day_of_week=day, start_time=start, end_time=end)
            timetable = replace(timetable, slots=timetable.slots + (slot,))
            self._state.put_timetable(timetable)
            result = self._save(timetable)
        return Mutation(slot, (result,))

    def remove_slot(self, timetable_id: str, slot_id: str) -> Mutation[TimeSlot]:
        with self._state.lock:
            timetable = self._require(timetable_id)
            slot = timetable.find_slot(slot_id)
            if slot is None:
                raise NotFoundError(f"Slot {slot_id} not found")

            timetable = replace(timetable, slots=tuple(s for s in timetable.slots if s.id != slot_id))
            self._state.put_timetable(timetable)
            result = self._save(timetable)
        return Mutation(slot, (result,))
