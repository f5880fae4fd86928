from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..common.datetime_utils import now_iso
from ..common.ids import new_id
from ..common.validators import require_color, require_non_empty
from ..core.enums import SubjectColor
from ..core.exceptions import NotFoundError
from ..persistence.gateway import PersistenceGateway
from ..persistence.writes import DurableWriter, Mutation
from ..state import CLASSES, SUBJECTS, TIMETABLES, ScheduleState
from .model import Subject

logger = logging.getLogger(__name__)


class SubjectService:
    """Use case: manage the student's subjects."""

    def __init__(self, state: ScheduleState, gateway: PersistenceGateway, writer: DurableWriter):
        self._state = state
        self._gateway = gateway
        self._writer = writer

    def list(self) -> list[Subject]:
        return list(self._state.subjects)

    def get_by_id(self, subject_id: str) -> Optional[Subject]:
        return self._state.find_subject(subject_id)

    def add(self, name: str, color: SubjectColor | str) -> Mutation[Subject]:
        subject = Subject(
            id=new_id(),
            name=require_non_empty(name, "Subject name"),
            color=require_color(color),
            created_at=now_iso(),
        )
        with self._state.lock:
            self._state.put_subject(subject)
            result = self._writer.write("save_subject", subject.id, self._gateway.save_subject, subject)
        return Mutation(subject, (result,))

    def update(self, subject_id: str, name: str, color: SubjectColor | str) -> Mutation[Subject]:
        name = require_non_empty(name, "Subject name")
        color = require_color(color)
        with self._state.lock:
            current = self._state.find_subject(subject_id)
            if current is None:
                raise NotFoundError(f"Subject {subject_id} not found")
            subject = replace(current, name=name, color=color)
            self._state.put_subject(subject)
            result = self._writer.write("update_subject", subject.id, self._gateway.update_subject, subject)
        return Mutation(subject, (result,))

    def delete(self, subject_id: str) -> Mutation[Subject]:
        """Delete a subject with its slots and every class that references it."""
        with self._state.lock:
            subject = self._state.find_subject(subject_id)
            if subject is None:
                raise NotFoundError(f"Subject {subject_id} not found")

            writes = [self._writer.write("delete_subject", subject_id, self._gateway.delete_subject, subject_id)]
            self._state.subjects = [s for s in self._state.subjects if s.id != subject_id]
            self._state.notify(SUBJECTS)

            touched = []
            timetables = []
            for t in self._state.timetables:
                slots = tuple(s for s in t.slots if s.subject_id != subject_id)
                if len(slots) != len(t.slots):
                    t = replace(t, slots=slots)
                    touched.append(t)
                timetables.append(t)
            self._state.timetables = timetables
            self._state.notify(TIMETABLES)
            for t in touched:
                writes.append(self._writer.write("save_timetable", t.id, self._gateway.save_timetable, t))

            doomed = [c for c in self._state.classes if c.subject_id == subject_id]
            self._state.classes = [c for c in self._state.classes if c.subject_id != subject_id]
            self._state.notify(CLASSES)
            for c in doomed:
                writes.append(self._writer.write("delete_scheduled_class", c.id, self._gateway.delete_scheduled_class, c.id))

        logger.info(
            "Deleted subject %s: %d timetable(s) updated, %d class(es) removed",
            subject_id,
            len(touched),
            len(doomed),
        )
        return Mutation(subject, tuple(writes))
