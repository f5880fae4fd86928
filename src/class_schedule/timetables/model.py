from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class TimeSlot:
    """A weekly recurring slot; day_of_week uses Sunday=0 .. Saturday=6."""

    id: str
    subject_id: str
    day_of_week: int
    start_time: str
    end_time: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "subjectId": self.subject_id,
            "dayOfWeek": self.day_of_week,
            "startTime": self.start_time,
            "endTime": self.end_time,
        }


@dataclass(frozen=True)
class Timetable:
    """Domain entity: a named weekly timetable owning its slots.

    Note: Slots are embedded, they are only addressable through their timetable.
    """

    id: str
    name: str
    created_at: str
    is_active: bool = False
    slots: tuple[TimeSlot, ...] = field(default_factory=tuple)

    def slots_on(self, day_of_week: int) -> list[TimeSlot]:
        return [s for s in self.slots if s.day_of_week == day_of_week]

    def find_slot(self, slot_id: str) -> Optional[TimeSlot]:
        return next((s for s in self.slots if s.id == slot_id), None)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "createdAt": self.created_at,
            "isActive": self.is_active,
            "slots": [s.to_dict() for s in self.slots],
        }
