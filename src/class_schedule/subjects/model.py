from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import SubjectColor


@dataclass(frozen=True)
class Subject:
    """Domain entity: a course the student attends."""

    id: str
    name: str
    color: SubjectColor
    created_at: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color.value,
            "createdAt": self.created_at,
        }
