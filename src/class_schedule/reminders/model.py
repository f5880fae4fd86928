from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_AFTER_CLASS_MINUTES, DEFAULT_BEFORE_CLASS_MINUTES
from ..core.enums import ReminderKind


@dataclass(frozen=True)
class NotificationSettings:
    enabled: bool = False
    before_class_minutes: int = DEFAULT_BEFORE_CLASS_MINUTES
    after_class_minutes: int = DEFAULT_AFTER_CLASS_MINUTES

    def to_dict(self) -> dict:
        return {
            "enabled": self.enabled,
            "beforeClassMinutes": self.before_class_minutes,
            "afterClassMinutes": self.after_class_minutes,
        }


@dataclass(frozen=True)
class Reminder:
    """A notification emitted for one class."""

    kind: ReminderKind
    class_id: str
    title: str
    body: str

    @property
    def tag(self) -> str:
        return f"{self.kind.value}-{self.class_id}"
