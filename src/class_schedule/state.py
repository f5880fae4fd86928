"""In-memory domain state of one user session.

Services mutate it synchronously, then persist. Observers (UI layers, tests)
subscribe to be told which collection changed.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Callable, Iterable, Optional

from .classes.model import ScheduledClass
from .reminders.model import NotificationSettings
from .subjects.model import Subject
from .timetables.model import Timetable
from .users.model import UserProfile

logger = logging.getLogger(__name__)

Observer = Callable[[str], None]

SUBJECTS = "subjects"
TIMETABLES = "timetables"
CLASSES = "classes"
SETTINGS = "settings"
PROFILE = "profile"


class ScheduleState:
    def __init__(
        self,
        *,
        subjects: Iterable[Subject] = (),
        timetables: Iterable[Timetable] = (),
        classes: Iterable[ScheduledClass] = (),
        notification_settings: Optional[NotificationSettings] = None,
        profile: Optional[UserProfile] = None,
    ):
        self.subjects: list[Subject] = list(subjects)
        self.timetables: list[Timetable] = list(timetables)
        self.classes: list[ScheduledClass] = list(classes)
        self.notification_settings = notification_settings or NotificationSettings()
        self.profile = profile or UserProfile()
        # Serialises user mutations and reminder ticks.
        self.lock = threading.RLock()
        self._observers: list[Observer] = []

    # --- observers ---

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer; returns a function that unsubscribes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def notify(self, change: str) -> None:
        """Tell every observer; a failing observer never interrupts the caller's write."""
        for observer in list(self._observers):
            try:
                observer(change)
            except Exception:
                logger.exception("Observer failed on %s change", change)

    # --- lookups (weak references resolve to None) ---

    def find_subject(self, subject_id: str) -> Optional[Subject]:
        return next((s for s in self.subjects if s.id == subject_id), None)

    def find_timetable(self, timetable_id: str) -> Optional[Timetable]:
        return next((t for t in self.timetables if t.id == timetable_id), None)

    def find_class(self, class_id: str) -> Optional[ScheduledClass]:
        return next((c for c in self.classes if c.id == class_id), None)

    @property
    def active_timetable(self) -> Optional[Timetable]:
        return next((t for t in self.timetables if t.is_active), None)

    # --- replacements ---

    def put_subject(self, subject: Subject) -> None:
        self.subjects = _put(self.subjects, subject)
        self.notify(SUBJECTS)

    def put_timetable(self, timetable: Timetable) -> None:
        self.timetables = _put(self.timetables, timetable)
        self.notify(TIMETABLES)

    def put_class(self, scheduled: ScheduledClass) -> None:
        self.classes = _put(self.classes, scheduled)
        self.notify(CLASSES)

    def update_class(self, class_id: str, **changes) -> Optional[ScheduledClass]:
        current = self.find_class(class_id)
        if current is None:
            return None
        updated = replace(current, **changes)
        self.put_class(updated)
        return updated


def _put(items: list, record) -> list:
    """Replace the record with the same id, or append it."""
    out = [record if item.id == record.id else item for item in items]
    if not any(item.id == record.id for item in items):
        out.append(record)
    return out
