from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..classes.model import ScheduledClass
from ..reminders.model import NotificationSettings
from ..subjects.model import Subject
from ..timetables.model import Timetable
from ..users.model import UserProfile


@dataclass
class UserBucket:
    subjects: dict[str, Subject] = field(default_factory=dict)
    timetables: dict[str, Timetable] = field(default_factory=dict)
    classes: dict[str, ScheduledClass] = field(default_factory=dict)
    profile: Optional[UserProfile] = None
    notification_settings: Optional[NotificationSettings] = None


class InMemoryStore:
    """Process-local store shared by all in-memory gateways (dev/testing)."""

    def __init__(self):
        self._buckets: dict[str, UserBucket] = {}

    def bucket(self, user_id: str) -> UserBucket:
        return self._buckets.setdefault(user_id, UserBucket())


class InMemoryGateway:
    """PersistenceGateway backed by an InMemoryStore, scoped to one user."""

    def __init__(self, store: InMemoryStore, user_id: str):
        self._store = store
        self.user_id = user_id

    @property
    def _bucket(self) -> UserBucket:
        return self._store.bucket(self.user_id)

    def load_subjects(self) -> Sequence[Subject]:
        return list(self._bucket.subjects.values())

    def load_timetables(self) -> Sequence[Timetable]:
        return list(self._bucket.timetables.values())

    def load_scheduled_classes(self) -> Sequence[ScheduledClass]:
        return list(self._bucket.classes.values())

    def save_subject(self, subject: Subject) -> None:
        self._bucket.subjects[subject.id] = subject

    def update_subject(self, subject: Subject) -> None:
        self._bucket.subjects[subject.id] = subject

    def delete_subject(self, subject_id: str) -> None:
        self._bucket.subjects.pop(subject_id, None)

    def save_timetable(self, timetable: Timetable) -> None:
        self._bucket.timetables[timetable.id] = timetable

    def delete_timetable(self, timetable_id: str) -> None:
        self._bucket.timetables.pop(timetable_id, None)

    def save_scheduled_class(self, scheduled: ScheduledClass) -> None:
        self._bucket.classes[scheduled.id] = scheduled

    def update_scheduled_class(self, scheduled: ScheduledClass) -> None:
        self._bucket.classes[scheduled.id] = scheduled

    def delete_scheduled_class(self, class_id: str) -> None:
        self._bucket.classes.pop(class_id, None)

    def load_user_profile(self) -> Optional[UserProfile]:
        return self._bucket.profile

    def save_user_profile(self, profile: UserProfile) -> None:
        self._bucket.profile = profile

    def load_notification_settings(self) -> Optional[NotificationSettings]:
        return self._bucket.notification_settings

    def save_notification_settings(self, settings: NotificationSettings) -> None:
        self._bucket.notification_settings = settings
