from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..classes.model import ScheduledClass
from ..reminders.model import NotificationSettings
from ..subjects.model import Subject
from ..timetables.model import Timetable
from ..users.model import UserProfile


class PersistenceGateway(Protocol):
    """Durable store for one user's data.

    Note (DIP): services depend on this interface, never on a concrete store.
    Every implementation is bound to a single user id and must raise
    PersistenceError when the underlying store fails.
    """

    user_id: str

    def load_subjects(self) -> Sequence[Subject]:
        raise NotImplementedError

    def load_timetables(self) -> Sequence[Timetable]:
        raise NotImplementedError

    def load_scheduled_classes(self) -> Sequence[ScheduledClass]:
        raise NotImplementedError

    def save_subject(self, subject: Subject) -> None:
        raise NotImplementedError

    def update_subject(self, subject: Subject) -> None:
        raise NotImplementedError

    def delete_subject(self, subject_id: str) -> None:
        raise NotImplementedError

    def save_timetable(self, timetable: Timetable) -> None:
        """Create or replace a timetable together with its slots."""

        raise NotImplementedError

    def delete_timetable(self, timetable_id: str) -> None:
        raise NotImplementedError

    def save_scheduled_class(self, scheduled: ScheduledClass) -> None:
        raise NotImplementedError

    def update_scheduled_class(self, scheduled: ScheduledClass) -> None:
        raise NotImplementedError

    def delete_scheduled_class(self, class_id: str) -> None:
        raise NotImplementedError

    def load_user_profile(self) -> Optional[UserProfile]:
        raise NotImplementedError

    def save_user_profile(self, profile: UserProfile) -> None:
        raise NotImplementedError

    def load_notification_settings(self) -> Optional[NotificationSettings]:
        raise NotImplementedError

    def save_notification_settings(self, settings: NotificationSettings) -> None:
        raise NotImplementedError
