from __future__ import annotations

import logging
from typing import Optional

from .classes.lifecycle import ClassLifecycleService
from .classes.service import ScheduleService
from .core.constants import REMINDER_INTERVAL_SECONDS
from .core.exceptions import AuthenticationError, PersistenceError
from .persistence.gateway import PersistenceGateway
from .persistence.writes import DurableWriter
from .reminders.notifier import LoggingNotifier, Notifier
from .reminders.scheduler import ReminderScheduler
from .reminders.service import NotificationService
from .state import ScheduleState
from .subjects.service import SubjectService
from .timetables.service import TimetableService
from .users.service import ProfileService

logger = logging.getLogger(__name__)


class UserSession:
    """All services of one signed-in user, sharing one ScheduleState.

    Note: Nothing is loaded until load() is called; without a user id a session
    cannot be created at all.
    """

    def __init__(
        self,
        user_id: str,
        gateway: PersistenceGateway,
        *,
        notifier: Optional[Notifier] = None,
        reminder_interval_seconds: float = REMINDER_INTERVAL_SECONDS,
    ):
        if not user_id:
            raise AuthenticationError("A signed-in user is required")

        self.user_id = user_id
        self.gateway = gateway
        self.state = ScheduleState()
        self.writer = DurableWriter(user_id=user_id)
        self.notifier = notifier or LoggingNotifier()

        self.subjects = SubjectService(self.state, gateway, self.writer)
        self.timetables = TimetableService(self.state, gateway, self.writer)
        self.schedule = ScheduleService(self.state, gateway, self.writer)
        self.lifecycle = ClassLifecycleService(self.state, gateway, self.writer)
        self.profile = ProfileService(self.state, gateway, self.writer)
        self.reminders = ReminderScheduler(self.state, self.lifecycle, self.notifier)
        self.notifications = NotificationService(
            self.state,
            gateway,
            self.writer,
            scheduler=self.reminders,
            notifier=self.notifier,
            interval_seconds=reminder_interval_seconds,
        )

    def load(self) -> bool:
        """Load the user's data once at session start.

        A store failure is logged and leaves the session empty but usable.
        """
        try:
            subjects = self.gateway.load_subjects()
            timetables = self.gateway.load_timetables()
            classes = self.gateway.load_scheduled_classes()
            settings = self.gateway.load_notification_settings()
            profile = self.gateway.load_user_profile()
        except PersistenceError as e:
            logger.error("user=%s failed to load data: %s", self.user_id, e)
            return False

        with self.state.lock:
            self.state.subjects = list(subjects)
            self.state.timetables = list(timetables)
            self.state.classes = list(classes)
            if settings is not None:
                self.state.notification_settings = settings
            if profile is not None:
                self.state.profile = profile

        logger.info(
            "user=%s loaded %d subject(s), %d timetable(s), %d class(es)",
            self.user_id,
            len(self.state.subjects),
            len(self.state.timetables),
            len(self.state.classes),
        )
        self.notifications.sync_timer()
        return True

    def close(self) -> None:
        self.notifications.close()
