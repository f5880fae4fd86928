from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..core.constants import REMINDER_INTERVAL_SECONDS
from ..core.exceptions import PermissionDeniedError, ValidationError
from ..persistence.gateway import PersistenceGateway
from ..persistence.writes import DurableWriter, Mutation
from ..state import SETTINGS, ScheduleState
from .model import NotificationSettings
from .notifier import Notifier
from .scheduler import ReminderScheduler, ReminderTimer

logger = logging.getLogger(__name__)


class NotificationService:
    """Use case: notification settings and the lifetime of the reminder timer."""

    def __init__(
        self,
        state: ScheduleState,
        gateway: PersistenceGateway,
        writer: DurableWriter,
        *,
        scheduler: ReminderScheduler,
        notifier: Notifier,
        interval_seconds: float = REMINDER_INTERVAL_SECONDS,
    ):
        self._state = state
        self._gateway = gateway
        self._writer = writer
        self._scheduler = scheduler
        self._notifier = notifier
        self._timer = ReminderTimer(scheduler.check, interval_seconds=interval_seconds)

    @property
    def settings(self) -> NotificationSettings:
        return self._state.notification_settings

    @property
    def timer_running(self) -> bool:
        return self._timer.running

    def request_permission(self) -> bool:
        if not self._notifier.permission_granted():
            raise PermissionDeniedError("Notifications are blocked; enable them in the platform settings")
        return True

    def update_settings(
        self,
        *,
        enabled: Optional[bool] = None,
        before_class_minutes: Optional[int] = None,
        after_class_minutes: Optional[int] = None,
    ) -> Mutation[NotificationSettings]:
        """Merge a partial update, persist it and start/stop reminders to match."""
        changes: dict = {}
        if enabled is not None:
            if not isinstance(enabled, bool):
                raise ValidationError("enabled must be true or false")
            changes["enabled"] = enabled
        for key, value in (("before_class_minutes", before_class_minutes), ("after_class_minutes", after_class_minutes)):
            if value is None:
                continue
            if int(value) < 0:
                raise ValidationError("Reminder minutes must not be negative")
            changes[key] = int(value)

        with self._state.lock:
            updated = replace(self._state.notification_settings, **changes)
            self._state.notification_settings = updated
            self._state.notify(SETTINGS)
            result = self._writer.write(
                "save_notification_settings",
                self._gateway.user_id,
                self._gateway.save_notification_settings,
                updated,
            )

        # Outside the lock: stopping joins the timer thread, which may be waiting on it.
        self.sync_timer()
        return Mutation(updated, (result,))

    def sync_timer(self) -> None:
        enabled = self._state.notification_settings.enabled
        if enabled and not self._timer.running:
            logger.info("user=%s reminders enabled", self._gateway.user_id)
            self._timer.start()
        elif not enabled and self._timer.running:
            logger.info("user=%s reminders disabled", self._gateway.user_id)
            self._timer.stop()

    def close(self) -> None:
        self._timer.stop()
