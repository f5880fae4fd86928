from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..classes.lifecycle import ClassLifecycleService
from ..classes.model import ScheduledClass
from ..common.datetime_utils import combine, format_iso_date, now_local
from ..core.constants import REMINDER_INTERVAL_SECONDS
from ..core.enums import Attendance, ClassStatus, ReminderKind
from ..state import ScheduleState
from .model import Reminder
from .notifier import Notifier

logger = logging.getLogger(__name__)


class ReminderScheduler:
    """Emits at-most-once reminders around today's classes.

    The two flags on ScheduledClass are the only memory it has: a pre-class
    window that passes while nothing is checking is simply missed.
    """

    def __init__(self, state: ScheduleState, lifecycle: ClassLifecycleService, notifier: Notifier):
        self._state = state
        self._lifecycle = lifecycle
        self._notifier = notifier

    def check(self, now: Optional[datetime] = None) -> list[Reminder]:
        """Run one tick; returns the reminders emitted."""
        now = now or now_local()
        with self._state.lock:
            settings = self._state.notification_settings
            if not settings.enabled:
                return []
            if not self._notifier.permission_granted():
                logger.debug("Notification permission not granted, reminders skipped")
                return []

            today = format_iso_date(now.date())
            todays = [c for c in self._state.classes if c.date == today and c.status != ClassStatus.CANCELLED]

            emitted: list[Reminder] = []
            for cls in todays:
                subject = self._state.find_subject(cls.subject_id)
                if subject is None:
                    continue

                start = combine(cls.date, cls.start_time)
                end = combine(cls.date, cls.end_time)

                remind_at = start - timedelta(minutes=settings.before_class_minutes)
                if not cls.reminder_sent and remind_at <= now < start:
                    emitted.append(
                        self._send(
                            Reminder(
                                kind=ReminderKind.BEFORE_CLASS,
                                class_id=cls.id,
                                title=f"{subject.name} class in {settings.before_class_minutes} minutes",
                                body="Is your class happening today?",
                            ),
                            self._lifecycle.mark_reminder_sent,
                        )
                    )

                prompt_after = end + timedelta(minutes=settings.after_class_minutes)
                if self._needs_attendance_prompt(cls) and now > prompt_after:
                    emitted.append(
                        self._send(
                            Reminder(
                                kind=ReminderKind.ATTENDANCE,
                                class_id=cls.id,
                                title=f"Did you attend {subject.name}?",
                                body="Mark your attendance now",
                            ),
                            self._lifecycle.mark_attendance_reminder_sent,
                        )
                    )
            return emitted

    @staticmethod
    def _needs_attendance_prompt(cls: ScheduledClass) -> bool:
        return (
            cls.status == ClassStatus.CONFIRMED
            and cls.attended is Attendance.UNMARKED
            and not cls.attendance_reminder_sent
        )

    def _send(self, reminder: Reminder, mark: Callable[[str], object]) -> Reminder:
        self._notifier.emit(reminder.title, reminder.body, reminder.tag)
        mark(reminder.class_id)
        logger.info("Sent %s reminder for class %s", reminder.kind.value, reminder.class_id)
        return reminder


class ReminderTimer:
    """Runs a callback every interval on a daemon thread until stopped.

    Fires once immediately on start.
    """

    def __init__(self, tick: Callable[[], object], *, interval_seconds: float = REMINDER_INTERVAL_SECONDS):
        self._tick = tick
        self._interval = float(interval_seconds)
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="reminder-timer", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self._interval + 1)

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self._tick()
            except Exception:
                # A failing tick must not kill the timer; the next one retries.
                logger.exception("Reminder tick failed")
            self._stop.wait(self._interval)
