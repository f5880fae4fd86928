from __future__ import annotations

from datetime import date, datetime

import pytest

from class_schedule.core.enums import ClassStatus, ReminderKind
from class_schedule.reminders.model import NotificationSettings

MONDAY = date(2026, 10, 19)


@pytest.fixture
def todays_class(user_session, math_monday):
    user_session.state.notification_settings = NotificationSettings(
        enabled=True, before_class_minutes=15, after_class_minutes=10
    )
    classes = user_session.schedule.generate(1, today=MONDAY).value
    return classes[0]


def _at(hour: int, minute: int) -> datetime:
    return datetime(2026, 10, 19, hour, minute)


def test_pre_class_reminder_fires_once_inside_window(user_session, notifier, todays_class):
    assert user_session.reminders.check(_at(8, 40)) == []

    sent = user_session.reminders.check(_at(8, 50))
    again = user_session.reminders.check(_at(8, 55))

    assert [r.kind for r in sent] == [ReminderKind.BEFORE_CLASS]
    assert again == []
    assert notifier.sent == [("Math class in 15 minutes", "Is your class happening today?", f"reminder-{todays_class.id}")]
    assert user_session.state.find_class(todays_class.id).reminder_sent
    assert user_session.gateway.load_scheduled_classes()[0].reminder_sent


def test_missed_window_does_not_fire_late(user_session, notifier, todays_class):
    assert user_session.reminders.check(_at(9, 1)) == []
    assert notifier.sent == []


def test_attendance_prompt_needs_confirmed_and_unmarked(user_session, notifier, todays_class):
    # Still scheduled: no prompt.
    assert user_session.reminders.check(_at(10, 30)) == []

    user_session.lifecycle.update_status(todays_class.id, ClassStatus.CONFIRMED)
    assert user_session.reminders.check(_at(10, 10)) == []

    sent = user_session.reminders.check(_at(10, 11))
    assert [r.tag for r in sent] == [f"attendance-{todays_class.id}"]
    assert notifier.sent[-1][0] == "Did you attend Math?"
    assert user_session.reminders.check(_at(10, 30)) == []
    assert user_session.state.find_class(todays_class.id).attendance_reminder_sent


def test_no_prompt_once_attendance_is_marked(user_session, notifier, todays_class):
    user_session.lifecycle.update_status(todays_class.id, ClassStatus.CONFIRMED)
    user_session.lifecycle.mark_attendance(todays_class.id, True)

    assert user_session.reminders.check(_at(11, 0)) == []


def test_cancelled_and_orphaned_classes_are_skipped(user_session, notifier, todays_class):
    user_session.lifecycle.update_status(todays_class.id, ClassStatus.CANCELLED)
    assert user_session.reminders.check(_at(8, 50)) == []

    user_session.lifecycle.update_status(todays_class.id, ClassStatus.SCHEDULED)
    user_session.state.subjects = []
    assert user_session.reminders.check(_at(8, 50)) == []
    assert notifier.sent == []


def test_disabled_settings_or_denied_permission_skip_everything(user_session, notifier, todays_class):
    notifier.granted = False
    assert user_session.reminders.check(_at(8, 50)) == []
    assert not user_session.state.find_class(todays_class.id).reminder_sent

    notifier.granted = True
    user_session.state.notification_settings = NotificationSettings(enabled=False)
    assert user_session.reminders.check(_at(8, 50)) == []
    assert notifier.sent == []


def test_other_days_are_ignored(user_session, notifier, todays_class):
    assert user_session.reminders.check(datetime(2026, 10, 20, 8, 50)) == []
