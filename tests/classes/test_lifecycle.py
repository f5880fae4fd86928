from __future__ import annotations

from datetime import date

import pytest

from class_schedule.core.enums import Attendance, ClassStatus
from class_schedule.core.exceptions import NotFoundError, ValidationError

MONDAY = date(2026, 10, 19)


@pytest.fixture
def generated(user_session, math_monday):
    return user_session.schedule.generate(1, today=MONDAY).value


def test_update_status_accepts_any_transition(user_session, generated):
    cls = generated[0]
    for status in (ClassStatus.CANCELLED, ClassStatus.HOLIDAY, ClassStatus.RESCHEDULED, "confirmed", ClassStatus.SCHEDULED):
        user_session.lifecycle.update_status(cls.id, status)
        assert user_session.state.find_class(cls.id).status == ClassStatus(status)


def test_update_status_rejects_unknown_status(user_session, generated):
    with pytest.raises(ValidationError):
        user_session.lifecycle.update_status(generated[0].id, "postponed")


def test_mark_attendance_keeps_status_and_reset_restores_unmarked(user_session, generated):
    cls = generated[0]

    marked = user_session.lifecycle.mark_attendance(cls.id, True).value
    assert marked.attended is Attendance.ATTENDED
    assert marked.status == ClassStatus.SCHEDULED

    reset = user_session.lifecycle.reset_attendance(cls.id).value
    assert reset.attended is Attendance.UNMARKED
    assert reset.status == ClassStatus.SCHEDULED


def test_mark_attendance_is_allowed_on_cancelled_class(user_session, generated):
    cls = generated[0]
    user_session.lifecycle.update_status(cls.id, ClassStatus.CANCELLED)

    assert user_session.lifecycle.mark_attendance(cls.id, False).value.attended is Attendance.MISSED


def test_reset_class_status_is_full_undo(user_session, generated):
    cls = generated[0]
    user_session.lifecycle.update_status(cls.id, ClassStatus.CONFIRMED)
    user_session.lifecycle.mark_attendance(cls.id, True)

    reset = user_session.lifecycle.reset_class_status(cls.id).value

    assert reset.status == ClassStatus.SCHEDULED
    assert reset.attended is Attendance.UNMARKED
    assert user_session.gateway.load_scheduled_classes()[0].status == ClassStatus.SCHEDULED


def test_unknown_class_raises_and_changes_nothing(user_session, generated):
    before = list(user_session.state.classes)

    with pytest.raises(NotFoundError):
        user_session.lifecycle.mark_attendance("nope", True)
    with pytest.raises(NotFoundError):
        user_session.lifecycle.reset_class_status("nope")

    assert user_session.state.classes == before


def test_mark_today_as_holiday_only_touches_todays_scheduled(user_session, math_monday):
    math, timetable = math_monday
    user_session.timetables.add_slot(timetable.id, subject_id=math.id, day_of_week=1, start_time="11:00", end_time="12:00")
    user_session.timetables.add_slot(timetable.id, subject_id=math.id, day_of_week=1, start_time="14:00", end_time="15:00")
    classes = user_session.schedule.generate(1, today=MONDAY).value
    today = [c for c in classes if c.date == "2026-10-19"]
    assert len(today) == 3

    user_session.lifecycle.update_status(today[1].id, ClassStatus.CONFIRMED)
    user_session.lifecycle.update_status(today[2].id, ClassStatus.CANCELLED)

    mutation = user_session.lifecycle.mark_today_as_holiday(today=MONDAY)

    assert [c.id for c in mutation.value] == [today[0].id]
    statuses = {c.id: c.status for c in user_session.state.classes}
    assert statuses[today[0].id] == ClassStatus.HOLIDAY
    assert statuses[today[1].id] == ClassStatus.CONFIRMED
    assert statuses[today[2].id] == ClassStatus.CANCELLED
    others = [c for c in user_session.state.classes if c.date != "2026-10-19"]
    assert others and all(c.status == ClassStatus.SCHEDULED for c in others)


def test_observers_hear_about_changes(user_session, generated):
    changes = []
    unsubscribe = user_session.state.subscribe(changes.append)

    user_session.lifecycle.mark_attendance(generated[0].id, True)
    unsubscribe()
    user_session.lifecycle.reset_attendance(generated[0].id)

    assert changes == ["classes"]


def test_failing_observer_does_not_skip_the_write(user_session, generated, caplog):
    def broken(_change):
        raise RuntimeError("render failed")

    user_session.state.subscribe(broken)
    mutation = user_session.lifecycle.mark_attendance(generated[0].id, True)

    assert mutation.ok
    stored = {c.id: c for c in user_session.gateway.load_scheduled_classes()}
    assert stored[generated[0].id].attended is Attendance.ATTENDED
    assert "render failed" in caplog.text
