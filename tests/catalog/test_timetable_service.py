from __future__ import annotations

from datetime import date

import pytest

from class_schedule.core.exceptions import NotFoundError, ValidationError


def test_first_timetable_is_active_and_only_one_stays_active(user_session):
    first = user_session.timetables.add("A").value
    second = user_session.timetables.add("B").value

    assert first.is_active
    assert not second.is_active

    user_session.timetables.set_active(second.id)

    assert [t.is_active for t in user_session.timetables.list()] == [False, True]
    assert [t.is_active for t in user_session.gateway.load_timetables()] == [False, True]


def test_deleting_active_timetable_promotes_another_and_drops_its_classes(user_session, math_monday):
    math, active = math_monday
    other = user_session.timetables.add("B").value
    user_session.schedule.generate(1, today=date(2026, 10, 19))
    assert user_session.state.classes

    user_session.timetables.delete(active.id)

    assert user_session.timetables.active().id == other.id
    assert user_session.state.classes == []
    assert user_session.gateway.load_scheduled_classes() == []


def test_deleting_last_timetable_leaves_none_active(user_session):
    only = user_session.timetables.add("A").value
    user_session.timetables.delete(only.id)
    assert user_session.timetables.active() is None


def test_slots_add_and_remove(user_session, math_monday):
    math, timetable = math_monday
    slot = user_session.timetables.add_slot(
        timetable.id, subject_id=math.id, day_of_week=5, start_time="9:30", end_time="11:00"
    ).value
    assert slot.start_time == "09:30"
    # Overlapping slots are not prevented.
    user_session.timetables.add_slot(timetable.id, subject_id=math.id, day_of_week=5, start_time="09:30", end_time="11:00")
    assert len(user_session.timetables.active().slots) == 3

    user_session.timetables.remove_slot(timetable.id, slot.id)

    assert slot.id not in {s.id for s in user_session.timetables.active().slots}
    with pytest.raises(NotFoundError):
        user_session.timetables.remove_slot(timetable.id, slot.id)


@pytest.mark.parametrize(
    "day,start,end",
    [(7, "09:00", "10:00"), (-1, "09:00", "10:00"), (1, "25:00", "26:00"), (1, "10:00", "09:00"), (1, "09:00", "09:00"), (1, "nine", "10:00")],
)
def test_add_slot_validation(user_session, math_monday, day, start, end):
    math, timetable = math_monday
    with pytest.raises(ValidationError):
        user_session.timetables.add_slot(timetable.id, subject_id=math.id, day_of_week=day, start_time=start, end_time=end)


def test_unknown_ids(user_session, math_monday):
    math, timetable = math_monday
    with pytest.raises(NotFoundError):
        user_session.timetables.set_active("missing")
    with pytest.raises(NotFoundError):
        user_session.timetables.add_slot("missing", subject_id=math.id, day_of_week=1, start_time="09:00", end_time="10:00")
    with pytest.raises(NotFoundError):
        user_session.timetables.add_slot(timetable.id, subject_id="missing", day_of_week=1, start_time="09:00", end_time="10:00")
