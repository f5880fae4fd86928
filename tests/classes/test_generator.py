from __future__ import annotations

from datetime import date

import pytest

from class_schedule.classes.generator import generate_schedule, horizon_days, replace_timetable_classes
from class_schedule.classes.model import ScheduledClass
from class_schedule.common.datetime_utils import add_days, day_of_week
from class_schedule.core.enums import Attendance, ClassStatus
from class_schedule.timetables.model import TimeSlot, Timetable

MONDAY = date(2026, 10, 19)
TUESDAY = date(2026, 10, 20)


def _timetable(*slots: TimeSlot) -> Timetable:
    return Timetable(id="tt-1", name="Main", created_at="2026-10-01T08:00:00", is_active=True, slots=slots)


def _slot(slot_id: str, day: int, start: str = "09:00", end: str = "10:00", subject_id: str = "math") -> TimeSlot:
    return TimeSlot(id=slot_id, subject_id=subject_id, day_of_week=day, start_time=start, end_time=end)


def _matching_days(start: date, months: int, weekday: int) -> int:
    return sum(1 for i in range(horizon_days(months) + 1) if day_of_week(add_days(start, i)) == weekday)


def test_monday_slot_one_month_from_monday_gives_five_classes():
    classes = generate_schedule(_timetable(_slot("s1", 1)), 1, today=MONDAY)

    assert [c.date for c in classes] == ["2026-10-19", "2026-10-26", "2026-11-02", "2026-11-09", "2026-11-16"]
    assert all(c.status == ClassStatus.SCHEDULED for c in classes)
    assert all(c.attended is Attendance.UNMARKED for c in classes)


def test_monday_slot_one_month_from_tuesday_gives_four_classes():
    classes = generate_schedule(_timetable(_slot("s1", 1)), 1, today=TUESDAY)
    assert len(classes) == 4


def test_generated_class_copies_slot_and_starts_clean():
    classes = generate_schedule(_timetable(_slot("s1", 1, "13:15", "14:45", "physics")), 1, today=MONDAY)
    first = classes[0]

    assert first.subject_id == "physics"
    assert first.timetable_id == "tt-1"
    assert (first.start_time, first.end_time) == ("13:15", "14:45")
    assert first.reminder_sent is False
    assert first.attendance_reminder_sent is False
    assert len({c.id for c in classes}) == len(classes)


@pytest.mark.parametrize("months", [1, 2, 3, 12])
@pytest.mark.parametrize("start", [MONDAY, TUESDAY, date(2026, 12, 27)])
def test_count_is_slots_times_matching_weekdays(months, start):
    slots = (_slot("a", 1), _slot("b", 1, "11:00", "12:00"), _slot("c", 3), _slot("d", 0))
    classes = generate_schedule(_timetable(*slots), months, today=start)

    expected = 2 * _matching_days(start, months, 1) + _matching_days(start, months, 3) + _matching_days(start, months, 0)
    assert len(classes) == expected


def test_empty_timetable_generates_nothing():
    assert generate_schedule(_timetable(), 3, today=MONDAY) == []


@pytest.mark.parametrize("months", [0, -2])
def test_zero_or_negative_horizon_still_covers_start_date(months):
    assert [c.date for c in generate_schedule(_timetable(_slot("s1", 1)), months, today=MONDAY)] == ["2026-10-19"]
    assert generate_schedule(_timetable(_slot("s1", 2)), months, today=MONDAY) == []


def test_window_end_is_inclusive():
    # 30 days after Monday 2026-10-19 is Wednesday 2026-11-18.
    classes = generate_schedule(_timetable(_slot("s1", 3)), 1, today=MONDAY)
    assert classes[-1].date == "2026-11-18"


def test_replace_only_touches_the_given_timetable():
    old = ScheduledClass(id="old", subject_id="math", timetable_id="tt-1", date="2026-10-01", start_time="09:00", end_time="10:00")
    other = ScheduledClass(id="other", subject_id="art", timetable_id="tt-2", date="2026-10-01", start_time="09:00", end_time="10:00")
    new = ScheduledClass(id="new", subject_id="math", timetable_id="tt-1", date="2026-10-19", start_time="09:00", end_time="10:00")

    result = replace_timetable_classes([old, other], "tt-1", [new])

    assert [c.id for c in result] == ["other", "new"]
