from __future__ import annotations

import pytest

from class_schedule.persistence.memory import InMemoryGateway, InMemoryStore
from class_schedule.session import UserSession


class RecordingNotifier:
    def __init__(self, *, granted: bool = True):
        self.granted = granted
        self.sent: list[tuple[str, str, str]] = []

    def permission_granted(self) -> bool:
        return self.granted

    def emit(self, title: str, body: str, tag: str) -> None:
        self.sent.append((title, body, tag))


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def user_session(store, notifier):
    s = UserSession("student-1", InMemoryGateway(store, "student-1"), notifier=notifier)
    s.load()
    yield s
    s.close()


@pytest.fixture
def math_monday(user_session):
    """Subject 'Math' with one Monday 09:00-10:00 slot on the active timetable."""
    math = user_session.subjects.add("Math", "blue").value
    timetable = user_session.timetables.add("Semester 1").value
    user_session.timetables.add_slot(
        timetable.id, subject_id=math.id, day_of_week=1, start_time="09:00", end_time="10:00"
    )
    return math, user_session.timetables.active()
