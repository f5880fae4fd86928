"""Drive the service layer directly, without Flask.

Controllers are thin; every rule lives in the services a UserSession wires up.
"""

from class_schedule.classes.queries import format_time_until
from class_schedule.common.datetime_utils import now_local
from class_schedule.container import build_container
from class_schedule.core.logging import configure_logging


def main():
    configure_logging("INFO")
    container = build_container(backend="memory")
    session = container.sessions.get("demo-student")

    math = session.subjects.add("Mathematics", "blue").value
    timetable = session.timetables.add("Semester 1").value
    for day in (1, 3):
        session.timetables.add_slot(timetable.id, subject_id=math.id, day_of_week=day, start_time="09:00", end_time="10:30")

    classes = session.schedule.generate(container.default_horizon_months).value
    print(f"Generated {len(classes)} classes")

    first = classes[0]
    session.lifecycle.update_status(first.id, "confirmed")
    session.lifecycle.mark_attendance(first.id, True)
    print(session.schedule.stats().to_dict())

    now = now_local()
    upcoming = session.schedule.upcoming(now=now)
    if upcoming is not None:
        print(f"Next class in {format_time_until(upcoming, now)}")

    container.sessions.close_all()


if __name__ == "__main__":
    main()
