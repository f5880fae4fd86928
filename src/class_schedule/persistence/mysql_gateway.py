from __future__ import annotations

from contextlib import contextmanager
from typing import Optional, Sequence

import mysql.connector

from ..classes.model import ScheduledClass
from ..core.enums import Attendance, ClassStatus, SubjectColor
from ..core.exceptions import PersistenceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_bool, normalize_mysql_date
from ..reminders.model import NotificationSettings
from ..subjects.model import Subject
from ..timetables.model import TimeSlot, Timetable
from ..users.model import UserProfile


class MySQLGateway:
    """PersistenceGateway on MySQL; every statement is filtered by user_id."""

    def __init__(self, conn_factory: DatabaseConnection, user_id: str):
        self._conn_factory = conn_factory
        self.user_id = user_id

    @contextmanager
    def _cursor(self):
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                yield cur
        except mysql.connector.Error as e:
            raise PersistenceError(str(e)) from e

    # --- subjects ---

    def load_subjects(self) -> Sequence[Subject]:
        with self._cursor() as cur:
            cur.execute(
                """
                SELECT subject_id, name, color, created_at
                FROM subjects
                WHERE user_id=%s
                ORDER BY created_at ASC
                """,
                (self.user_id,),
            )
            return [
                Subject(
                    id=r["subject_id"],
                    name=r["name"],
                    color=SubjectColor(r["color"]),
                    created_at=r["created_at"],
                )
                for r in fetchall(cur)
            ]

    def save_subject(self, subject: Subject) -> None:
        with self._cursor() as cur:
            cur.execute(
                """
                INSERT INTO subjects(user_id, subject_id, name, color, created_at)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE name=VALUES(name), color=VALUES(color)
                """,
                (self.user_id, subject.id, subject.name, subject.color.value, subject.created_at),
            )

    def update_subject(self, subject: Subject) -> None:
        with self._cursor() as cur:
            cur.execute(
                "UPDATE subjects SET name=%s, color=%s WHERE user_id=%s AND subject_id=%s",
                (subject.name, subject.color.value, self.user_id, subject.id),
            )

    def delete_subject(self, subject_id: str) -> None:
        with self._cursor() as cur:
            cur.execute("DELETE FROM subjects WHERE user_id=%s AND subject_id=%s", (self.user_id, subject_id))

    # --- timetables ---

    def load_timetables(self) -> Sequence[Timetable]:
        with self._cursor() as cur:
            cur.execute(
                """
                SELECT timetable_id, name, created_at, is_active
                FROM timetables
                WHERE user_id=%s
                ORDER BY created_at ASC
                """,
                (self.user_id,),
            )
            rows = fetchall(cur)
            cur.execute(
                """
                SELECT timetable_id, slot_id, subject_id, day_of_week, start_time, end_time
                FROM time_slots
                WHERE user_id=%s
                ORDER BY timetable_id, position
                """,
                (self.user_id,),
            )
            slots: dict[str, list[TimeSlot]] = {}
            for s in fetchall(cur):
                slots.setdefault(s["timetable_id"], []).append(
                    TimeSlot(
                        id=s["slot_id"],
                        subject_id=s["subject_id"],
                        day_of_week=int(s["day_of_week"]),
                        start_time=str(s["start_time"])[:5],
                        end_time=str(s["end_time"])[:5],
                    )
                )
            return [
                Timetable(
                    id=r["timetable_id"],
                    name=r["name"],
                    created_at=r["created_at"],
                    is_active=bool(r["is_active"]),
                    slots=tuple(slots.get(r["timetable_id"], [])),
                )
                for r in rows
            ]

    def save_timetable(self, timetable: Timetable) -> None:
        with self._cursor() as cur:
            cur.execute(
                """
                INSERT INTO timetables(user_id, timetable_id, name, created_at, is_active)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE name=VALUES(name), is_active=VALUES(is_active)
                """,
                (self.user_id, timetable.id, timetable.name, timetable.created_at, int(timetable.is_active)),
            )
            # Slots are embedded: rewrite them as a whole, in order.
            cur.execute("DELETE FROM time_slots WHERE user_id=%s AND timetable_id=%s", (self.user_id, timetable.id))
            for position, slot in enumerate(timetable.slots):
                cur.execute(
                    """
                    INSERT INTO time_slots(user_id, timetable_id, slot_id, position, subject_id, day_of_week, start_time, end_time)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        self.user_id,
                        timetable.id,
                        slot.id,
                        position,
                        slot.subject_id,
                        slot.day_of_week,
                        slot.start_time,
                        slot.end_time,
                    ),
                )

    def delete_timetable(self, timetable_id: str) -> None:
        with self._cursor() as cur:
            cur.execute("DELETE FROM time_slots WHERE user_id=%s AND timetable_id=%s", (self.user_id, timetable_id))
            cur.execute("DELETE FROM timetables WHERE user_id=%s AND timetable_id=%s", (self.user_id, timetable_id))

    # --- scheduled classes ---

    def load_scheduled_classes(self) -> Sequence[ScheduledClass]:
        with self._cursor() as cur:
            cur.execute(
                """
                SELECT class_id, subject_id, timetable_id, class_date, start_time, end_time,
                       status, attended, reminder_sent, attendance_reminder_sent
                FROM scheduled_classes
                WHERE user_id=%s
                ORDER BY class_date ASC, start_time ASC
                """,
                (self.user_id,),
            )
            return [self._to_class(r) for r in fetchall(cur)]

    @staticmethod
    def _to_class(r: dict) -> ScheduledClass:
        return ScheduledClass(
            id=r["class_id"],
            subject_id=r["subject_id"],
            timetable_id=r["timetable_id"],
            date=normalize_mysql_date(r["class_date"]),
            start_time=str(r["start_time"])[:5],
            end_time=str(r["end_time"])[:5],
            status=ClassStatus(r["status"]),
            attended=Attendance.from_flag(normalize_mysql_bool(r["attended"])),
            reminder_sent=bool(r["reminder_sent"]),
            attendance_reminder_sent=bool(r["attendance_reminder_sent"]),
        )

    @staticmethod
    def _attended_param(scheduled: ScheduledClass) -> Optional[int]:
        flag = scheduled.attended.as_flag()
        return None if flag is None else int(flag)

    def save_scheduled_class(self, scheduled: ScheduledClass) -> None:
        with self._cursor() as cur:
            cur.execute(
                """
                INSERT INTO scheduled_classes(
                    user_id, class_id, subject_id, timetable_id, class_date, start_time, end_time,
                    status, attended, reminder_sent, attendance_reminder_sent
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    self.user_id,
                    scheduled.id,
                    scheduled.subject_id,
                    scheduled.timetable_id,
                    scheduled.date,
                    scheduled.start_time,
                    scheduled.end_time,
                    scheduled.status.value,
                    self._attended_param(scheduled),
                    int(scheduled.reminder_sent),
                    int(scheduled.attendance_reminder_sent),
                ),
            )

    def update_scheduled_class(self, scheduled: ScheduledClass) -> None:
        with self._cursor() as cur:
            cur.execute(
                """
                UPDATE scheduled_classes
                SET status=%s, attended=%s, reminder_sent=%s, attendance_reminder_sent=%s
                WHERE user_id=%s AND class_id=%s
                """,
                (
                    scheduled.status.value,
                    self._attended_param(scheduled),
                    int(scheduled.reminder_sent),
                    int(scheduled.attendance_reminder_sent),
                    self.user_id,
                    scheduled.id,
                ),
            )

    def delete_scheduled_class(self, class_id: str) -> None:
        with self._cursor() as cur:
            cur.execute("DELETE FROM scheduled_classes WHERE user_id=%s AND class_id=%s", (self.user_id, class_id))

    # --- profile & settings ---

    def load_user_profile(self) -> Optional[UserProfile]:
        with self._cursor() as cur:
            cur.execute("SELECT user_name FROM user_profiles WHERE user_id=%s", (self.user_id,))
            r = fetchone(cur)
            return UserProfile(user_name=r["user_name"]) if r else None

    def save_user_profile(self, profile: UserProfile) -> None:
        with self._cursor() as cur:
            cur.execute(
                """
                INSERT INTO user_profiles(user_id, user_name) VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE user_name=VALUES(user_name)
                """,
                (self.user_id, profile.user_name),
            )

    def load_notification_settings(self) -> Optional[NotificationSettings]:
        with self._cursor() as cur:
            cur.execute(
                """
                SELECT enabled, before_class_minutes, after_class_minutes
                FROM notification_settings
                WHERE user_id=%s
                """,
                (self.user_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return NotificationSettings(
                enabled=bool(r["enabled"]),
                before_class_minutes=int(r["before_class_minutes"]),
                after_class_minutes=int(r["after_class_minutes"]),
            )

    def save_notification_settings(self, settings: NotificationSettings) -> None:
        with self._cursor() as cur:
            cur.execute(
                """
                INSERT INTO notification_settings(user_id, enabled, before_class_minutes, after_class_minutes)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    enabled=VALUES(enabled),
                    before_class_minutes=VALUES(before_class_minutes),
                    after_class_minutes=VALUES(after_class_minutes)
                """,
                (self.user_id, int(settings.enabled), settings.before_class_minutes, settings.after_class_minutes),
            )
