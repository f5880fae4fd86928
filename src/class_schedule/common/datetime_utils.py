from __future__ import annotations

from datetime import date, datetime, time, timedelta

from ..core.constants import DATE_FORMAT, TIME_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def parse_hhmm(value: str) -> time:
    """Parse HH:mm string into time."""
    return datetime.strptime(value, TIME_FORMAT).time()


def format_hhmm(value: time) -> str:
    return value.strftime(TIME_FORMAT)


def day_of_week(value: date) -> int:
    """Day of week with Sunday=0 .. Saturday=6.

    Note: date.weekday() is Monday=0, so shift by one.
    """
    return (value.weekday() + 1) % 7


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def combine(day: str, hhmm: str) -> datetime:
    """Local datetime for a YYYY-MM-DD date and HH:mm time."""
    return datetime.combine(parse_iso_date(day), parse_hhmm(hhmm))


def today_local() -> date:
    return now_local().date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def now_iso() -> str:
    return now_local().isoformat(timespec="seconds")
