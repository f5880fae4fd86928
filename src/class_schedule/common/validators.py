from __future__ import annotations

from datetime import datetime

from ..core.constants import TIME_FORMAT
from ..core.enums import ClassStatus, SubjectColor
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_hhmm(value: str, field_name: str) -> str:
    """Validate an HH:mm time and return it zero-padded (9:05 -> 09:05)."""
    try:
        parsed = datetime.strptime((value or "").strip(), TIME_FORMAT)
    except ValueError:
        raise ValidationError(f"{field_name} must be in HH:mm format") from None
    return parsed.strftime(TIME_FORMAT)


def require_day_of_week(value: int) -> int:
    try:
        day = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Day of week must be a number 0-6") from None
    if not 0 <= day <= 6:
        raise ValidationError("Day of week must be a number 0-6")
    return day


def require_color(value: SubjectColor | str) -> SubjectColor:
    try:
        return SubjectColor(value)
    except ValueError:
        raise ValidationError(f"Unknown subject color: {value}") from None


def require_status(value: ClassStatus | str) -> ClassStatus:
    try:
        return ClassStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown class status: {value}") from None
