from __future__ import annotations

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .datetime_utils import is_day_key, is_month_key


def require_month_key(value: str, field_name: str = "month") -> str:
    if not is_month_key(value):
        raise ValidationError(f"{field_name} must be YYYY-MM, got {value!r}")
    return value


def require_day_key(value: str, field_name: str = "date") -> str:
    if not is_day_key(value):
        raise ValidationError(f"{field_name} must be YYYY-MM-DD, got {value!r}")
    return value


def require_attendance_status(value, field_name: str = "status") -> AttendanceStatus:
    """Exact mark from caller input: P, A, H, or "" to clear. No guessing."""
    if isinstance(value, AttendanceStatus):
        return value
    if isinstance(value, str):
        try:
            return AttendanceStatus(value)
        except ValueError:
            pass
    allowed = ", ".join(repr(s.value) for s in AttendanceStatus)
    raise ValidationError(f"{field_name} must be one of {allowed}, got {value!r}")


def require_month_range(start: str, end: str) -> tuple[str, str]:
    require_month_key(start, "start")
    require_month_key(end, "end")
    if start > end:
        raise ValidationError("start month must not be after end month")
    return start, end


def as_amount(value) -> float:
    """Coerce a stored currency value; unreadable values count as zero."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
