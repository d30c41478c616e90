from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.constants import DAY_KEY_FORMAT, MONTH_KEY_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DAY_KEY_FORMAT).date()


def parse_month_key(value: str) -> date:
    """Parse YYYY-MM string into the first day of that month."""
    return datetime.strptime(value, MONTH_KEY_FORMAT).date()


def is_day_key(value) -> bool:
    if not isinstance(value, str) or len(value) != 10:
        return False
    try:
        parse_iso_date(value)
    except ValueError:
        return False
    return True


def is_month_key(value) -> bool:
    if not isinstance(value, str) or len(value) != 7:
        return False
    try:
        parse_month_key(value)
    except ValueError:
        return False
    return True


def month_of(day_key: str) -> Optional[str]:
    """Month key a day key belongs to, or None for a malformed day key."""
    if not is_day_key(day_key):
        return None
    return day_key[:7]


def shift_month(month: str, delta: int) -> str:
    d = parse_month_key(month)
    index = d.year * 12 + (d.month - 1) + int(delta)
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def in_month_range(month: str, start: Optional[str], end: Optional[str]) -> bool:
    # Zero-padded keys keep lexicographic order equal to calendar order.
    if start and month < start:
        return False
    if end and month > end:
        return False
    return True


def current_month_key(today: Optional[date] = None) -> str:
    return (today or date.today()).strftime(MONTH_KEY_FORMAT)
