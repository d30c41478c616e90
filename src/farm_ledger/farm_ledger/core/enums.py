from __future__ import annotations

from enum import Enum

from .constants import FULL_DAY_VALUE, HALF_DAY_VALUE


class RecordStatus(str, Enum):
    """Master data status (workers, groups, expense categories)."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class AttendanceStatus(str, Enum):
    """Daily attendance mark stored in a group's day entry."""

    PRESENT = "P"
    ABSENT = "A"
    HALF = "H"
    UNMARKED = ""

    @property
    def value_in_days(self) -> float:
        if self is AttendanceStatus.PRESENT:
            return FULL_DAY_VALUE
        if self is AttendanceStatus.HALF:
            return HALF_DAY_VALUE
        return 0.0

    @classmethod
    def parse(cls, raw) -> "AttendanceStatus":
        """Lenient parse for stored marks; anything unknown reads as unmarked."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return cls.UNMARKED
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return cls.UNMARKED


class PaymentFor(str, Enum):
    """What a payment settles."""

    LABOUR = "labour"
    EXPENSE = "expense"
