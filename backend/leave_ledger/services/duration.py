"""Leave duration calculator."""

from __future__ import annotations

from typing import TYPE_CHECKING

from leave_ledger.models.enums import LeaveType

if TYPE_CHECKING:
    from datetime import date

_HALF_DAY_FACTOR = 0.5


def count_calendar_days(start_date: date, end_date: date) -> int:
    """Inclusive number of calendar days between two dates.

    A reversed range is counted by its absolute distance rather than rejected.
    """
    return abs((end_date - start_date).days) + 1


def calculate_leave_days(start_date: date, end_date: date, leave_type: LeaveType | str) -> float:
    """Return the number of leave days a record consumes.

    Every calendar day in the range counts; half-day leave counts half.
    """
    days = float(count_calendar_days(start_date, end_date))
    if leave_type == LeaveType.HALF_DAY:
        return days * _HALF_DAY_FACTOR
    return days


def changes_day_count(old_type: LeaveType | str, new_type: LeaveType | str) -> bool:
    """Whether reclassifying a record from one type to another alters its day count."""
    return (old_type == LeaveType.HALF_DAY) != (new_type == LeaveType.HALF_DAY)
