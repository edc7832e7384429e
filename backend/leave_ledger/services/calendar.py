"""Month calendar projection of leave records."""

from __future__ import annotations

from calendar import monthrange
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from leave_ledger.exceptions import AppError
from leave_ledger.models.employee import Employee
from leave_ledger.models.leave import LeaveRecord
from leave_ledger.schemas.calendar import CalendarDay, CalendarMonthResponse
from leave_ledger.services.leave import build_leave_response

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


def _month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return (first_day, last_day) of a month, both inclusive."""
    if not 1 <= month <= 12:
        raise AppError("Month must be between 1 and 12", status_code=400)
    _, days_in_month = monthrange(year, month)
    return date(year, month, 1), date(year, month, days_in_month)


def _covers(leave: LeaveRecord, day: date) -> bool:
    """Whether a leave covers a day. Reversed ranges cover the same span."""
    low, high = sorted((leave.start_date, leave.end_date))
    return low <= day <= high


async def get_month_calendar(session: AsyncSession, year: int, month: int) -> CalendarMonthResponse:
    """Every day of the month with the leaves that cover it."""
    first_day, last_day = _month_bounds(year, month)

    # A reversed record still overlaps if either endpoint pair straddles the month.
    result = await session.execute(
        select(LeaveRecord, col(Employee.name))
        .join(Employee, col(LeaveRecord.employee_id) == col(Employee.id))
        .where(
            (
                (col(LeaveRecord.start_date) <= last_day) & (col(LeaveRecord.end_date) >= first_day)
            )
            | ((col(LeaveRecord.end_date) <= last_day) & (col(LeaveRecord.start_date) >= first_day))
        )
        .order_by(col(LeaveRecord.start_date), col(LeaveRecord.id))
    )
    rows = result.all()

    days: list[CalendarDay] = []
    for day_of_month in range(1, last_day.day + 1):
        current = date(year, month, day_of_month)
        days.append(
            CalendarDay(
                date=current,
                weekday=current.weekday(),
                leaves=[build_leave_response(leave, name) for leave, name in rows if _covers(leave, current)],
            )
        )

    return CalendarMonthResponse(year=year, month=month, days=days)
