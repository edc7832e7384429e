# ruff: noqa: TC001, TC003
from __future__ import annotations

import datetime

from pydantic import BaseModel

from leave_ledger.schemas.leave import LeaveResponse


class CalendarDay(BaseModel):
    """Leaves covering one calendar day."""

    date: datetime.date
    weekday: int
    leaves: list[LeaveResponse]


class CalendarMonthResponse(BaseModel):
    """Every day of a month with the leaves that cover it."""

    year: int
    month: int
    days: list[CalendarDay]
