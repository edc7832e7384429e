# ruff: noqa: B008
from __future__ import annotations

from fastapi import APIRouter, Path

from leave_ledger.db import SessionDep
from leave_ledger.schemas.calendar import CalendarMonthResponse
from leave_ledger.services.calendar import get_month_calendar

calendar_router = APIRouter(tags=["calendar"])


@calendar_router.get("/calendar/{year}/{month}", response_model=CalendarMonthResponse)
async def month_calendar(
    session: SessionDep,
    year: int = Path(ge=1, le=9999),
    month: int = Path(ge=1, le=12),
) -> CalendarMonthResponse:
    """Leaves per day for one month."""
    return await get_month_calendar(session, year, month)
