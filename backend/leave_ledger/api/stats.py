# ruff: noqa: B008
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Query

from leave_ledger.db import SessionDep
from leave_ledger.schemas.stats import EmployeeStatsResponse, StatsListResponse
from leave_ledger.services import stats as stats_service

stats_router = APIRouter(tags=["stats"])


@stats_router.get("/stats", response_model=StatsListResponse)
async def list_stats(
    session: SessionDep,
    as_of: date | None = Query(default=None),
) -> StatsListResponse:
    """Leave summary for every employee."""
    return await stats_service.list_employee_stats(session, as_of)


@stats_router.get("/employees/{employee_id}/stats", response_model=EmployeeStatsResponse)
async def get_employee_stats(
    employee_id: int,
    session: SessionDep,
    as_of: date | None = Query(default=None),
) -> EmployeeStatsResponse:
    """Leave summary for one employee."""
    return await stats_service.get_employee_stats(session, employee_id, as_of)
