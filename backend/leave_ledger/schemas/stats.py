# ruff: noqa: TC001, TC003
from __future__ import annotations

from datetime import date

from pydantic import BaseModel

from leave_ledger.models.enums import BalanceSource
from leave_ledger.schemas.leave import LeaveResponse


class EmployeeStatsResponse(BaseModel):
    """Per-employee leave summary shown on a dashboard card."""

    employee_id: int
    name: str
    department: str
    as_of: date
    is_probationary: bool
    yearly_allowance: int
    current_allowance: float
    used_days: float
    remaining_days: float
    low_balance: bool
    balance_source: BalanceSource
    renewal_count: int
    next_renewal_date: date
    recent_leaves: list[LeaveResponse]


class StatsListResponse(BaseModel):
    """Summaries for every employee."""

    as_of: date
    items: list[EmployeeStatsResponse]
    total: int
