"""Stats projector: read-only per-employee leave summary."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from leave_ledger.config import get_settings
from leave_ledger.models.enums import BalanceSource
from leave_ledger.schemas.stats import EmployeeStatsResponse, StatsListResponse
from leave_ledger.services.anniversary import (
    current_year_allowance,
    is_over_one_year,
    next_renewal_date,
    renewal_count,
)
from leave_ledger.services.balance import OverrideBalance, resolve_balance
from leave_ledger.services.duration import calculate_leave_days
from leave_ledger.services.employee import get_employee_or_404, list_all_employees
from leave_ledger.services.leave import build_leave_response, fetch_employee_leaves

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from leave_ledger.models.employee import Employee
    from leave_ledger.models.leave import LeaveRecord

_RECENT_LEAVES = 2


@dataclass(frozen=True)
class EmployeeStats:
    """Derived leave figures for one employee on one day."""

    is_probationary: bool
    current_allowance: float
    used_days: float
    remaining_days: float
    renewal_count: int
    next_renewal_date: date


def used_days_from_records(leaves: Sequence[LeaveRecord]) -> float:
    """Total days consumed by a set of leave records."""
    return sum(calculate_leave_days(leave.start_date, leave.end_date, leave.leave_type) for leave in leaves)


def project_employee_stats(employee: Employee, leaves: Sequence[LeaveRecord], today: date) -> EmployeeStats:
    """Combine the anniversary engine and the ledger into display figures.

    Probationary employees show no allowance and no remaining days; a negative
    override on them is read back as days used. Otherwise an override is the
    remaining figure, and without one remaining days are derived from the
    allowance earned so far.
    """
    used_days = used_days_from_records(leaves)
    balance = resolve_balance(employee)
    upcoming = next_renewal_date(employee.hire_date, today)
    renewals = renewal_count(employee.hire_date, today)

    if not is_over_one_year(employee.hire_date, today):
        if isinstance(balance, OverrideBalance) and balance.value < 0:
            used_days = -balance.value
        return EmployeeStats(
            is_probationary=True,
            current_allowance=0.0,
            used_days=used_days,
            remaining_days=0.0,
            renewal_count=renewals,
            next_renewal_date=upcoming,
        )

    allowance = float(current_year_allowance(employee, today))
    if isinstance(balance, OverrideBalance):
        remaining = balance.value
    else:
        remaining = allowance - used_days

    return EmployeeStats(
        is_probationary=False,
        current_allowance=allowance,
        used_days=used_days,
        remaining_days=remaining,
        renewal_count=renewals,
        next_renewal_date=upcoming,
    )


def _build_stats_response(
    employee: Employee,
    leaves: Sequence[LeaveRecord],
    today: date,
) -> EmployeeStatsResponse:
    stats = project_employee_stats(employee, leaves, today)
    # Most recently registered first; ids are allocated in insertion order.
    recent = sorted(leaves, key=lambda leave: leave.id or 0, reverse=True)[:_RECENT_LEAVES]
    return EmployeeStatsResponse(
        employee_id=employee.id,  # ty: ignore[invalid-argument-type]
        name=employee.name,
        department=employee.department,
        as_of=today,
        is_probationary=stats.is_probationary,
        yearly_allowance=employee.yearly_allowance,
        current_allowance=stats.current_allowance,
        used_days=stats.used_days,
        remaining_days=stats.remaining_days,
        low_balance=stats.remaining_days < get_settings().low_balance_threshold,
        balance_source=BalanceSource(employee.balance_source),
        renewal_count=stats.renewal_count,
        next_renewal_date=stats.next_renewal_date,
        recent_leaves=[build_leave_response(leave, employee.name) for leave in recent],
    )


async def get_employee_stats(
    session: AsyncSession,
    employee_id: int,
    today: date | None = None,
) -> EmployeeStatsResponse:
    """Summary for one employee as of ``today``."""
    if today is None:
        today = date.today()
    employee = await get_employee_or_404(session, employee_id)
    leaves = await fetch_employee_leaves(session, employee_id)
    return _build_stats_response(employee, leaves, today)


async def list_employee_stats(session: AsyncSession, today: date | None = None) -> StatsListResponse:
    """Summaries for every employee, for the dashboard."""
    if today is None:
        today = date.today()
    items = []
    for employee in await list_all_employees(session):
        leaves = await fetch_employee_leaves(session, employee.id)  # ty: ignore[invalid-argument-type]
        items.append(_build_stats_response(employee, leaves, today))
    return StatsListResponse(as_of=today, items=items, total=len(items))
