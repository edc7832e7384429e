"""Renewal scheduler: credit each employee's yearly allowance once per renewal anniversary."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from leave_ledger.models.employee import Employee
from leave_ledger.models.enums import AuditAction, AuditEntityType, LedgerEntryType, LedgerSourceType
from leave_ledger.services.anniversary import add_months, add_years, current_renewal_date
from leave_ledger.services.audit import model_to_audit_dict, write_audit_log
from leave_ledger.services.balance import apply_balance_change, get_employee_for_update

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


@dataclass
class RenewalRunResult:
    """Summary of a renewal run."""

    target_date: date
    scanned: int = 0
    renewed: int = 0
    skipped: int = 0
    errors: int = 0


# ---------------------------------------------------------------------------
# Pure computation helpers (no DB)
# ---------------------------------------------------------------------------


def is_renewal_candidate(employee: Employee, today: date) -> bool:
    """Selection predicate for a renewal scan.

    The last renewal must be at least a year old (or absent) and the
    employee must be at least a month past hire.
    """
    if employee.last_renewal_date is not None and add_years(employee.last_renewal_date, 1) > today:
        return False
    return add_months(employee.hire_date, 1) <= today


def due_renewal_date(employee: Employee, today: date) -> date | None:
    """Anniversary whose allowance is owed on ``today``, or None if nothing is owed."""
    if not is_renewal_candidate(employee, today):
        return None
    cycle_date = current_renewal_date(employee.hire_date, today)
    if cycle_date is None:
        return None
    if employee.last_renewal_date is not None and employee.last_renewal_date >= cycle_date:
        return None
    return cycle_date


def _build_renewal_source_id(employee_id: int, cycle_date: date) -> str:
    """Build idempotency source_id for a renewal credit."""
    return f"renewal:{employee_id}:{cycle_date.isoformat()}"


# ---------------------------------------------------------------------------
# DB-backed helpers
# ---------------------------------------------------------------------------


async def _find_renewal_candidates(session: AsyncSession, today: date) -> list[int]:
    """IDs of employees matching the renewal selection predicate, in ID order."""
    result = await session.execute(select(Employee).order_by(col(Employee.id)))
    return [e.id for e in result.scalars().all() if is_renewal_candidate(e, today)]  # type: ignore[misc]


async def _renew_employee(session: AsyncSession, employee_id: int, today: date) -> bool:
    """Credit one employee's allowance if a renewal is due. Returns True if credited.

    The gate is evaluated after taking the row lock, so a scheduled and a
    manual run racing on the same employee credit at most once.
    """
    employee = await get_employee_for_update(session, employee_id)
    cycle_date = due_renewal_date(employee, today)
    if cycle_date is None:
        return False

    before_dict = model_to_audit_dict(employee)

    await apply_balance_change(
        session,
        employee,
        float(employee.yearly_allowance),
        entry_type=LedgerEntryType.RENEWAL,
        source_type=LedgerSourceType.SYSTEM,
        source_id=_build_renewal_source_id(employee_id, cycle_date),
        effective_on=today,
        metadata_json={
            "renewal_date": cycle_date.isoformat(),
            "yearly_allowance": employee.yearly_allowance,
        },
    )
    employee.last_renewal_date = today
    await session.flush()

    await write_audit_log(
        session,
        entity_type=AuditEntityType.RENEWAL,
        entity_id=employee_id,
        action=AuditAction.RENEW,
        before_json=before_dict,
        after_json=model_to_audit_dict(employee),
    )
    return True


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


async def run_renewals(
    session: AsyncSession,
    target_date: date | None = None,
) -> RenewalRunResult:
    """Apply every renewal due on the target date.

    Each employee is processed in its own savepoint: a failure is logged and
    counted, its changes are rolled back, and the scan continues. Re-running
    for the same date renews nobody twice.

    Args:
        session: Database session; committed once at the end of the run.
        target_date: Date to process renewals for (defaults to today).
    """
    if target_date is None:
        target_date = date.today()

    result = RenewalRunResult(target_date=target_date)

    for employee_id in await _find_renewal_candidates(session, target_date):
        result.scanned += 1
        try:
            async with session.begin_nested():
                renewed = await _renew_employee(session, employee_id, target_date)
        except Exception:
            logger.exception("Error processing renewal for employee=%s on %s", employee_id, target_date)
            result.errors += 1
            continue

        if renewed:
            result.renewed += 1
        else:
            result.skipped += 1

    await session.commit()
    return result
