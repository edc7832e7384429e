"""Balance ledger: the signed per-employee balance and every mutation applied to it."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select
from sqlmodel import col

from leave_ledger.exceptions import AppError
from leave_ledger.models.employee import Employee
from leave_ledger.models.enums import (
    AuditAction,
    AuditEntityType,
    BalanceSource,
    LedgerEntryType,
    LedgerSourceType,
)
from leave_ledger.models.ledger import LedgerEntry
from leave_ledger.schemas.ledger import LedgerEntryResponse, LedgerListResponse
from leave_ledger.services.anniversary import is_over_one_year
from leave_ledger.services.audit import model_to_audit_dict, write_audit_log
from leave_ledger.services.employee import build_employee_response

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leave_ledger.schemas.employee import BalanceOverrideRequest, EmployeeResponse


# ---------------------------------------------------------------------------
# Tagged balance
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ComputedBalance:
    """No override recorded: remaining days are derived from allowance and records."""


@dataclass(frozen=True)
class OverrideBalance:
    """An administrator set the balance; the stored value wins over recomputation."""

    value: float


LedgerBalance = ComputedBalance | OverrideBalance


def resolve_balance(employee: Employee) -> LedgerBalance:
    """Return which figure the displayed balance must come from."""
    if employee.balance_source == BalanceSource.OVERRIDE:
        return OverrideBalance(value=employee.current_remaining_days or 0.0)
    return ComputedBalance()


# ---------------------------------------------------------------------------
# Override sign convention
# ---------------------------------------------------------------------------


def override_input_to_stored(days: float, *, is_probationary: bool) -> float:
    """Convert an administrator's override input into the stored ledger balance.

    Probationary employees have no earned allowance, so the input is the number
    of days used and is stored as a negative balance. Confirmed employees enter
    the number of days remaining, stored as-is.
    """
    if is_probationary:
        if days < 0:
            raise AppError("Days used cannot be negative for a probationary employee", status_code=400)
        return -days
    return days


def stored_to_override_input(stored: float, *, is_probationary: bool) -> float:
    """Inverse of :func:`override_input_to_stored`, for pre-filling an override form."""
    if is_probationary:
        return -stored
    return stored


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_ledger_entry_response(entry: LedgerEntry) -> LedgerEntryResponse:
    """Map a ledger entry model to its response schema."""
    return LedgerEntryResponse(
        id=entry.id,  # ty: ignore[invalid-argument-type]
        employee_id=entry.employee_id,
        entry_type=LedgerEntryType(entry.entry_type),
        amount_days=entry.amount_days,
        balance_after=entry.balance_after,
        effective_on=entry.effective_on,
        source_type=LedgerSourceType(entry.source_type),
        source_id=entry.source_id,
        metadata_json=entry.metadata_json,
        created_at=entry.created_at,
    )


async def get_employee_for_update(session: AsyncSession, employee_id: int) -> Employee:
    """Fetch an employee with a FOR UPDATE lock. Raises 404 if not found.

    All balance mutations for one employee serialize on this row lock.
    """
    result = await session.execute(
        select(Employee)
        .where(col(Employee.id) == employee_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    employee = result.scalar_one_or_none()
    if employee is None:
        raise AppError("Employee not found", status_code=404)
    return employee


async def apply_balance_change(
    session: AsyncSession,
    employee: Employee,
    amount_days: float,
    *,
    entry_type: LedgerEntryType,
    source_type: LedgerSourceType,
    source_id: str,
    effective_on: date,
    metadata_json: dict[str, Any] | None = None,
) -> LedgerEntry:
    """Add a signed amount to the employee's balance and append the matching ledger entry.

    The caller must hold the employee row lock and owns the commit.
    """
    employee.current_remaining_days = (employee.current_remaining_days or 0.0) + amount_days

    entry = LedgerEntry(
        employee_id=employee.id,  # ty: ignore[invalid-argument-type]
        entry_type=entry_type.value,
        amount_days=amount_days,
        balance_after=employee.current_remaining_days,
        effective_on=effective_on,
        source_type=source_type.value,
        source_id=source_id,
        metadata_json=metadata_json,
    )
    session.add(entry)
    await session.flush()
    return entry


# ---------------------------------------------------------------------------
# Read path
# ---------------------------------------------------------------------------


async def get_employee_ledger(
    session: AsyncSession,
    employee_id: int,
    offset: int = 0,
    limit: int = 50,
) -> LedgerListResponse:
    """Get paginated ledger entries for an employee, newest first."""
    base_filter = [col(LedgerEntry.employee_id) == employee_id]

    count_result = await session.execute(select(func.count()).select_from(LedgerEntry).where(*base_filter))
    total = count_result.scalar_one()

    entries_result = await session.execute(
        select(LedgerEntry)
        .where(*base_filter)
        .order_by(col(LedgerEntry.created_at).desc(), col(LedgerEntry.id).desc())
        .offset(offset)
        .limit(limit)
    )
    entries = list(entries_result.scalars().all())

    return LedgerListResponse(
        items=[_build_ledger_entry_response(e) for e in entries],
        total=total,
    )


# ---------------------------------------------------------------------------
# Write path: administrative override
# ---------------------------------------------------------------------------


async def set_balance_override(
    session: AsyncSession,
    employee_id: int,
    payload: BalanceOverrideRequest,
    today: date | None = None,
) -> EmployeeResponse:
    """Overwrite an employee's balance with an administrator-supplied figure.

    Flow:
    1. Lock the employee row
    2. Convert the input through the probation sign convention
    3. Post an OVERRIDE ledger entry for the delta
    4. Tag the balance as overridden
    5. Write audit log and commit
    """
    if today is None:
        today = date.today()

    employee = await get_employee_for_update(session, employee_id)
    is_probationary = not is_over_one_year(employee.hire_date, today)
    stored = override_input_to_stored(payload.days, is_probationary=is_probationary)

    before_dict = model_to_audit_dict(employee)
    delta = stored - (employee.current_remaining_days or 0.0)

    await apply_balance_change(
        session,
        employee,
        delta,
        entry_type=LedgerEntryType.OVERRIDE,
        source_type=LedgerSourceType.ADMIN,
        source_id=str(uuid.uuid4()),
        effective_on=today,
        metadata_json={
            "input_days": payload.days,
            "is_probationary": is_probationary,
            "reason": payload.reason,
        },
    )
    employee.balance_source = BalanceSource.OVERRIDE.value
    await session.flush()

    await write_audit_log(
        session,
        entity_type=AuditEntityType.BALANCE,
        entity_id=employee.id,  # ty: ignore[invalid-argument-type]
        action=AuditAction.OVERRIDE,
        before_json=before_dict,
        after_json=model_to_audit_dict(employee),
    )

    await session.commit()
    await session.refresh(employee)
    return build_employee_response(employee)
