# ruff: noqa: TC003
"""Leave records and the ledger debits and credits that accompany them."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from leave_ledger.exceptions import AppError
from leave_ledger.models.employee import Employee
from leave_ledger.models.enums import (
    AuditAction,
    AuditEntityType,
    LeaveType,
    LedgerEntryType,
    LedgerSourceType,
)
from leave_ledger.models.leave import LeaveRecord
from leave_ledger.schemas.leave import BulkLeaveResponse, LeaveListResponse, LeaveResponse
from leave_ledger.services.audit import model_to_audit_dict, write_audit_log
from leave_ledger.services.balance import apply_balance_change, get_employee_for_update
from leave_ledger.services.duration import calculate_leave_days, changes_day_count
from leave_ledger.services.employee import get_employee_or_404

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leave_ledger.schemas.leave import BulkLeavePayload, CreateLeavePayload, UpdateLeavePayload


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def build_leave_response(leave: LeaveRecord, employee_name: str | None = None) -> LeaveResponse:
    """Map a leave record model to its response schema."""
    return LeaveResponse(
        id=leave.id,  # ty: ignore[invalid-argument-type]
        employee_id=leave.employee_id,
        employee_name=employee_name,
        leave_type=LeaveType(leave.leave_type),
        start_date=leave.start_date,
        end_date=leave.end_date,
        reason=leave.reason,
        used_days=leave.used_days,
        created_at=leave.created_at,
    )


async def _get_leave_or_404(session: AsyncSession, leave_id: int, *, for_update: bool = False) -> LeaveRecord:
    """Fetch a leave record by ID. Raises 404 if not found."""
    leave = await session.get(LeaveRecord, leave_id, with_for_update=for_update, populate_existing=for_update)
    if leave is None:
        raise AppError("Leave record not found", status_code=404)
    return leave


async def _record_leave(
    session: AsyncSession,
    employee: Employee,
    leave_type: LeaveType,
    start_date: date,
    end_date: date,
    reason: str | None,
) -> LeaveRecord:
    """Insert a leave record and debit its days from the locked employee's balance."""
    used_days = calculate_leave_days(start_date, end_date, leave_type)

    leave = LeaveRecord(
        employee_id=employee.id,  # ty: ignore[invalid-argument-type]
        leave_type=leave_type.value,
        start_date=start_date,
        end_date=end_date,
        reason=reason,
        used_days=used_days,
    )
    session.add(leave)
    await session.flush()

    await apply_balance_change(
        session,
        employee,
        -used_days,
        entry_type=LedgerEntryType.LEAVE_DEBIT,
        source_type=LedgerSourceType.LEAVE,
        source_id=str(leave.id),
        effective_on=start_date,
        metadata_json={"leave_type": leave_type.value, "used_days": used_days},
    )

    await write_audit_log(
        session,
        entity_type=AuditEntityType.LEAVE,
        entity_id=leave.id,  # ty: ignore[invalid-argument-type]
        action=AuditAction.CREATE,
        after_json=model_to_audit_dict(leave),
    )
    return leave


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def create_leave(session: AsyncSession, payload: CreateLeavePayload) -> LeaveResponse:
    """Record a leave and debit it from the employee's balance.

    The debit applies whatever the probation status: a probationary employee
    goes negative, borrowing against the allowance they have yet to earn.
    The record and its debit commit together.
    """
    employee = await get_employee_for_update(session, payload.employee_id)

    leave = await _record_leave(
        session,
        employee,
        payload.leave_type,
        payload.start_date,
        payload.end_date,
        payload.reason,
    )

    await session.commit()
    await session.refresh(leave)
    return build_leave_response(leave, employee.name)


async def create_leaves_for_date(session: AsyncSession, payload: BulkLeavePayload) -> BulkLeaveResponse:
    """Record the same single-day leave for several employees in one transaction.

    Every employee is locked up front (in ID order) so an unknown ID rejects
    the whole batch before anything is written.
    """
    employees: list[Employee] = []
    for employee_id in sorted(payload.employee_ids):
        employees.append(await get_employee_for_update(session, employee_id))

    by_id = {e.id: e for e in employees}
    created: list[tuple[LeaveRecord, str]] = []
    for employee_id in payload.employee_ids:
        employee = by_id[employee_id]
        leave = await _record_leave(
            session,
            employee,
            payload.leave_type,
            payload.leave_date,
            payload.leave_date,
            payload.reason,
        )
        created.append((leave, employee.name))

    await session.commit()
    items = [build_leave_response(leave, name) for leave, name in created]
    return BulkLeaveResponse(items=items, total=len(items))


async def update_leave(
    session: AsyncSession,
    leave_id: int,
    payload: UpdateLeavePayload,
) -> LeaveResponse:
    """Reclassify a leave or change its reason.

    Dates cannot change and no ledger adjustment is made, so a type change
    that would alter the day count (to or from half-day) is rejected.
    """
    leave = await _get_leave_or_404(session, leave_id)
    before_dict = model_to_audit_dict(leave)

    changes = payload.model_dump(exclude_unset=True)
    new_type = changes.get("leave_type")
    if new_type is not None:
        if changes_day_count(leave.leave_type, new_type):
            raise AppError(
                "Changing to or from a half-day leave alters its day count; delete and re-create the leave",
                status_code=409,
            )
        leave.leave_type = LeaveType(new_type).value
    if "reason" in changes:
        leave.reason = changes["reason"]

    await session.flush()

    await write_audit_log(
        session,
        entity_type=AuditEntityType.LEAVE,
        entity_id=leave.id,  # ty: ignore[invalid-argument-type]
        action=AuditAction.UPDATE,
        before_json=before_dict,
        after_json=model_to_audit_dict(leave),
    )

    await session.commit()
    await session.refresh(leave)
    employee = await get_employee_or_404(session, leave.employee_id)
    return build_leave_response(leave, employee.name)


async def delete_leave(session: AsyncSession, leave_id: int) -> None:
    """Delete a leave and credit back exactly the days it debited."""
    leave = await _get_leave_or_404(session, leave_id, for_update=True)
    employee = await get_employee_for_update(session, leave.employee_id)

    before_dict = model_to_audit_dict(leave)

    await apply_balance_change(
        session,
        employee,
        leave.used_days,
        entry_type=LedgerEntryType.LEAVE_CREDIT,
        source_type=LedgerSourceType.LEAVE,
        source_id=str(leave.id),
        effective_on=leave.start_date,
        metadata_json={"leave_type": leave.leave_type, "used_days": leave.used_days},
    )

    await session.delete(leave)
    await session.flush()

    await write_audit_log(
        session,
        entity_type=AuditEntityType.LEAVE,
        entity_id=leave_id,
        action=AuditAction.DELETE,
        before_json=before_dict,
    )

    await session.commit()


async def get_leave(session: AsyncSession, leave_id: int) -> LeaveResponse:
    leave = await _get_leave_or_404(session, leave_id)
    employee = await get_employee_or_404(session, leave.employee_id)
    return build_leave_response(leave, employee.name)


async def list_leaves(session: AsyncSession) -> LeaveListResponse:
    """List all leave records with the employee name, newest created first."""
    result = await session.execute(
        select(LeaveRecord, col(Employee.name))
        .join(Employee, col(LeaveRecord.employee_id) == col(Employee.id))
        .order_by(col(LeaveRecord.created_at).desc(), col(LeaveRecord.id).desc())
    )
    rows = result.all()
    return LeaveListResponse(
        items=[build_leave_response(leave, name) for leave, name in rows],
        total=len(rows),
    )


async def fetch_employee_leaves(session: AsyncSession, employee_id: int) -> list[LeaveRecord]:
    result = await session.execute(
        select(LeaveRecord)
        .where(col(LeaveRecord.employee_id) == employee_id)
        .order_by(col(LeaveRecord.start_date).desc(), col(LeaveRecord.id).desc())
    )
    return list(result.scalars().all())


async def list_employee_leaves(session: AsyncSession, employee_id: int) -> LeaveListResponse:
    """List one employee's leave records, latest start date first."""
    employee = await get_employee_or_404(session, employee_id)
    leaves = await fetch_employee_leaves(session, employee_id)
    return LeaveListResponse(
        items=[build_leave_response(leave, employee.name) for leave in leaves],
        total=len(leaves),
    )
