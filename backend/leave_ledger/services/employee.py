"""Employee registry: create, read, update and delete employees."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from leave_ledger.config import get_settings
from leave_ledger.exceptions import AppError
from leave_ledger.models.employee import Employee
from leave_ledger.models.enums import AuditAction, AuditEntityType, BalanceSource
from leave_ledger.models.leave import LeaveRecord
from leave_ledger.schemas.employee import EmployeeListResponse, EmployeeResponse
from leave_ledger.services.audit import model_to_audit_dict, write_audit_log

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leave_ledger.schemas.employee import CreateEmployeeRequest, UpdateEmployeeRequest


def build_employee_response(employee: Employee) -> EmployeeResponse:
    """Map an employee model to its response schema."""
    return EmployeeResponse(
        id=employee.id,  # ty: ignore[invalid-argument-type]
        name=employee.name,
        department=employee.department,
        yearly_allowance=employee.yearly_allowance,
        hire_date=employee.hire_date,
        last_renewal_date=employee.last_renewal_date,
        current_remaining_days=employee.current_remaining_days,
        balance_source=BalanceSource(employee.balance_source),
        created_at=employee.created_at,
    )


async def get_employee_or_404(session: AsyncSession, employee_id: int) -> Employee:
    """Fetch an employee by ID. Raises 404 if not found."""
    employee = await session.get(Employee, employee_id)
    if employee is None:
        raise AppError("Employee not found", status_code=404)
    return employee


async def list_all_employees(session: AsyncSession) -> list[Employee]:
    result = await session.execute(select(Employee).order_by(col(Employee.id)))
    return list(result.scalars().all())


async def create_employee(session: AsyncSession, payload: CreateEmployeeRequest) -> EmployeeResponse:
    """Register a new employee with an untouched balance."""
    yearly_allowance = payload.yearly_allowance
    if yearly_allowance is None:
        yearly_allowance = get_settings().default_yearly_allowance

    employee = Employee(
        name=payload.name,
        department=payload.department,
        hire_date=payload.hire_date,
        yearly_allowance=yearly_allowance,
    )
    session.add(employee)
    await session.flush()

    await write_audit_log(
        session,
        entity_type=AuditEntityType.EMPLOYEE,
        entity_id=employee.id,  # ty: ignore[invalid-argument-type]
        action=AuditAction.CREATE,
        after_json=model_to_audit_dict(employee),
    )

    await session.commit()
    await session.refresh(employee)
    return build_employee_response(employee)


async def get_employee(session: AsyncSession, employee_id: int) -> EmployeeResponse:
    employee = await get_employee_or_404(session, employee_id)
    return build_employee_response(employee)


async def list_employees(session: AsyncSession) -> EmployeeListResponse:
    """List all employees ordered by ID."""
    employees = await list_all_employees(session)
    return EmployeeListResponse(
        items=[build_employee_response(e) for e in employees],
        total=len(employees),
    )


async def update_employee(
    session: AsyncSession,
    employee_id: int,
    payload: UpdateEmployeeRequest,
) -> EmployeeResponse:
    """Edit employee details.

    The balance, its override tag and the renewal date are owned by the
    ledger and are not editable here.
    """
    changes = payload.model_dump(exclude_unset=True)
    cleared = sorted(field for field, value in changes.items() if value is None)
    if cleared:
        raise AppError(f"Fields cannot be cleared: {', '.join(cleared)}", status_code=400)

    employee = await get_employee_or_404(session, employee_id)
    before_dict = model_to_audit_dict(employee)

    for field, value in changes.items():
        setattr(employee, field, value)

    await session.flush()

    await write_audit_log(
        session,
        entity_type=AuditEntityType.EMPLOYEE,
        entity_id=employee.id,  # ty: ignore[invalid-argument-type]
        action=AuditAction.UPDATE,
        before_json=before_dict,
        after_json=model_to_audit_dict(employee),
    )

    await session.commit()
    await session.refresh(employee)
    return build_employee_response(employee)


async def delete_employee(session: AsyncSession, employee_id: int) -> None:
    """Delete an employee who has no leave records.

    Employees with recorded leave are rejected with 409; their records must be
    deleted first so every debit is reversed through the ledger.
    """
    employee = await get_employee_or_404(session, employee_id)

    count_result = await session.execute(
        select(func.count()).select_from(LeaveRecord).where(col(LeaveRecord.employee_id) == employee_id)
    )
    if count_result.scalar_one() > 0:
        raise AppError(
            "Employee has leave records; delete them before deleting the employee",
            status_code=409,
        )

    before_dict = model_to_audit_dict(employee)
    await session.delete(employee)
    await session.flush()

    await write_audit_log(
        session,
        entity_type=AuditEntityType.EMPLOYEE,
        entity_id=employee_id,
        action=AuditAction.DELETE,
        before_json=before_dict,
    )

    await session.commit()
