# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Query, Response, status

from leave_ledger.db import SessionDep
from leave_ledger.schemas.employee import (
    BalanceOverrideRequest,
    CreateEmployeeRequest,
    EmployeeListResponse,
    EmployeeResponse,
    UpdateEmployeeRequest,
)
from leave_ledger.schemas.leave import LeaveListResponse
from leave_ledger.schemas.ledger import LedgerListResponse
from leave_ledger.services import balance as balance_service
from leave_ledger.services import employee as employee_service
from leave_ledger.services import leave as leave_service

employees_router = APIRouter(
    prefix="/employees",
    tags=["employees"],
)


@employees_router.get("", response_model=EmployeeListResponse)
async def list_employees(session: SessionDep) -> EmployeeListResponse:
    """List all employees."""
    return await employee_service.list_employees(session)


@employees_router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(payload: CreateEmployeeRequest, session: SessionDep) -> EmployeeResponse:
    """Register a new employee."""
    return await employee_service.create_employee(session, payload)


@employees_router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(employee_id: int, session: SessionDep) -> EmployeeResponse:
    """Get a single employee."""
    return await employee_service.get_employee(session, employee_id)


@employees_router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: int,
    payload: UpdateEmployeeRequest,
    session: SessionDep,
) -> EmployeeResponse:
    """Edit an employee's details."""
    return await employee_service.update_employee(session, employee_id, payload)


@employees_router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(employee_id: int, session: SessionDep) -> Response:
    """Delete an employee. Rejected while the employee has leave records."""
    await employee_service.delete_employee(session, employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@employees_router.put("/{employee_id}/balance", response_model=EmployeeResponse)
async def override_balance(
    employee_id: int,
    payload: BalanceOverrideRequest,
    session: SessionDep,
    as_of: date | None = Query(default=None),
) -> EmployeeResponse:
    """Set an employee's balance directly.

    ``days`` means days used for a probationary employee and days remaining
    for a confirmed one.
    """
    return await balance_service.set_balance_override(session, employee_id, payload, as_of)


@employees_router.get("/{employee_id}/leaves", response_model=LeaveListResponse)
async def list_employee_leaves(employee_id: int, session: SessionDep) -> LeaveListResponse:
    """List one employee's leave records."""
    return await leave_service.list_employee_leaves(session, employee_id)


@employees_router.get("/{employee_id}/ledger", response_model=LedgerListResponse)
async def get_employee_ledger(
    employee_id: int,
    session: SessionDep,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> LedgerListResponse:
    """Get an employee's balance ledger entries, newest first."""
    await employee_service.get_employee_or_404(session, employee_id)
    return await balance_service.get_employee_ledger(session, employee_id, offset, limit)
