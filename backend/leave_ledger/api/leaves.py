# ruff: noqa: TC001
from __future__ import annotations

from fastapi import APIRouter, Response, status

from leave_ledger.db import SessionDep
from leave_ledger.schemas.leave import (
    BulkLeavePayload,
    BulkLeaveResponse,
    CreateLeavePayload,
    LeaveListResponse,
    LeaveResponse,
    UpdateLeavePayload,
)
from leave_ledger.services import leave as leave_service

leaves_router = APIRouter(
    prefix="/leaves",
    tags=["leaves"],
)


@leaves_router.get("", response_model=LeaveListResponse)
async def list_leaves(session: SessionDep) -> LeaveListResponse:
    """List every leave record with the employee name, newest first."""
    return await leave_service.list_leaves(session)


@leaves_router.post("", response_model=LeaveResponse, status_code=status.HTTP_201_CREATED)
async def create_leave(payload: CreateLeavePayload, session: SessionDep) -> LeaveResponse:
    """Record a leave and debit it from the employee's balance."""
    return await leave_service.create_leave(session, payload)


@leaves_router.post("/bulk", response_model=BulkLeaveResponse, status_code=status.HTTP_201_CREATED)
async def create_leaves_for_date(payload: BulkLeavePayload, session: SessionDep) -> BulkLeaveResponse:
    """Record the same single-day leave for several employees."""
    return await leave_service.create_leaves_for_date(session, payload)


@leaves_router.get("/{leave_id}", response_model=LeaveResponse)
async def get_leave(leave_id: int, session: SessionDep) -> LeaveResponse:
    """Get a single leave record."""
    return await leave_service.get_leave(session, leave_id)


@leaves_router.put("/{leave_id}", response_model=LeaveResponse)
async def update_leave(leave_id: int, payload: UpdateLeavePayload, session: SessionDep) -> LeaveResponse:
    """Change a leave's type or reason."""
    return await leave_service.update_leave(session, leave_id, payload)


@leaves_router.delete("/{leave_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_leave(leave_id: int, session: SessionDep) -> Response:
    """Delete a leave and credit its days back."""
    await leave_service.delete_leave(session, leave_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
