# ruff: noqa: TC001, TC003
from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from leave_ledger.models.enums import LeaveType

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class CreateLeavePayload(BaseModel):
    """Request body for recording a leave."""

    employee_id: int
    leave_type: LeaveType = LeaveType.FULL_DAY
    start_date: date
    end_date: date
    reason: str | None = Field(default=None, max_length=1000)


class BulkLeavePayload(BaseModel):
    """Request body for recording the same single-day leave for several employees."""

    employee_ids: list[int] = Field(min_length=1)
    leave_date: date
    leave_type: LeaveType = LeaveType.FULL_DAY
    reason: str | None = Field(default=None, max_length=1000)

    @field_validator("employee_ids")
    @classmethod
    def _dedupe_employee_ids(cls, value: list[int]) -> list[int]:
        return list(dict.fromkeys(value))


class UpdateLeavePayload(BaseModel):
    """Request body for reclassifying a leave. Dates are not editable."""

    leave_type: LeaveType | None = None
    reason: str | None = Field(default=None, max_length=1000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class LeaveResponse(BaseModel):
    """Response schema for a single leave record."""

    id: int
    employee_id: int
    employee_name: str | None = None
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str | None
    used_days: float
    created_at: datetime


class LeaveListResponse(BaseModel):
    """List of leave records."""

    items: list[LeaveResponse]
    total: int


class BulkLeaveResponse(BaseModel):
    """Leaves created by a bulk registration."""

    items: list[LeaveResponse]
    total: int
