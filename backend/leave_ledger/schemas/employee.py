# ruff: noqa: TC001, TC003
from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from leave_ledger.models.enums import BalanceSource

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class CreateEmployeeRequest(BaseModel):
    """Request body for registering an employee."""

    name: str = Field(min_length=1, max_length=100)
    department: str = Field(min_length=1, max_length=100)
    hire_date: date
    yearly_allowance: int | None = Field(default=None, ge=0, le=366)


class UpdateEmployeeRequest(BaseModel):
    """Request body for editing employee details. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    department: str | None = Field(default=None, min_length=1, max_length=100)
    hire_date: date | None = None
    yearly_allowance: int | None = Field(default=None, ge=0, le=366)


class BalanceOverrideRequest(BaseModel):
    """Administrative balance override.

    For a probationary employee ``days`` is the number of days used so far;
    for a confirmed employee it is the number of days remaining.
    """

    days: float = Field(ge=-366, le=366, multiple_of=0.5)
    reason: str | None = Field(default=None, max_length=1000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class EmployeeResponse(BaseModel):
    """Response schema for an employee."""

    id: int
    name: str
    department: str
    yearly_allowance: int
    hire_date: date
    last_renewal_date: date | None
    current_remaining_days: float | None
    balance_source: BalanceSource
    created_at: datetime


class EmployeeListResponse(BaseModel):
    """List of employees."""

    items: list[EmployeeResponse]
    total: int
