# ruff: noqa: TC003
from __future__ import annotations

from datetime import date

import sqlalchemy as sa
from sqlmodel import Field

from leave_ledger.models.base import IntIdBase, TimestampMixin


class LeaveRecord(IntIdBase, TimestampMixin, table=True):
    """A single leave taken by an employee over an inclusive date range."""

    __tablename__ = "leave_record"
    __table_args__ = (
        sa.Index("ix_leave_employee_start", "employee_id", "start_date"),
        {"sqlite_autoincrement": True},
    )

    employee_id: int = Field(
        sa_column=sa.Column(
            sa.Integer, sa.ForeignKey("employee.id", ondelete="RESTRICT"), nullable=False, index=True
        ),
    )
    leave_type: str = Field(max_length=20)
    start_date: date
    end_date: date
    reason: str | None = None
    used_days: float
