# ruff: noqa: TC003
from __future__ import annotations

from datetime import date

from sqlmodel import Field

from leave_ledger.models.base import IntIdBase, TimestampMixin
from leave_ledger.models.enums import BalanceSource


class Employee(IntIdBase, TimestampMixin, table=True):
    """An employee and their authoritative leave balance."""

    __tablename__ = "employee"
    __table_args__ = {"sqlite_autoincrement": True}

    name: str = Field(max_length=100)
    department: str = Field(max_length=100)
    yearly_allowance: int = Field(default=15, sa_column_kwargs={"server_default": "15"})
    hire_date: date
    last_renewal_date: date | None = None
    # Signed: negative while days are borrowed against an unearned allowance.
    current_remaining_days: float | None = None
    balance_source: str = Field(
        default=BalanceSource.COMPUTED, max_length=20, sa_column_kwargs={"server_default": "COMPUTED"}
    )
