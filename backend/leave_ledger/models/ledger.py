# ruff: noqa: TC003
from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any

import sqlalchemy as sa
from sqlmodel import Field

from leave_ledger.models.base import IntIdBase


def _now_utc() -> datetime:
    return datetime.now(UTC)


class LedgerEntry(IntIdBase, table=True):
    """Append-only ledger entry that records every balance-affecting event."""

    __tablename__ = "ledger_entry"
    __table_args__ = (
        sa.UniqueConstraint("source_type", "source_id", "entry_type", name="uq_ledger_idempotency"),
        {"sqlite_autoincrement": True},
    )

    employee_id: int = Field(
        sa_column=sa.Column(
            sa.Integer, sa.ForeignKey("employee.id", ondelete="CASCADE"), nullable=False, index=True
        ),
    )
    entry_type: str = Field(max_length=50)
    amount_days: float
    balance_after: float
    effective_on: date
    source_type: str = Field(max_length=50)
    source_id: str = Field(max_length=255)
    metadata_json: dict[str, Any] | None = Field(default=None, sa_type=sa.JSON)
    created_at: datetime = Field(
        default_factory=_now_utc,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
        sa_column_kwargs={"server_default": sa.func.now()},
    )
