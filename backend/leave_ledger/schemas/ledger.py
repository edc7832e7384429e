# ruff: noqa: TC001, TC003
from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel

from leave_ledger.models.enums import LedgerEntryType, LedgerSourceType


class LedgerEntryResponse(BaseModel):
    """A single ledger entry."""

    id: int
    employee_id: int
    entry_type: LedgerEntryType
    amount_days: float
    balance_after: float
    effective_on: date
    source_type: LedgerSourceType
    source_id: str
    metadata_json: dict[str, Any] | None
    created_at: datetime


class LedgerListResponse(BaseModel):
    """Paginated ledger entries."""

    items: list[LedgerEntryResponse]
    total: int
