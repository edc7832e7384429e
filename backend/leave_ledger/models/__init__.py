from sqlmodel import SQLModel

from leave_ledger.models.audit import AuditLog
from leave_ledger.models.base import IntIdBase, TimestampMixin
from leave_ledger.models.employee import Employee
from leave_ledger.models.enums import (
    AuditAction,
    AuditEntityType,
    BalanceSource,
    LeaveType,
    LedgerEntryType,
    LedgerSourceType,
)
from leave_ledger.models.leave import LeaveRecord
from leave_ledger.models.ledger import LedgerEntry

__all__ = [
    "AuditAction",
    "AuditEntityType",
    "AuditLog",
    "BalanceSource",
    "Employee",
    "IntIdBase",
    "LeaveRecord",
    "LeaveType",
    "LedgerEntry",
    "LedgerEntryType",
    "LedgerSourceType",
    "SQLModel",
    "TimestampMixin",
]
