from __future__ import annotations

import enum


class LeaveType(enum.StrEnum):
    """Classification of a leave record."""

    FULL_DAY = "FULL_DAY"
    HALF_DAY = "HALF_DAY"
    SICK = "SICK"
    BEREAVEMENT = "BEREAVEMENT"
    SPECIAL = "SPECIAL"


class BalanceSource(enum.StrEnum):
    """Whether the displayed balance is derived from records or set by an administrator."""

    COMPUTED = "COMPUTED"
    OVERRIDE = "OVERRIDE"


class LedgerEntryType(enum.StrEnum):
    """Type of ledger entry affecting balance."""

    LEAVE_DEBIT = "LEAVE_DEBIT"
    LEAVE_CREDIT = "LEAVE_CREDIT"
    RENEWAL = "RENEWAL"
    OVERRIDE = "OVERRIDE"


class LedgerSourceType(enum.StrEnum):
    """Origin of a ledger entry."""

    LEAVE = "LEAVE"
    ADMIN = "ADMIN"
    SYSTEM = "SYSTEM"


class AuditEntityType(enum.StrEnum):
    """Entity type recorded in the audit log."""

    EMPLOYEE = "EMPLOYEE"
    LEAVE = "LEAVE"
    BALANCE = "BALANCE"
    RENEWAL = "RENEWAL"


class AuditAction(enum.StrEnum):
    """Action recorded in the audit log."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    OVERRIDE = "OVERRIDE"
    RENEW = "RENEW"
