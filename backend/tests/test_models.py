from __future__ import annotations

from datetime import date

from leave_ledger.models import (
    AuditLog,
    BalanceSource,
    Employee,
    LeaveRecord,
    LedgerEntry,
    SQLModel,
)

EXPECTED_TABLES = {
    "audit_log",
    "employee",
    "leave_record",
    "ledger_entry",
}


def test_all_tables_registered() -> None:
    table_names = set(SQLModel.metadata.tables.keys())
    assert EXPECTED_TABLES.issubset(table_names)


def test_employee_instantiation_defaults() -> None:
    employee = Employee(name="김철수", department="개발팀", hire_date=date(2022, 3, 2))
    assert employee.id is None
    assert employee.yearly_allowance == 15
    assert employee.last_renewal_date is None
    assert employee.current_remaining_days is None
    assert employee.balance_source == BalanceSource.COMPUTED
    assert employee.created_at is not None


def test_leave_record_instantiation() -> None:
    leave = LeaveRecord(
        employee_id=1,
        leave_type="HALF_DAY",
        start_date=date(2024, 5, 1),
        end_date=date(2024, 5, 1),
        used_days=0.5,
    )
    assert leave.reason is None
    assert leave.used_days == 0.5


def test_ledger_entry_idempotency_constraint() -> None:
    table = SQLModel.metadata.tables["ledger_entry"]
    unique_columns = {
        tuple(c.name for c in constraint.columns)
        for constraint in table.constraints
        if constraint.name == "uq_ledger_idempotency"
    }
    assert unique_columns == {("source_type", "source_id", "entry_type")}


def test_ledger_entry_instantiation() -> None:
    entry = LedgerEntry(
        employee_id=1,
        entry_type="RENEWAL",
        amount_days=15.0,
        balance_after=15.0,
        effective_on=date(2024, 2, 15),
        source_type="SYSTEM",
        source_id="renewal:1:2024-02-15",
    )
    assert entry.metadata_json is None


def test_audit_log_instantiation() -> None:
    log = AuditLog(entity_type="LEAVE", entity_id=1, action="DELETE")
    assert log.before_json is None
    assert log.after_json is None
