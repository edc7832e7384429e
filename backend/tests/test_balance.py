"""Unit tests for the tagged balance and the override sign convention."""

from __future__ import annotations

from datetime import date

import pytest

from leave_ledger.exceptions import AppError
from leave_ledger.models import BalanceSource, Employee
from leave_ledger.services.balance import (
    ComputedBalance,
    OverrideBalance,
    override_input_to_stored,
    resolve_balance,
    stored_to_override_input,
)


def _employee(**overrides: object) -> Employee:
    fields: dict[str, object] = {"name": "Test", "department": "QA", "hire_date": date(2022, 1, 1)}
    fields.update(overrides)
    return Employee(**fields)


def test_new_employee_balance_is_computed() -> None:
    assert resolve_balance(_employee()) == ComputedBalance()


def test_debited_employee_without_override_is_still_computed() -> None:
    assert resolve_balance(_employee(current_remaining_days=-3.0)) == ComputedBalance()


def test_override_tag_returns_stored_value() -> None:
    employee = _employee(current_remaining_days=7.5, balance_source=BalanceSource.OVERRIDE)
    assert resolve_balance(employee) == OverrideBalance(value=7.5)


def test_override_of_zero_is_not_confused_with_absent() -> None:
    employee = _employee(current_remaining_days=0.0, balance_source=BalanceSource.OVERRIDE)
    assert resolve_balance(employee) == OverrideBalance(value=0.0)


def test_probationary_input_is_stored_negative() -> None:
    assert override_input_to_stored(3, is_probationary=True) == -3


def test_probationary_zero_stays_zero() -> None:
    assert override_input_to_stored(0, is_probationary=True) == 0


def test_probationary_negative_input_rejected() -> None:
    with pytest.raises(AppError) as exc_info:
        override_input_to_stored(-1, is_probationary=True)
    assert exc_info.value.status_code == 400


def test_confirmed_input_is_stored_as_is() -> None:
    assert override_input_to_stored(12.5, is_probationary=False) == 12.5
    assert override_input_to_stored(-2, is_probationary=False) == -2


@pytest.mark.parametrize(("days", "is_probationary"), [(3.0, True), (0.5, True), (10.0, False), (-1.0, False)])
def test_stored_to_override_input_inverts(days: float, is_probationary: bool) -> None:
    stored = override_input_to_stored(days, is_probationary=is_probationary)
    assert stored_to_override_input(stored, is_probationary=is_probationary) == days
