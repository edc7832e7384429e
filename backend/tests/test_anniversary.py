"""Tests for probation status and renewal date arithmetic."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from leave_ledger.exceptions import AppError
from leave_ledger.models import Employee
from leave_ledger.services.anniversary import (
    add_months,
    add_years,
    current_renewal_date,
    current_year_allowance,
    first_renewal_date,
    is_over_one_year,
    next_renewal_date,
    probation_end_date,
    renewal_count,
)


def _employee(hire_date: date, yearly_allowance: int = 15) -> Employee:
    return Employee(name="Test", department="QA", hire_date=hire_date, yearly_allowance=yearly_allowance)


# ---------------------------------------------------------------------------
# Month arithmetic
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("start", "months", "expected"),
    [
        (date(2024, 1, 15), 1, date(2024, 2, 15)),
        (date(2023, 12, 10), 1, date(2024, 1, 10)),
        (date(2023, 1, 31), 1, date(2023, 3, 3)),
        (date(2024, 1, 31), 1, date(2024, 3, 2)),
        (date(2024, 2, 29), 12, date(2025, 3, 1)),
        (date(2023, 1, 15), 13, date(2024, 2, 15)),
    ],
)
def test_add_months_rolls_overflow_forward(start: date, months: int, expected: date) -> None:
    assert add_months(start, months) == expected


# ---------------------------------------------------------------------------
# Probation
# ---------------------------------------------------------------------------


def test_probation_ends_thirteen_months_after_hire() -> None:
    assert probation_end_date(date(2023, 1, 15)) == date(2024, 2, 15)


def test_is_over_one_year_boundary() -> None:
    hire = date(2023, 1, 15)
    assert not is_over_one_year(hire, date(2024, 2, 14))
    assert is_over_one_year(hire, date(2024, 2, 15))


def test_twelve_months_is_still_probationary() -> None:
    assert not is_over_one_year(date(2023, 1, 15), date(2024, 1, 15))


# ---------------------------------------------------------------------------
# Renewal dates
# ---------------------------------------------------------------------------


def test_first_renewal_wraps_december_hire() -> None:
    assert first_renewal_date(date(2023, 12, 10)) == date(2024, 1, 10)


def test_renewal_count_before_first_renewal_is_zero() -> None:
    assert renewal_count(date(2023, 1, 15), date(2023, 2, 14)) == 0
    assert current_renewal_date(date(2023, 1, 15), date(2023, 2, 14)) is None


def test_renewal_count_on_anniversary_includes_it() -> None:
    assert renewal_count(date(2023, 1, 15), date(2023, 2, 15)) == 1


def test_renewal_count_after_two_anniversaries() -> None:
    hire = date(2023, 1, 15)
    today = date(2024, 3, 1)
    assert renewal_count(hire, today) == 2
    assert current_renewal_date(hire, today) == date(2024, 2, 15)
    assert next_renewal_date(hire, today) == date(2025, 2, 15)


def test_next_renewal_is_first_renewal_before_it_happens() -> None:
    assert next_renewal_date(date(2023, 12, 10), date(2023, 12, 20)) == date(2024, 1, 10)


def test_next_renewal_on_anniversary_moves_to_following_year() -> None:
    assert next_renewal_date(date(2023, 12, 10), date(2024, 1, 10)) == date(2025, 1, 10)


# ---------------------------------------------------------------------------
# Allowance
# ---------------------------------------------------------------------------


def test_allowance_is_zero_during_probation() -> None:
    assert current_year_allowance(_employee(date(2023, 12, 10)), date(2024, 6, 1)) == 0


def test_allowance_counts_every_renewal_after_probation() -> None:
    assert current_year_allowance(_employee(date(2023, 1, 15)), date(2024, 3, 1)) == 30


def test_allowance_uses_employee_yearly_allowance() -> None:
    employee = _employee(date(2020, 1, 1), yearly_allowance=20)
    # Renewals on 2020-02-01, 2021-02-01, 2022-02-01, 2023-02-01
    assert current_year_allowance(employee, date(2023, 6, 1)) == 80


def test_twelve_months_and_twenty_nine_days_is_still_probationary() -> None:
    hire = date(2023, 1, 15)
    almost = add_months(hire, 12) + timedelta(days=29)
    assert not is_over_one_year(hire, almost)
    assert is_over_one_year(hire, add_months(hire, 13))


def test_add_months_past_end_of_calendar_is_400() -> None:
    with pytest.raises(AppError) as exc_info:
        add_months(date(9999, 6, 1), 12)
    assert exc_info.value.status_code == 400


def test_add_years_within_calendar() -> None:
    assert add_years(date(9998, 12, 31), 1) == date(9999, 12, 31)
