"""Anniversary engine: probation status and renewal dates derived from the hire date.

Month arithmetic follows calendar-constructor rollover: the day of month is
kept and any overflow spills into the following month, so Jan 31 plus one
month is Mar 3 (Mar 2 in a leap year). December plus one month is January of
the next year.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

from leave_ledger.exceptions import AppError

if TYPE_CHECKING:
    from leave_ledger.models.employee import Employee

PROBATION_MONTHS = 13
RENEWAL_OFFSET_MONTHS = 1


def add_months(value: date, months: int) -> date:
    """Shift a date by whole months, rolling day overflow into the next month.

    Raises a 400 AppError when the result falls outside the supported calendar.
    """
    month_index = value.month - 1 + months
    try:
        first_of_month = date(value.year + month_index // 12, month_index % 12 + 1, 1)
        return first_of_month + timedelta(days=value.day - 1)
    except (ValueError, OverflowError) as exc:
        raise AppError(f"Date {value.isoformat()} plus {months} months is out of range", status_code=400) from exc


def add_years(value: date, years: int) -> date:
    return add_months(value, 12 * years)


def probation_end_date(hire_date: date) -> date:
    """First day on which the employee is no longer probationary."""
    return add_months(hire_date, PROBATION_MONTHS)


def is_over_one_year(hire_date: date, today: date) -> bool:
    """True once the employee has passed the 13-month probation threshold."""
    return today >= probation_end_date(hire_date)


def first_renewal_date(hire_date: date) -> date:
    """The hire day in the month following the hire month."""
    return add_months(hire_date, RENEWAL_OFFSET_MONTHS)


def renewal_anniversary(hire_date: date, cycle: int) -> date:
    """Renewal date of the given zero-based cycle."""
    return add_years(first_renewal_date(hire_date), cycle)


def renewal_count(hire_date: date, today: date) -> int:
    """Number of renewal anniversaries that fall on or before ``today``."""
    count = 0
    while renewal_anniversary(hire_date, count) <= today:
        count += 1
    return count


def current_renewal_date(hire_date: date, today: date) -> date | None:
    """Most recent renewal anniversary on or before ``today``, if any."""
    count = renewal_count(hire_date, today)
    if count == 0:
        return None
    return renewal_anniversary(hire_date, count - 1)


def next_renewal_date(hire_date: date, today: date) -> date:
    """First renewal anniversary strictly after ``today``."""
    return renewal_anniversary(hire_date, renewal_count(hire_date, today))


def current_year_allowance(employee: Employee, today: date) -> int:
    """Allowance earned to date: nothing during probation, one allowance per renewal after."""
    if not is_over_one_year(employee.hire_date, today):
        return 0
    return employee.yearly_allowance * renewal_count(employee.hire_date, today)
