"""Tests for the renewal scheduler."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import pytest

from leave_ledger.models import Employee
from leave_ledger.services import renewal as renewal_service
from leave_ledger.services.renewal import due_renewal_date, is_renewal_candidate, run_renewals

if TYPE_CHECKING:
    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession

TRIGGER_URL = "/renewals/trigger"


def _employee(hire_date: date, last_renewal_date: date | None = None) -> Employee:
    return Employee(name="Test", department="QA", hire_date=hire_date, last_renewal_date=last_renewal_date)


async def _create_employee(client: AsyncClient, hire_date: str, name: str = "이영희") -> int:
    resp = await client.post("/employees", json={"name": name, "department": "마케팅팀", "hire_date": hire_date})
    assert resp.status_code == 201
    return resp.json()["id"]


# ---------------------------------------------------------------------------
# Selection predicate
# ---------------------------------------------------------------------------


def test_candidate_needs_a_month_since_hire() -> None:
    assert not is_renewal_candidate(_employee(date(2023, 12, 10)), date(2024, 1, 9))
    assert is_renewal_candidate(_employee(date(2023, 12, 10)), date(2024, 1, 10))


def test_candidate_needs_a_year_since_last_renewal() -> None:
    employee = _employee(date(2022, 1, 10), last_renewal_date=date(2023, 2, 10))
    assert not is_renewal_candidate(employee, date(2024, 2, 9))
    assert is_renewal_candidate(employee, date(2024, 2, 10))


def test_due_renewal_date_is_current_anniversary() -> None:
    assert due_renewal_date(_employee(date(2023, 1, 15)), date(2024, 3, 1)) == date(2024, 2, 15)


def test_due_renewal_date_after_late_renewal() -> None:
    employee = _employee(date(2022, 1, 10), last_renewal_date=date(2023, 3, 1))
    assert due_renewal_date(employee, date(2024, 3, 1)) == date(2024, 2, 10)


def test_due_renewal_date_none_within_a_year_of_last_renewal() -> None:
    employee = _employee(date(2022, 1, 10), last_renewal_date=date(2024, 2, 10))
    assert due_renewal_date(employee, date(2025, 2, 9)) is None


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


async def test_trigger_renews_due_employee(async_client: AsyncClient) -> None:
    employee_id = await _create_employee(async_client, "2023-01-15")

    resp = await async_client.post(TRIGGER_URL, params={"target_date": "2024-03-01"})
    assert resp.status_code == 200
    data = resp.json()
    assert data == {"target_date": "2024-03-01", "scanned": 1, "renewed": 1, "skipped": 0, "errors": 0}

    employee = (await async_client.get(f"/employees/{employee_id}")).json()
    assert employee["current_remaining_days"] == 15.0
    assert employee["last_renewal_date"] == "2024-03-01"

    ledger = (await async_client.get(f"/employees/{employee_id}/ledger")).json()
    assert ledger["items"][0]["entry_type"] == "RENEWAL"
    assert ledger["items"][0]["source_id"] == f"renewal:{employee_id}:2024-02-15"


async def test_second_run_same_day_renews_nobody(async_client: AsyncClient) -> None:
    employee_id = await _create_employee(async_client, "2023-01-15")
    await async_client.post(TRIGGER_URL, params={"target_date": "2024-03-01"})

    resp = await async_client.post(TRIGGER_URL, params={"target_date": "2024-03-01"})
    assert resp.json()["renewed"] == 0

    employee = (await async_client.get(f"/employees/{employee_id}")).json()
    assert employee["current_remaining_days"] == 15.0


async def test_renewal_adds_to_existing_balance(async_client: AsyncClient) -> None:
    employee_id = await _create_employee(async_client, "2023-01-15")
    await async_client.post(
        "/leaves",
        json={"employee_id": employee_id, "start_date": "2024-02-01", "end_date": "2024-02-02"},
    )

    await async_client.post(TRIGGER_URL, params={"target_date": "2024-03-01"})
    employee = (await async_client.get(f"/employees/{employee_id}")).json()
    assert employee["current_remaining_days"] == 13.0


async def test_december_hire_renews_in_january(async_client: AsyncClient) -> None:
    employee_id = await _create_employee(async_client, "2023-12-10")

    early = await async_client.post(TRIGGER_URL, params={"target_date": "2024-01-09"})
    assert early.json()["renewed"] == 0

    resp = await async_client.post(TRIGGER_URL, params={"target_date": "2024-01-10"})
    assert resp.json()["renewed"] == 1
    employee = (await async_client.get(f"/employees/{employee_id}")).json()
    assert employee["last_renewal_date"] == "2024-01-10"


async def test_next_year_renews_again(async_client: AsyncClient) -> None:
    employee_id = await _create_employee(async_client, "2023-01-15")
    await async_client.post(TRIGGER_URL, params={"target_date": "2023-02-15"})
    await async_client.post(TRIGGER_URL, params={"target_date": "2024-02-15"})

    employee = (await async_client.get(f"/employees/{employee_id}")).json()
    assert employee["current_remaining_days"] == 30.0


async def test_failure_for_one_employee_does_not_stop_run(
    db_session: AsyncSession,
    async_client: AsyncClient,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    failing_id = await _create_employee(async_client, "2023-01-15", name="김철수")
    healthy_id = await _create_employee(async_client, "2023-01-15", name="박민수")
    real_renew = renewal_service._renew_employee

    async def _flaky_renew(session: AsyncSession, employee_id: int, today: date) -> bool:
        if employee_id == failing_id:
            raise RuntimeError("boom")
        return await real_renew(session, employee_id, today)

    monkeypatch.setattr(renewal_service, "_renew_employee", _flaky_renew)

    result = await run_renewals(db_session, date(2024, 3, 1))
    assert result.scanned == 2
    assert result.renewed == 1
    assert result.errors == 1

    failing = (await async_client.get(f"/employees/{failing_id}")).json()
    healthy = (await async_client.get(f"/employees/{healthy_id}")).json()
    assert failing["current_remaining_days"] is None
    assert healthy["current_remaining_days"] == 15.0


async def test_run_with_no_employees(db_session: AsyncSession) -> None:
    result = await run_renewals(db_session, date(2024, 3, 1))
    assert (result.scanned, result.renewed, result.skipped, result.errors) == (0, 0, 0, 0)


async def test_first_renewal_during_probation_credits_positive_balance(async_client: AsyncClient) -> None:
    """The first renewal falls inside probation: the stored balance goes positive, stats still show 0."""
    employee_id = await _create_employee(async_client, "2024-01-01")

    resp = await async_client.post(TRIGGER_URL, params={"target_date": "2024-02-01"})
    assert resp.json()["renewed"] == 1

    employee = (await async_client.get(f"/employees/{employee_id}")).json()
    assert employee["current_remaining_days"] == 15.0

    stats = (await async_client.get(f"/employees/{employee_id}/stats", params={"as_of": "2024-02-01"})).json()
    assert stats["is_probationary"] is True
    assert stats["remaining_days"] == 0.0
    assert stats["current_allowance"] == 0.0
