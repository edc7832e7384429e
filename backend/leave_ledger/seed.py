"""Seed script for development data.

Run with:  python -m leave_ledger.seed
Inside Docker:  docker compose exec api python -m leave_ledger.seed

Safe to re-run: employees already present (by name) are skipped, and leaves
are only recorded for employees created in this run.
"""

from __future__ import annotations

import asyncio
import sys
from datetime import date, timedelta

import httpx

BASE_URL = "http://localhost:8000"
HEADERS = {"Content-Type": "application/json"}

EMPLOYEES = [
    {"name": "김철수", "department": "개발팀", "hire_date": "2021-03-02", "yearly_allowance": 15},
    {"name": "이영희", "department": "마케팅팀", "hire_date": "2022-07-11", "yearly_allowance": 15},
    {"name": "박민수", "department": "인사팀", "hire_date": "2023-01-15", "yearly_allowance": 15},
    {"name": "정수진", "department": "디자인팀", "hire_date": "2024-12-10", "yearly_allowance": 15},
    {"name": "최우진", "department": "개발팀", "hire_date": "2025-06-01", "yearly_allowance": 15},
]

# (employee name, leave type, start offset in days from today, length in days, reason)
LEAVES = [
    ("김철수", "FULL_DAY", -40, 3, "Family trip"),
    ("김철수", "HALF_DAY", -12, 1, "Dentist"),
    ("이영희", "SICK", -20, 2, "Flu"),
    ("박민수", "FULL_DAY", 7, 5, "Summer vacation"),
    ("정수진", "BEREAVEMENT", -5, 1, None),
]


async def _safe_post(client: httpx.AsyncClient, url: str, json: dict, label: str) -> dict | None:
    """POST and report the outcome without aborting the run."""
    resp = await client.post(url, json=json, headers=HEADERS)
    if resp.status_code in (200, 201):
        print(f"  [OK] {label}")
        return resp.json()
    print(f"  [ERROR] {label}: {resp.status_code} {resp.text[:200]}")
    return None


async def seed_employees(client: httpx.AsyncClient) -> dict[str, int]:
    """Create the sample employees. Returns name -> id for those created now."""
    print("\n--- Seeding employees ---")
    resp = await client.get(f"{BASE_URL}/employees")
    resp.raise_for_status()
    existing = {item["name"] for item in resp.json()["items"]}

    created: dict[str, int] = {}
    for emp in EMPLOYEES:
        if emp["name"] in existing:
            print(f"  [SKIP] {emp['name']} (already exists)")
            continue
        body = await _safe_post(client, f"{BASE_URL}/employees", emp, f"{emp['name']} ({emp['department']})")
        if body is not None:
            created[emp["name"]] = body["id"]
    return created


async def seed_leaves(client: httpx.AsyncClient, employee_ids: dict[str, int]) -> None:
    """Record a handful of past and upcoming leaves."""
    print("\n--- Seeding leaves ---")
    today = date.today()
    for name, leave_type, offset, length, reason in LEAVES:
        employee_id = employee_ids.get(name)
        if employee_id is None:
            print(f"  [SKIP] {name} {leave_type} (employee not created in this run)")
            continue
        start = today + timedelta(days=offset)
        end = start + timedelta(days=length - 1)
        await _safe_post(
            client,
            f"{BASE_URL}/leaves",
            {
                "employee_id": employee_id,
                "leave_type": leave_type,
                "start_date": start.isoformat(),
                "end_date": end.isoformat(),
                "reason": reason,
            },
            f"{name} {leave_type} {start} -> {end}",
        )


async def seed_override(client: httpx.AsyncClient, employee_ids: dict[str, int]) -> None:
    """Record prior usage for the newest hire, who is still probationary."""
    print("\n--- Seeding balance overrides ---")
    employee_id = employee_ids.get("최우진")
    if employee_id is None:
        print("  [SKIP] 최우진 (employee not created in this run)")
        return
    resp = await client.put(
        f"{BASE_URL}/employees/{employee_id}/balance",
        json={"days": 2, "reason": "Leave taken before the ledger was introduced"},
        headers=HEADERS,
    )
    if resp.status_code == 200:
        print("  [OK] 최우진 override (2 days used)")
    else:
        print(f"  [ERROR] 최우진 override: {resp.status_code} {resp.text[:200]}")


async def main() -> None:
    print("=" * 60)
    print("  Leave Ledger: Development Seed Script")
    print("=" * 60)

    async with httpx.AsyncClient(timeout=30.0) as client:
        try:
            resp = await client.get(f"{BASE_URL}/health")
            if resp.status_code != 200:
                print(f"API health check failed: {resp.status_code}")
                sys.exit(1)
            print("\n[OK] API is healthy")
        except httpx.ConnectError:
            print("ERROR: Cannot connect to API at", BASE_URL)
            print("Make sure the API is running")
            sys.exit(1)

        employee_ids = await seed_employees(client)
        await seed_leaves(client, employee_ids)
        await seed_override(client, employee_ids)

        resp = await client.post(f"{BASE_URL}/renewals/trigger")
        if resp.status_code == 200:
            summary = resp.json()
            print(f"\n[OK] Renewal run: renewed={summary['renewed']} skipped={summary['skipped']}")

    print("\n" + "=" * 60)
    print("  Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
