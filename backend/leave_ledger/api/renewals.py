# ruff: noqa: B008
"""API endpoint for on-demand renewal processing."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Query

from leave_ledger.db import SessionDep
from leave_ledger.schemas.renewal import RenewalRunResponse
from leave_ledger.services.renewal import run_renewals

renewals_router = APIRouter(
    prefix="/renewals",
    tags=["renewals"],
)


@renewals_router.post("/trigger", response_model=RenewalRunResponse)
async def trigger_renewals(
    session: SessionDep,
    target_date: date | None = Query(default=None),
) -> RenewalRunResponse:
    """Run renewal processing now, as the daily worker would.

    Useful for testing and for catching up after worker downtime. Safe to
    repeat: an employee already renewed for the current anniversary is skipped.
    """
    result = await run_renewals(session, target_date)
    return RenewalRunResponse(
        target_date=result.target_date,
        scanned=result.scanned,
        renewed=result.renewed,
        skipped=result.skipped,
        errors=result.errors,
    )
