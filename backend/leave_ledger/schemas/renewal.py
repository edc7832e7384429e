# ruff: noqa: TC003
from __future__ import annotations

from datetime import date

from pydantic import BaseModel


class RenewalRunResponse(BaseModel):
    """Response from the renewal trigger endpoint."""

    target_date: date
    scanned: int
    renewed: int
    skipped: int
    errors: int
