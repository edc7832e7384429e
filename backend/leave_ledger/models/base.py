from __future__ import annotations

from datetime import UTC, datetime

import sqlalchemy as sa
from sqlmodel import Field, SQLModel


def _now_utc() -> datetime:
    """Return the current UTC time."""
    return datetime.now(UTC)


class IntIdBase(SQLModel):
    """Base model with an autoincrementing integer primary key."""

    id: int | None = Field(default=None, primary_key=True)


class TimestampMixin(SQLModel):
    """Mixin that adds a created_at timestamp."""

    created_at: datetime = Field(
        default_factory=_now_utc,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
        sa_column_kwargs={"server_default": sa.func.now()},
    )
