"""User read schema returned by the identity probe."""

from __future__ import annotations

from datetime import datetime

from sqlmodel import SQLModel

RUNTIME_ANNOTATION_TYPES = (datetime,)


class UserRead(SQLModel):
    """Resolved caller identity."""

    id: str
    email: str | None = None
    name: str | None = None
    created_at: datetime
