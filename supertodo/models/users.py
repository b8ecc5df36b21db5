"""User model mirroring identities resolved by the auth adapter."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field

from supertodo.core.time import utcnow
from supertodo.models.base import QueryModel
from supertodo.models.ids import new_id

RUNTIME_ANNOTATION_TYPES = (datetime,)


class User(QueryModel, table=True):
    """Owner of todos and tags; `id` is the identifier issued by the auth service."""

    __tablename__ = "users"  # pyright: ignore[reportAssignmentType]

    id: str = Field(default_factory=new_id, primary_key=True)
    email: str | None = Field(default=None, index=True)
    name: str | None = None
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=False))
