"""Tag model for owner-scoped todo labels."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field

from supertodo.core.time import utcnow
from supertodo.models.base import QueryModel
from supertodo.models.ids import new_id

RUNTIME_ANNOTATION_TYPES = (datetime,)

DEFAULT_TAG_COLOR = "#3B82F6"
TAG_NAME_MAX_LENGTH = 50


class Tag(QueryModel, table=True):
    """Named, colored label; visible and assignable only by its owner."""

    __tablename__ = "tags"  # pyright: ignore[reportAssignmentType]

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(max_length=TAG_NAME_MAX_LENGTH)
    color: str = Field(default=DEFAULT_TAG_COLOR, max_length=7)
    user_id: str = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=False))
