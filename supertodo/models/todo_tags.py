"""Association rows linking todos to tags (many-to-many)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field

from supertodo.core.time import utcnow
from supertodo.models.base import QueryModel

RUNTIME_ANNOTATION_TYPES = (datetime,)


class TodoTag(QueryModel, table=True):
    """One todo-to-tag link; removed together with either side."""

    __tablename__ = "todo_tags"  # pyright: ignore[reportAssignmentType]

    todo_id: str = Field(
        foreign_key="todos.id",
        ondelete="CASCADE",
        primary_key=True,
    )
    tag_id: str = Field(
        foreign_key="tags.id",
        ondelete="CASCADE",
        primary_key=True,
        index=True,
    )
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=False))
