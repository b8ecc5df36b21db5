"""Todo model representing one owner-scoped task."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime
from sqlmodel import Field

from supertodo.core.time import utcnow
from supertodo.models.base import QueryModel
from supertodo.models.ids import new_id

RUNTIME_ANNOTATION_TYPES = (datetime,)


class TodoPriority(str, Enum):
    """Todo priority, declared from lowest to highest."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


PRIORITY_ORDER: tuple[TodoPriority, ...] = tuple(TodoPriority)
TITLE_MAX_LENGTH = 255


class Todo(QueryModel, table=True):
    """Owner-scoped task with completion state, priority, and an optional due date."""

    __tablename__ = "todos"  # pyright: ignore[reportAssignmentType]

    id: str = Field(default_factory=new_id, primary_key=True)
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    description: str | None = None
    completed: bool = Field(default=False, index=True)
    priority: str = Field(default=TodoPriority.MEDIUM.value, index=True)
    due_date: datetime | None = Field(
        default=None,
        sa_type=DateTime(timezone=False),
        index=True,
    )
    user_id: str = Field(foreign_key="users.id", ondelete="CASCADE", index=True)

    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=False))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=False))
