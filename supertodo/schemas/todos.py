"""Schemas for todo create/update/read API operations."""

from __future__ import annotations

from datetime import datetime
from typing import Self

from pydantic import field_validator, model_validator
from sqlmodel import Field, SQLModel

from supertodo.core.time import to_naive_utc
from supertodo.models.todos import TITLE_MAX_LENGTH, TodoPriority
from supertodo.schemas.tags import TagRead

RUNTIME_ANNOTATION_TYPES = (datetime,)
_NON_NULLABLE_UPDATE_FIELDS = ("title", "completed", "priority", "tag_ids")


class TodoCreate(SQLModel):
    """Payload for creating a todo, optionally with initial tags."""

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = None
    priority: TodoPriority = TodoPriority.MEDIUM
    due_date: datetime | None = None
    tag_ids: list[str] | None = None

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value: datetime | None) -> datetime | None:
        return to_naive_utc(value) if value is not None else None


class TodoUpdate(SQLModel):
    """Payload for partial todo updates.

    Only fields present in the request are applied. `due_date` and
    `description` accept an explicit null to clear them; `tag_ids`, when
    present, replaces the whole tag set (an empty list removes every tag).
    """

    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = None
    completed: bool | None = None
    priority: TodoPriority | None = None
    due_date: datetime | None = None
    tag_ids: list[str] | None = None

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value: datetime | None) -> datetime | None:
        return to_naive_utc(value) if value is not None else None

    @model_validator(mode="after")
    def reject_null_for_required_fields(self) -> Self:
        """Reject explicit nulls for fields that cannot be cleared."""
        for field_name in _NON_NULLABLE_UPDATE_FIELDS:
            if field_name in self.model_fields_set and getattr(self, field_name) is None:
                raise ValueError(f"{field_name} cannot be null")
        return self


class TodoRead(SQLModel):
    """Todo payload returned from write endpoints."""

    id: str
    title: str
    description: str | None = None
    completed: bool
    priority: TodoPriority
    due_date: datetime | None = None
    user_id: str
    created_at: datetime
    updated_at: datetime


class TodoWithTagsRead(TodoRead):
    """Todo payload enriched with its resolved tags."""

    tags: list[TagRead] = Field(default_factory=list)
