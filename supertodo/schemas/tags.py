"""Schemas for tag create and read payloads."""

from __future__ import annotations

import re
from datetime import datetime

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from supertodo.models.tags import DEFAULT_TAG_COLOR, TAG_NAME_MAX_LENGTH

RUNTIME_ANNOTATION_TYPES = (datetime,)
HEX_COLOR_RE = re.compile(r"^#[0-9A-F]{6}$", re.IGNORECASE)
_ERR_COLOR = "color must be a hex RGB value like #3B82F6"


class TagCreate(SQLModel):
    """Payload for creating a tag; duplicate names are allowed."""

    name: str = Field(min_length=1, max_length=TAG_NAME_MAX_LENGTH)
    color: str = DEFAULT_TAG_COLOR

    @field_validator("color")
    @classmethod
    def validate_color(cls, value: str) -> str:
        if not HEX_COLOR_RE.fullmatch(value):
            raise ValueError(_ERR_COLOR)
        return value


class TagRead(SQLModel):
    """Tag payload returned from read endpoints."""

    id: str
    name: str
    color: str
    user_id: str
    created_at: datetime
