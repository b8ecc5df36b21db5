"""Common reusable response schemas."""

from __future__ import annotations

from sqlmodel import SQLModel


class DeleteResponse(SQLModel):
    """Acknowledgement returned after a physical delete."""

    success: bool = True
    id: str
