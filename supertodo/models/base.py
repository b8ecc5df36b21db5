"""Base model class for table models that expose `Model.objects` queries."""

from __future__ import annotations

from typing import ClassVar

from sqlmodel import SQLModel

from supertodo.db.query_manager import ManagerDescriptor


class QueryModel(SQLModel):
    """SQLModel base with a chainable `objects` query manager."""

    objects: ClassVar[ManagerDescriptor] = ManagerDescriptor()
