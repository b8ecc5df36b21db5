"""Generic write helpers shared by services.

Every helper takes a `commit` flag. Pass `commit=False` to stage several writes
and commit them once, so they land in a single transaction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import SQLModel, select

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement
    from sqlmodel.ext.asyncio.session import AsyncSession

ModelT = TypeVar("ModelT", bound=SQLModel)


async def get_or_create(
    session: AsyncSession,
    model: type[ModelT],
    *,
    defaults: dict[str, Any] | None = None,
    **lookup: Any,
) -> tuple[ModelT, bool]:
    """Return the row matching *lookup*, inserting it with *defaults* when missing."""
    statement = select(model).filter_by(**lookup)
    existing = (await session.exec(statement)).first()
    if existing is not None:
        return existing, False

    obj = model(**lookup, **(defaults or {}))
    session.add(obj)
    try:
        await session.commit()
    except IntegrityError:
        # A concurrent request inserted the same row first.
        await session.rollback()
        existing = (await session.exec(statement)).first()
        if existing is None:
            raise
        return existing, False
    await session.refresh(obj)
    return obj, True


async def delete_where(
    session: AsyncSession,
    model: type[SQLModel],
    *criteria: ColumnElement[bool] | bool,
    commit: bool = True,
) -> int:
    """Delete all rows of *model* matching *criteria*; return the affected row count."""
    statement = delete(model).where(*criteria)
    result = await session.exec(statement)  # type: ignore[call-overload]
    if commit:
        await session.commit()
    return int(result.rowcount or 0)


async def update_where(
    session: AsyncSession,
    model: type[SQLModel],
    *criteria: ColumnElement[bool] | bool,
    values: dict[str, Any],
    commit: bool = True,
) -> int:
    """Apply *values* to all rows of *model* matching *criteria*; return the row count."""
    statement = update(model).where(*criteria).values(**values)
    result = await session.exec(statement)  # type: ignore[call-overload]
    if commit:
        await session.commit()
    return int(result.rowcount or 0)
