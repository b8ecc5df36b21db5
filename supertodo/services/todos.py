"""Owner-scoped todo reads and validated, transactional todo mutations.

Every operation takes the caller's owner id. Identifiers that do not resolve to
a row owned by the caller fail with 404, whether the row is missing or belongs
to someone else.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from fastapi import HTTPException, status
from sqlalchemy import and_, not_
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col, select

from supertodo.core.config import settings
from supertodo.core.logging import get_logger
from supertodo.core.time import utcnow
from supertodo.db import crud
from supertodo.models.tags import Tag
from supertodo.models.todo_tags import TodoTag
from supertodo.models.todos import Todo, TodoPriority
from supertodo.services.tags import TAG_NOT_FOUND
from supertodo.services.todo_query import (
    SortOrder,
    TodoFilter,
    TodoSortField,
    compile_filters,
    resolve_ordering,
)
from supertodo.services.todo_tags import attach_tags

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from sqlalchemy.sql.elements import ColumnElement
    from sqlmodel.ext.asyncio.session import AsyncSession

    from supertodo.schemas.todos import TodoCreate, TodoUpdate, TodoWithTagsRead

logger = get_logger(__name__)

TODO_NOT_FOUND = "Todo not found"


def _not_found(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def _internal(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def _owned(todo_id: str, owner_id: str) -> ColumnElement[bool]:
    return and_(col(Todo.id) == todo_id, col(Todo.user_id) == owner_id)


def _next_updated_at(previous: datetime | None) -> datetime:
    """Current time, bumped past *previous* so `updated_at` always moves forward."""
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


async def _reload(session: AsyncSession, todo_id: str) -> Todo | None:
    return await (
        Todo.objects.by_id(todo_id).execution_options(populate_existing=True).first(session)
    )


async def get_owned_todo(session: AsyncSession, *, owner_id: str, todo_id: str) -> Todo:
    """Load a todo owned by *owner_id* or raise 404."""
    todo = await Todo.objects.filter(_owned(todo_id, owner_id)).first(session)
    if todo is None:
        logger.debug("todo.lookup.not_found owner=%s id=%s", owner_id, todo_id)
        raise _not_found(TODO_NOT_FOUND)
    return todo


async def list_todos(
    session: AsyncSession,
    *,
    owner_id: str,
    filters: TodoFilter | None = None,
    sort_by: TodoSortField = TodoSortField.CREATED_AT,
    sort_order: SortOrder = SortOrder.DESC,
) -> list[TodoWithTagsRead]:
    """Return the owner's todos matching *filters*, ordered and enriched with tags."""
    predicate = compile_filters(owner_id, filters or TodoFilter())
    todos = (
        await session.exec(
            select(Todo).where(predicate.clause).order_by(*resolve_ordering(sort_by, sort_order)),
        )
    ).all()
    logger.debug(
        "todo.list owner=%s constraints=%s sort_by=%s sort_order=%s count=%s",
        owner_id,
        ",".join(predicate.names),
        TodoSortField(sort_by).value,
        SortOrder(sort_order).value,
        len(todos),
    )
    return await attach_tags(session, todos)


async def get_todo(session: AsyncSession, *, owner_id: str, todo_id: str) -> TodoWithTagsRead:
    todo = await get_owned_todo(session, owner_id=owner_id, todo_id=todo_id)
    return (await attach_tags(session, [todo]))[0]


async def _validated_tag_ids(
    session: AsyncSession,
    *,
    owner_id: str,
    tag_ids: Sequence[str],
) -> list[str]:
    """De-duplicate *tag_ids* (first occurrence wins) and check they belong to the owner."""
    normalized = list(dict.fromkeys(tag_ids))
    if not normalized or not settings.enforce_tag_ownership:
        return normalized
    owned_ids = set(
        (
            await session.exec(
                select(col(Tag.id)).where(
                    col(Tag.user_id) == owner_id,
                    col(Tag.id).in_(normalized),
                ),
            )
        ).all(),
    )
    missing = [tag_id for tag_id in normalized if tag_id not in owned_ids]
    if missing:
        logger.debug("todo.tags.rejected owner=%s tag_ids=%s", owner_id, ",".join(missing))
        raise _not_found(TAG_NOT_FOUND)
    return normalized


def _stage_tag_links(
    session: AsyncSession,
    *,
    todo_id: str,
    tag_ids: Sequence[str],
    created_at: datetime,
) -> None:
    for tag_id in tag_ids:
        session.add(TodoTag(todo_id=todo_id, tag_id=tag_id, created_at=created_at))


async def create_todo(
    session: AsyncSession,
    *,
    owner_id: str,
    payload: TodoCreate,
) -> Todo:
    """Insert a todo and its tag links in one transaction."""
    tag_ids = await _validated_tag_ids(session, owner_id=owner_id, tag_ids=payload.tag_ids or [])
    now = utcnow()
    todo = Todo(
        title=payload.title,
        description=payload.description,
        priority=TodoPriority(payload.priority).value,
        due_date=payload.due_date,
        user_id=owner_id,
        created_at=now,
        updated_at=now,
    )
    try:
        session.add(todo)
        await session.flush()
        _stage_tag_links(session, todo_id=todo.id, tag_ids=tag_ids, created_at=now)
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        logger.warning("todo.create.rolled_back owner=%s", owner_id, exc_info=True)
        raise

    created = await _reload(session, todo.id)
    if created is None:
        raise _internal("Failed to create todo")
    logger.info("todo.create owner=%s id=%s tags=%s", owner_id, created.id, len(tag_ids))
    return created


async def update_todo(
    session: AsyncSession,
    *,
    owner_id: str,
    todo_id: str,
    payload: TodoUpdate,
) -> TodoWithTagsRead:
    """Apply the supplied fields and, when given, replace the tag set atomically."""
    todo = await get_owned_todo(session, owner_id=owner_id, todo_id=todo_id)
    updates = payload.model_dump(exclude_unset=True)
    replace_tags = "tag_ids" in updates
    requested_tag_ids = updates.pop("tag_ids", None) or []
    tag_ids: list[str] = []
    if replace_tags:
        tag_ids = await _validated_tag_ids(session, owner_id=owner_id, tag_ids=requested_tag_ids)
    if "priority" in updates:
        updates["priority"] = TodoPriority(updates["priority"]).value

    try:
        for key, value in updates.items():
            setattr(todo, key, value)
        if updates or replace_tags:
            todo.updated_at = _next_updated_at(todo.updated_at)
        session.add(todo)
        if replace_tags:
            await crud.delete_where(
                session,
                TodoTag,
                col(TodoTag.todo_id) == todo.id,
                commit=False,
            )
            _stage_tag_links(session, todo_id=todo.id, tag_ids=tag_ids, created_at=utcnow())
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        logger.warning("todo.update.rolled_back owner=%s id=%s", owner_id, todo_id, exc_info=True)
        raise

    updated = await _reload(session, todo_id)
    if updated is None:
        raise _internal("Could not retrieve updated todo")
    logger.info(
        "todo.update owner=%s id=%s fields=%s replaced_tags=%s",
        owner_id,
        todo_id,
        ",".join(sorted(updates)),
        replace_tags,
    )
    return (await attach_tags(session, [updated]))[0]


async def toggle_todo(session: AsyncSession, *, owner_id: str, todo_id: str) -> Todo:
    """Flip `completed` with one conditional UPDATE scoped to the owner."""
    current = await get_owned_todo(session, owner_id=owner_id, todo_id=todo_id)
    try:
        matched = await crud.update_where(
            session,
            Todo,
            _owned(todo_id, owner_id),
            values={
                "completed": not_(col(Todo.completed)),
                "updated_at": _next_updated_at(current.updated_at),
            },
        )
    except SQLAlchemyError:
        await session.rollback()
        logger.warning("todo.toggle.rolled_back owner=%s id=%s", owner_id, todo_id, exc_info=True)
        raise
    if not matched:
        logger.debug("todo.toggle.not_found owner=%s id=%s", owner_id, todo_id)
        raise _not_found(TODO_NOT_FOUND)

    toggled = await _reload(session, todo_id)
    if toggled is None:
        raise _internal("Could not retrieve updated todo")
    logger.info("todo.toggle owner=%s id=%s completed=%s", owner_id, todo_id, toggled.completed)
    return toggled


async def delete_todo(session: AsyncSession, *, owner_id: str, todo_id: str) -> str:
    """Delete an owned todo and its tag links; the WHERE clause enforces ownership."""
    owned = _owned(todo_id, owner_id)
    try:
        await crud.delete_where(
            session,
            TodoTag,
            col(TodoTag.todo_id).in_(select(col(Todo.id)).where(owned)),
            commit=False,
        )
        deleted = await crud.delete_where(session, Todo, owned, commit=False)
        if not deleted:
            await session.rollback()
            logger.debug("todo.delete.not_found owner=%s id=%s", owner_id, todo_id)
            raise _not_found(TODO_NOT_FOUND)
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        logger.warning("todo.delete.rolled_back owner=%s id=%s", owner_id, todo_id, exc_info=True)
        raise
    logger.info("todo.delete owner=%s id=%s", owner_id, todo_id)
    return todo_id
