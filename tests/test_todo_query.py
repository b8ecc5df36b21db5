# ruff: noqa: INP001
"""Unit tests for the todo predicate builder and sort resolution."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from supertodo.models.tags import Tag
from supertodo.models.todo_tags import TodoTag
from supertodo.models.todos import Todo, TodoPriority
from supertodo.models.users import User
from supertodo.services.todo_query import (
    SortOrder,
    TodoFilter,
    TodoSortField,
    compile_filters,
    resolve_ordering,
)


async def _make_engine() -> AsyncEngine:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.connect() as conn, conn.begin():
        await conn.run_sync(SQLModel.metadata.create_all)
    return engine


def test_owner_constraint_always_comes_first() -> None:
    predicate = compile_filters("user-1", TodoFilter())

    assert predicate.names == ("owner",)


def test_constraints_follow_supplied_filters() -> None:
    predicate = compile_filters(
        "user-1",
        TodoFilter(
            completed=False,
            priority=TodoPriority.HIGH,
            search="proj",
            tag_id="tag-1",
        ),
    )

    assert predicate.names == ("owner", "completed", "priority", "search", "tag")


def test_empty_values_impose_no_constraint() -> None:
    predicate = compile_filters("user-1", TodoFilter(search="", tag_id=""))

    assert predicate.names == ("owner",)


def test_completed_false_is_a_real_filter() -> None:
    assert compile_filters("user-1", TodoFilter(completed=False)).names == ("owner", "completed")


def test_unknown_sort_key_raises() -> None:
    with pytest.raises(ValueError, match="Unsupported sort key"):
        resolve_ordering("user_id", SortOrder.ASC)  # type: ignore[arg-type]


def test_ordering_always_ends_with_id_tiebreak() -> None:
    for sort_by in TodoSortField:
        clauses = resolve_ordering(sort_by, SortOrder.DESC)
        assert "todos.id ASC" in str(clauses[-1])


@pytest.mark.asyncio
async def test_predicate_and_ordering_against_database() -> None:
    engine = await _make_engine()
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    base = datetime(2026, 1, 1, 12, 0, 0)
    try:
        async with session_maker() as session:
            session.add(User(id="owner"))
            session.add(User(id="other"))
            session.add(Tag(id="tag-a", name="a", user_id="owner"))
            rows = [
                Todo(id="t1", title="alpha", user_id="owner", priority="low", due_date=None),
                Todo(
                    id="t2",
                    title="beta",
                    user_id="owner",
                    priority="urgent",
                    due_date=base + timedelta(days=1),
                ),
                Todo(
                    id="t3",
                    title="gamma",
                    user_id="owner",
                    priority="medium",
                    due_date=base,
                    completed=True,
                ),
                Todo(id="t4", title="alpha", user_id="other", priority="high"),
            ]
            for row in rows:
                session.add(row)
            session.add(TodoTag(todo_id="t2", tag_id="tag-a"))
            await session.commit()

            async def ids(
                filters: TodoFilter,
                sort_by: TodoSortField,
                order: SortOrder,
            ) -> list[str]:
                predicate = compile_filters("owner", filters)
                statement = (
                    select(Todo)
                    .where(predicate.clause)
                    .order_by(*resolve_ordering(sort_by, order))
                )
                return [todo.id for todo in (await session.exec(statement)).all()]

            assert await ids(TodoFilter(), TodoSortField.PRIORITY, SortOrder.DESC) == [
                "t2",
                "t3",
                "t1",
            ]
            assert await ids(TodoFilter(), TodoSortField.DUE_DATE, SortOrder.ASC) == [
                "t3",
                "t2",
                "t1",
            ]
            assert await ids(TodoFilter(), TodoSortField.DUE_DATE, SortOrder.DESC) == [
                "t2",
                "t3",
                "t1",
            ]
            assert await ids(
                TodoFilter(search="alp"),
                TodoSortField.TITLE,
                SortOrder.ASC,
            ) == ["t1"]
            assert await ids(
                TodoFilter(tag_id="tag-a"),
                TodoSortField.CREATED_AT,
                SortOrder.DESC,
            ) == ["t2"]
            assert await ids(
                TodoFilter(completed=True),
                TodoSortField.CREATED_AT,
                SortOrder.DESC,
            ) == ["t3"]
    finally:
        await engine.dispose()
