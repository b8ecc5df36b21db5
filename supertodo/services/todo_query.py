"""Owner-scoped filter predicates and deterministic ordering for todo listings.

Filters are compiled into a list of named constraints that are ANDed together.
Each constraint is built by its own function so it can be inspected and tested
on its own. Ordering maps a closed set of sort keys to column expressions and
always ends with `id ASC` so equal sort values come back in a stable order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import and_, case, or_
from sqlmodel import col, select

from supertodo.models.todo_tags import TodoTag
from supertodo.models.todos import PRIORITY_ORDER, Todo, TodoPriority

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.sql.elements import ColumnElement


class TodoSortField(str, Enum):
    """Columns a todo listing may be ordered by."""

    CREATED_AT = "created_at"
    DUE_DATE = "due_date"
    PRIORITY = "priority"
    TITLE = "title"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class TodoFilter:
    """Optional listing filters; `None` (or an empty string) imposes no constraint."""

    completed: bool | None = None
    priority: TodoPriority | None = None
    search: str | None = None
    tag_id: str | None = None


@dataclass(frozen=True)
class Constraint:
    """One named condition of a conjunctive predicate."""

    name: str
    clause: ColumnElement[bool]


@dataclass(frozen=True)
class TodoPredicate:
    """Conjunction of constraints; always includes the owner constraint first."""

    constraints: tuple[Constraint, ...]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(constraint.name for constraint in self.constraints)

    @property
    def clause(self) -> ColumnElement[bool]:
        return and_(*(constraint.clause for constraint in self.constraints))


def owner_constraint(owner_id: str) -> Constraint:
    return Constraint("owner", col(Todo.user_id) == owner_id)


def completed_constraint(completed: bool) -> Constraint:
    return Constraint("completed", col(Todo.completed) == completed)


def priority_constraint(priority: TodoPriority) -> Constraint:
    return Constraint("priority", col(Todo.priority) == TodoPriority(priority).value)


def search_constraint(search: str) -> Constraint:
    """Match *search* as a substring of the title or the description.

    LIKE wildcards in the input are escaped; case sensitivity follows the
    store's collation.
    """
    return Constraint(
        "search",
        or_(
            col(Todo.title).contains(search, autoescape=True),
            col(Todo.description).contains(search, autoescape=True),
        ),
    )


def tag_constraint(tag_id: str) -> Constraint:
    tagged_todo_ids = select(col(TodoTag.todo_id)).where(col(TodoTag.tag_id) == tag_id)
    return Constraint("tag", col(Todo.id).in_(tagged_todo_ids))


def compile_filters(owner_id: str, filters: TodoFilter) -> TodoPredicate:
    """Build the owner-scoped conjunctive predicate for *filters*."""
    constraints = [owner_constraint(owner_id)]
    if filters.completed is not None:
        constraints.append(completed_constraint(filters.completed))
    if filters.priority:
        constraints.append(priority_constraint(filters.priority))
    if filters.search:
        constraints.append(search_constraint(filters.search))
    if filters.tag_id:
        constraints.append(tag_constraint(filters.tag_id))
    return TodoPredicate(constraints=tuple(constraints))


def priority_rank() -> ColumnElement[int]:
    """Priority as its declaration index (low=0 ... urgent=3)."""
    return case(
        {priority.value: rank for rank, priority in enumerate(PRIORITY_ORDER)},
        value=col(Todo.priority),
        else_=len(PRIORITY_ORDER),
    )


_SORT_COLUMNS: dict[TodoSortField, Callable[[], ColumnElement[object]]] = {
    TodoSortField.CREATED_AT: lambda: col(Todo.created_at),
    TodoSortField.DUE_DATE: lambda: col(Todo.due_date),
    TodoSortField.PRIORITY: priority_rank,
    TodoSortField.TITLE: lambda: col(Todo.title),
}


def resolve_ordering(
    sort_by: TodoSortField = TodoSortField.CREATED_AT,
    sort_order: SortOrder = SortOrder.DESC,
) -> list[ColumnElement[object]]:
    """Return ORDER BY clauses for the requested key and direction.

    Todos without a due date sort last under `due_date` in both directions.
    """
    try:
        sort_key = TodoSortField(sort_by)
        column_factory = _SORT_COLUMNS[sort_key]
    except (KeyError, ValueError) as exc:
        msg = f"Unsupported sort key: {sort_by!r}"
        raise ValueError(msg) from exc
    column = column_factory()
    primary = column.asc() if SortOrder(sort_order) == SortOrder.ASC else column.desc()

    ordering: list[ColumnElement[object]] = []
    if sort_key == TodoSortField.DUE_DATE:
        ordering.append(case((col(Todo.due_date).is_(None), 1), else_=0).asc())
    ordering.append(primary)
    ordering.append(col(Todo.id).asc())
    return ordering
