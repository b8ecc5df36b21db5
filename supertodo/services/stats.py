"""Summary statistics over an owner's full todo set."""

from __future__ import annotations

from typing import TYPE_CHECKING

from supertodo.core.config import settings
from supertodo.core.time import local_date, resolve_zone, utcnow
from supertodo.models.todos import Todo, TodoPriority
from supertodo.schemas.stats import PriorityBreakdown, TodoStats

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime, tzinfo

    from sqlmodel.ext.asyncio.session import AsyncSession


def completion_rate(completed: int, total: int) -> int:
    """Integer percentage of completed todos, rounded half up; 0 when there are none."""
    if total <= 0:
        return 0
    return (completed * 200 + total) // (total * 2)


def compute_stats(
    todos: Sequence[Todo],
    *,
    now: datetime,
    zone: tzinfo | None = None,
) -> TodoStats:
    """Compute statistics for *todos* as of *now* (naive UTC).

    `due_today` compares calendar dates in *zone* (server-local when `None`).
    Overdue and due-today counts only consider incomplete todos with a due date.
    """
    today = local_date(now, zone)
    by_priority = {priority.value: 0 for priority in TodoPriority}
    completed = 0
    overdue = 0
    due_today = 0

    for todo in todos:
        if todo.priority in by_priority:
            by_priority[todo.priority] += 1
        if todo.completed:
            completed += 1
            continue
        if todo.due_date is None:
            continue
        if todo.due_date < now:
            overdue += 1
        if local_date(todo.due_date, zone) == today:
            due_today += 1

    total = len(todos)
    return TodoStats(
        total=total,
        completed=completed,
        pending=total - completed,
        overdue=overdue,
        due_today=due_today,
        completion_rate=completion_rate(completed, total),
        by_priority=PriorityBreakdown(**by_priority),
    )


async def get_stats(
    session: AsyncSession,
    *,
    owner_id: str,
    now: datetime | None = None,
) -> TodoStats:
    """Load the owner's todos in one query and summarize them."""
    todos = await Todo.objects.filter_by(user_id=owner_id).all(session)
    return compute_stats(
        todos,
        now=now or utcnow(),
        zone=resolve_zone(settings.stats_timezone),
    )
