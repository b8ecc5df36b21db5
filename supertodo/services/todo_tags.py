"""Tag resolution for todo listings (many-to-many join materialization)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlmodel import col, select

from supertodo.models.tags import Tag
from supertodo.models.todo_tags import TodoTag
from supertodo.schemas.tags import TagRead
from supertodo.schemas.todos import TodoWithTagsRead

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlmodel.ext.asyncio.session import AsyncSession

    from supertodo.models.todos import Todo


async def tags_by_todo_id(
    session: AsyncSession,
    *,
    todo_ids: Sequence[str],
) -> dict[str, list[Tag]]:
    """Return linked tags per todo id, in link-creation order (then by name)."""
    if not todo_ids:
        return {}
    rows = (
        await session.exec(
            select(col(TodoTag.todo_id), Tag)
            .join(Tag, col(Tag.id) == col(TodoTag.tag_id))
            .where(col(TodoTag.todo_id).in_(todo_ids))
            .order_by(col(TodoTag.created_at).asc(), col(Tag.name).asc(), col(Tag.id).asc()),
        )
    ).all()
    tags_by_id: dict[str, list[Tag]] = {todo_id: [] for todo_id in todo_ids}
    for todo_id, tag in rows:
        tags_by_id.setdefault(todo_id, []).append(tag)
    return tags_by_id


def to_todo_with_tags(todo: Todo, tags: Sequence[Tag]) -> TodoWithTagsRead:
    payload = TodoWithTagsRead.model_validate(todo, from_attributes=True)
    payload.tags = [TagRead.model_validate(tag, from_attributes=True) for tag in tags]
    return payload


async def attach_tags(
    session: AsyncSession,
    todos: Sequence[Todo],
) -> list[TodoWithTagsRead]:
    """Enrich *todos* with their tags, preserving the input order."""
    tags_by_id = await tags_by_todo_id(session, todo_ids=[todo.id for todo in todos])
    return [to_todo_with_tags(todo, tags_by_id.get(todo.id, [])) for todo in todos]
