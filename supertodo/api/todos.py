"""Todo CRUD, filtering, toggling, and statistics endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, status

from supertodo.api.deps import OWNER_DEP, SESSION_DEP
from supertodo.models.todos import TodoPriority
from supertodo.schemas.common import DeleteResponse
from supertodo.schemas.stats import TodoStats
from supertodo.schemas.todos import TodoCreate, TodoRead, TodoUpdate, TodoWithTagsRead
from supertodo.services import stats as stats_service
from supertodo.services import todos as todo_service
from supertodo.services.todo_query import SortOrder, TodoFilter, TodoSortField

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

router = APIRouter(prefix="/todos", tags=["todos"])
COMPLETED_QUERY = Query(default=None, description="Only todos with this completion state.")
PRIORITY_QUERY = Query(default=None, description="Only todos with this priority.")
SEARCH_QUERY = Query(
    default=None,
    description="Substring matched against title or description.",
)
TAG_ID_QUERY = Query(default=None, description="Only todos linked to this tag.")
SORT_BY_QUERY = Query(default=TodoSortField.CREATED_AT)
SORT_ORDER_QUERY = Query(default=SortOrder.DESC)


@router.get("", response_model=list[TodoWithTagsRead])
async def list_todos(
    completed: bool | None = COMPLETED_QUERY,
    priority: TodoPriority | None = PRIORITY_QUERY,
    search: str | None = SEARCH_QUERY,
    tag_id: str | None = TAG_ID_QUERY,
    sort_by: TodoSortField = SORT_BY_QUERY,
    sort_order: SortOrder = SORT_ORDER_QUERY,
    session: AsyncSession = SESSION_DEP,
    owner_id: str = OWNER_DEP,
) -> list[TodoWithTagsRead]:
    """List the caller's todos with optional filters and ordering."""
    return await todo_service.list_todos(
        session,
        owner_id=owner_id,
        filters=TodoFilter(
            completed=completed,
            priority=priority,
            search=search,
            tag_id=tag_id,
        ),
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get("/stats", response_model=TodoStats)
async def get_todo_stats(
    session: AsyncSession = SESSION_DEP,
    owner_id: str = OWNER_DEP,
) -> TodoStats:
    """Summarize the caller's full todo set."""
    return await stats_service.get_stats(session, owner_id=owner_id)


@router.get("/{todo_id}", response_model=TodoWithTagsRead)
async def get_todo(
    todo_id: str,
    session: AsyncSession = SESSION_DEP,
    owner_id: str = OWNER_DEP,
) -> TodoWithTagsRead:
    """Get one todo with its tags."""
    return await todo_service.get_todo(session, owner_id=owner_id, todo_id=todo_id)


@router.post("", response_model=TodoRead, status_code=status.HTTP_201_CREATED)
async def create_todo(
    payload: TodoCreate,
    session: AsyncSession = SESSION_DEP,
    owner_id: str = OWNER_DEP,
) -> TodoRead:
    """Create a todo, linking any supplied tags in the same transaction."""
    todo = await todo_service.create_todo(session, owner_id=owner_id, payload=payload)
    return TodoRead.model_validate(todo, from_attributes=True)


@router.patch("/{todo_id}", response_model=TodoWithTagsRead)
async def update_todo(
    todo_id: str,
    payload: TodoUpdate,
    session: AsyncSession = SESSION_DEP,
    owner_id: str = OWNER_DEP,
) -> TodoWithTagsRead:
    """Apply a partial update; `tag_ids`, when present, replaces the tag set."""
    return await todo_service.update_todo(
        session,
        owner_id=owner_id,
        todo_id=todo_id,
        payload=payload,
    )


@router.post("/{todo_id}/toggle", response_model=TodoRead)
async def toggle_todo(
    todo_id: str,
    session: AsyncSession = SESSION_DEP,
    owner_id: str = OWNER_DEP,
) -> TodoRead:
    """Flip a todo between active and completed."""
    todo = await todo_service.toggle_todo(session, owner_id=owner_id, todo_id=todo_id)
    return TodoRead.model_validate(todo, from_attributes=True)


@router.delete("/{todo_id}", response_model=DeleteResponse)
async def delete_todo(
    todo_id: str,
    session: AsyncSession = SESSION_DEP,
    owner_id: str = OWNER_DEP,
) -> DeleteResponse:
    """Permanently delete a todo and its tag links."""
    deleted_id = await todo_service.delete_todo(session, owner_id=owner_id, todo_id=todo_id)
    return DeleteResponse(id=deleted_id)
