"""Tag catalog endpoints scoped to the calling user."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, status

from supertodo.api.deps import OWNER_DEP, SESSION_DEP
from supertodo.schemas.common import DeleteResponse
from supertodo.schemas.tags import TagCreate, TagRead
from supertodo.services import tags as tag_service

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=list[TagRead])
async def list_tags(
    session: AsyncSession = SESSION_DEP,
    owner_id: str = OWNER_DEP,
) -> list[TagRead]:
    """List the caller's tags ordered by name."""
    tags = await tag_service.list_tags(session, owner_id=owner_id)
    return [TagRead.model_validate(tag, from_attributes=True) for tag in tags]


@router.post("", response_model=TagRead, status_code=status.HTTP_201_CREATED)
async def create_tag(
    payload: TagCreate,
    session: AsyncSession = SESSION_DEP,
    owner_id: str = OWNER_DEP,
) -> TagRead:
    """Create a tag owned by the caller."""
    tag = await tag_service.create_tag(session, owner_id=owner_id, payload=payload)
    return TagRead.model_validate(tag, from_attributes=True)


@router.delete("/{tag_id}", response_model=DeleteResponse)
async def delete_tag(
    tag_id: str,
    session: AsyncSession = SESSION_DEP,
    owner_id: str = OWNER_DEP,
) -> DeleteResponse:
    """Delete a tag and detach it from every todo."""
    deleted_id = await tag_service.delete_tag(session, owner_id=owner_id, tag_id=tag_id)
    return DeleteResponse(id=deleted_id)
