"""Owner-scoped tag listing, creation, and cascading deletion."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, status
from sqlalchemy import and_
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col, select

from supertodo.core.logging import get_logger
from supertodo.core.time import utcnow
from supertodo.db import crud
from supertodo.models.tags import Tag
from supertodo.models.todo_tags import TodoTag

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

    from supertodo.schemas.tags import TagCreate

logger = get_logger(__name__)

TAG_NOT_FOUND = "Tag not found"


async def list_tags(session: AsyncSession, *, owner_id: str) -> list[Tag]:
    """Return the owner's tags ordered by name."""
    return await (
        Tag.objects.filter_by(user_id=owner_id)
        .order_by(col(Tag.name).asc(), col(Tag.id).asc())
        .all(session)
    )


async def create_tag(session: AsyncSession, *, owner_id: str, payload: TagCreate) -> Tag:
    tag = Tag(
        name=payload.name,
        color=payload.color,
        user_id=owner_id,
        created_at=utcnow(),
    )
    session.add(tag)
    await session.commit()
    await session.refresh(tag)
    logger.info("tag.create owner=%s id=%s", owner_id, tag.id)
    return tag


async def delete_tag(session: AsyncSession, *, owner_id: str, tag_id: str) -> str:
    """Delete an owned tag and unlink it from every todo in one transaction."""
    owned = and_(col(Tag.id) == tag_id, col(Tag.user_id) == owner_id)
    try:
        await crud.delete_where(
            session,
            TodoTag,
            col(TodoTag.tag_id).in_(select(col(Tag.id)).where(owned)),
            commit=False,
        )
        deleted = await crud.delete_where(session, Tag, owned, commit=False)
        if not deleted:
            await session.rollback()
            logger.debug("tag.delete.not_found owner=%s id=%s", owner_id, tag_id)
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TAG_NOT_FOUND)
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        logger.warning("tag.delete.rolled_back owner=%s id=%s", owner_id, tag_id, exc_info=True)
        raise
    logger.info("tag.delete owner=%s id=%s", owner_id, tag_id)
    return tag_id
