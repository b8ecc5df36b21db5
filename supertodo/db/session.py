"""Database handle, request-scoped sessions, and startup migration helpers."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from alembic.config import Config
from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from supertodo import models as _models
from supertodo.core.config import settings
from supertodo.core.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Import model modules so SQLModel metadata is fully registered at startup.
_MODEL_REGISTRY = _models
PROJECT_ROOT = Path(__file__).resolve().parents[2]

logger = get_logger(__name__)


def _normalize_database_url(database_url: str) -> str:
    if "://" not in database_url:
        return database_url
    scheme, rest = database_url.split("://", 1)
    if scheme == "postgresql":
        return f"postgresql+psycopg://{rest}"
    return database_url


@dataclass
class Database:
    """Explicitly constructed store handle owning an engine and its session factory."""

    engine: AsyncEngine
    session_maker: async_sessionmaker[AsyncSession]

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> Database:
        return cls(
            engine=engine,
            session_maker=async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            ),
        )

    @classmethod
    def from_url(cls, database_url: str) -> Database:
        engine = create_async_engine(
            _normalize_database_url(database_url),
            pool_pre_ping=True,
        )
        return cls.from_engine(engine)

    async def create_all(self) -> None:
        """Create every registered table that does not exist yet."""
        async with self.engine.connect() as conn, conn.begin():
            await conn.run_sync(SQLModel.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


def _alembic_config() -> Config:
    alembic_ini = PROJECT_ROOT / "alembic.ini"

    alembic_cfg = Config(str(alembic_ini))
    alembic_cfg.attributes["configure_logger"] = False
    return alembic_cfg


def run_migrations() -> None:
    """Apply Alembic migrations to the latest revision."""
    from alembic import command

    logger.info("db.migrations.starting")
    command.upgrade(_alembic_config(), "head")
    logger.info("db.migrations.complete")


async def init_db(db: Database) -> None:
    """Initialize database schema, running migrations when configured."""
    if settings.db_auto_migrate:
        versions_dir = PROJECT_ROOT / "migrations" / "versions"
        if any(versions_dir.glob("*.py")):
            logger.info("db.init.migrate")
            await asyncio.to_thread(run_migrations)
            return
        logger.warning("db.init.no_revisions falling back to create_all")

    await db.create_all()


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a request-scoped async DB session with safe rollback on errors."""
    db: Database = request.app.state.db
    async with db.session_maker() as session:
        try:
            yield session
        finally:
            in_txn = False
            try:
                in_txn = bool(session.in_transaction())
            except SQLAlchemyError:
                logger.exception("db.session.inspect_failed")
            if in_txn:
                try:
                    await session.rollback()
                except SQLAlchemyError:
                    logger.exception("db.session.rollback_failed")
