# ruff: noqa: INP001
"""Integration tests for the owner-scoped tag catalog."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import pytest
from fastapi import APIRouter, FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlmodel import SQLModel, col, select

from supertodo.api.tags import router as tags_router
from supertodo.api.todos import router as todos_router
from supertodo.core.auth_mode import AuthMode
from supertodo.core.config import settings
from supertodo.core.error_handling import install_error_handling
from supertodo.db import crud
from supertodo.db.session import Database
from supertodo.models.tags import Tag
from supertodo.models.todo_tags import TodoTag

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

ALICE = {"X-Forwarded-User": "alice"}
BOB = {"X-Forwarded-User": "bob"}


def _enable_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


async def _make_engine() -> AsyncEngine:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    async with engine.connect() as conn, conn.begin():
        await conn.run_sync(SQLModel.metadata.create_all)
    return engine


@asynccontextmanager
async def _api(monkeypatch: pytest.MonkeyPatch) -> AsyncIterator[tuple[AsyncClient, Database]]:
    monkeypatch.setattr(settings, "auth_mode", AuthMode.PROXY)
    monkeypatch.setattr(settings, "proxy_user_header", "X-Forwarded-User")
    engine = await _make_engine()
    db = Database.from_engine(engine)
    app = FastAPI()
    install_error_handling(app)
    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(todos_router)
    api_v1.include_router(tags_router)
    app.include_router(api_v1)
    app.state.db = db
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://testserver",
        ) as client:
            yield client, db
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_create_tag_defaults_color_and_lists_by_name(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async with _api(monkeypatch) as (client, _db):
        for name in ("work", "errands", "home"):
            resp = await client.post("/api/v1/tags", json={"name": name}, headers=ALICE)
            assert resp.status_code == 201
            assert resp.json()["color"] == "#3B82F6"
            assert resp.json()["user_id"] == "alice"

        custom = await client.post(
            "/api/v1/tags",
            json={"name": "alerts", "color": "#ff0000"},
            headers=ALICE,
        )
        assert custom.json()["color"] == "#ff0000"

        listed = await client.get("/api/v1/tags", headers=ALICE)
        assert [tag["name"] for tag in listed.json()] == ["alerts", "errands", "home", "work"]

        assert (await client.get("/api/v1/tags", headers=BOB)).json() == []


@pytest.mark.asyncio
async def test_duplicate_tag_names_are_allowed(monkeypatch: pytest.MonkeyPatch) -> None:
    async with _api(monkeypatch) as (client, _db):
        first = await client.post("/api/v1/tags", json={"name": "dup"}, headers=ALICE)
        second = await client.post("/api/v1/tags", json={"name": "dup"}, headers=ALICE)

        assert first.status_code == second.status_code == 201
        assert first.json()["id"] != second.json()["id"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"name": ""},
        {"name": "x" * 51},
        {"name": "ok", "color": "blue"},
        {"name": "ok", "color": "#12345"},
        {"name": "ok", "color": "#GGGGGG"},
    ],
)
async def test_invalid_tag_payloads_are_rejected(
    monkeypatch: pytest.MonkeyPatch,
    payload: dict[str, str],
) -> None:
    async with _api(monkeypatch) as (client, _db):
        resp = await client.post("/api/v1/tags", json=payload, headers=ALICE)

        assert resp.status_code == 422
        assert resp.json()["code"] == "VALIDATION"


@pytest.mark.asyncio
async def test_delete_tag_detaches_it_from_todos(monkeypatch: pytest.MonkeyPatch) -> None:
    async with _api(monkeypatch) as (client, db):
        tag = (await client.post("/api/v1/tags", json={"name": "gone"}, headers=ALICE)).json()
        keep = (await client.post("/api/v1/tags", json={"name": "kept"}, headers=ALICE)).json()
        todo = (
            await client.post(
                "/api/v1/todos",
                json={"title": "tagged", "tag_ids": [tag["id"], keep["id"]]},
                headers=ALICE,
            )
        ).json()

        deleted = await client.delete(f"/api/v1/tags/{tag['id']}", headers=ALICE)
        assert deleted.status_code == 200
        assert deleted.json() == {"success": True, "id": tag["id"]}

        fetched = (await client.get(f"/api/v1/todos/{todo['id']}", headers=ALICE)).json()
        assert [item["id"] for item in fetched["tags"]] == [keep["id"]]
        assert [item["id"] for item in (await client.get("/api/v1/tags", headers=ALICE)).json()] == [
            keep["id"],
        ]

        async with db.session_maker() as session:
            links = (
                await session.exec(select(TodoTag).where(col(TodoTag.tag_id) == tag["id"]))
            ).all()
        assert links == []

        again = await client.delete(f"/api/v1/tags/{tag['id']}", headers=ALICE)
        assert again.status_code == 404
        assert again.json()["detail"] == "Tag not found"


@pytest.mark.asyncio
async def test_cannot_delete_another_owners_tag(monkeypatch: pytest.MonkeyPatch) -> None:
    async with _api(monkeypatch) as (client, _db):
        tag = (await client.post("/api/v1/tags", json={"name": "mine"}, headers=ALICE)).json()

        resp = await client.delete(f"/api/v1/tags/{tag['id']}", headers=BOB)

        assert resp.status_code == 404
        listed = (await client.get("/api/v1/tags", headers=ALICE)).json()
        assert [item["id"] for item in listed] == [tag["id"]]


@pytest.mark.asyncio
async def test_store_cascades_links_when_a_tag_row_is_removed(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async with _api(monkeypatch) as (client, db):
        tag = (await client.post("/api/v1/tags", json={"name": "raw"}, headers=ALICE)).json()
        await client.post(
            "/api/v1/todos",
            json={"title": "linked", "tag_ids": [tag["id"]]},
            headers=ALICE,
        )

        async with db.session_maker() as session:
            await crud.delete_where(session, Tag, col(Tag.id) == tag["id"])
            links = (
                await session.exec(select(TodoTag).where(col(TodoTag.tag_id) == tag["id"]))
            ).all()

        assert links == []
