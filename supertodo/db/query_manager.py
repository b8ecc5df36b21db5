"""Chainable, immutable query builder exposed as `Model.objects`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlmodel import SQLModel, col, select

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement
    from sqlmodel.ext.asyncio.session import AsyncSession
    from sqlmodel.sql.expression import SelectOfScalar

ModelT = TypeVar("ModelT", bound=SQLModel)


class ModelQuery(Generic[ModelT]):
    """A SELECT over one model; every builder method returns a new query."""

    def __init__(
        self,
        model: type[ModelT],
        statement: SelectOfScalar[ModelT] | None = None,
    ) -> None:
        self.model = model
        self.statement: SelectOfScalar[ModelT] = (
            statement if statement is not None else select(model)
        )

    def _clone(self, statement: SelectOfScalar[ModelT]) -> ModelQuery[ModelT]:
        return ModelQuery(self.model, statement)

    def filter(self, *criteria: ColumnElement[bool] | bool) -> ModelQuery[ModelT]:
        return self._clone(self.statement.where(*criteria))

    def filter_by(self, **kwargs: Any) -> ModelQuery[ModelT]:
        return self._clone(self.statement.filter_by(**kwargs))

    def order_by(self, *clauses: Any) -> ModelQuery[ModelT]:
        return self._clone(self.statement.order_by(*clauses))

    def execution_options(self, **options: Any) -> ModelQuery[ModelT]:
        return self._clone(self.statement.execution_options(**options))

    def by_id(self, obj_id: object) -> ModelQuery[ModelT]:
        id_column = getattr(self.model, "id")
        return self.filter(col(id_column) == obj_id)

    async def all(self, session: AsyncSession) -> list[ModelT]:
        return list((await session.exec(self.statement)).all())

    async def first(self, session: AsyncSession) -> ModelT | None:
        return (await session.exec(self.statement.limit(1))).first()


class ManagerDescriptor:
    """Class-level descriptor returning a fresh `ModelQuery` for the owning model."""

    def __get__(self, instance: object, owner: type[ModelT]) -> ModelQuery[ModelT]:
        return ModelQuery(owner)
