from typing import Any, Optional, Protocol, Sequence, Tuple, Type, TypeVar, Generic, runtime_checkable
from sqlalchemy import Select, select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

# --- los modelos deben exponer .id ---
@runtime_checkable
class HasId(Protocol):
    id: Any  # columna PK

ModelT = TypeVar("ModelT", bound=HasId)

WhereExpr = ColumnElement[bool]


class BaseRepository(Generic[ModelT]):
    def __init__(self, model: Type[ModelT]):
        self.model = model

    async def add(self, entity: ModelT, session: AsyncSession) -> ModelT:
        session.add(entity)
        try:
            await session.flush([entity])
        except IntegrityError:
            await session.rollback()
            raise
        return entity

    async def get_by_id(
        self,
        id_: Any,
        session: AsyncSession,
        *,
        options: Sequence[Any] | None = None,
    ) -> Optional[ModelT]:
        stmt: Select = select(self.model).where(self.model.id == id_)
        if options:
            stmt = stmt.options(*options)
        res = await session.execute(stmt)
        return res.scalars().first()

    async def list_paginated(
        self,
        session: AsyncSession,
        offset: int,
        limit: int,
        *,
        filters: Sequence[WhereExpr] = (),
        order_by: Any | None = None,
    ) -> Tuple[list[ModelT], int]:
        if order_by is None:
            order_by = (self.model.id.desc(),)
        elif not isinstance(order_by, (list, tuple)):
            order_by = (order_by,)

        page_q: Select = select(self.model).where(*filters).order_by(*order_by).offset(offset).limit(limit)
        items = list((await session.execute(page_q)).scalars().all())
        total = int(
            await session.scalar(select(func.count(self.model.id)).where(*filters)) or 0
        )
        return items, total

    async def update(self, entity: ModelT, session: AsyncSession) -> ModelT:
        try:
            await session.flush([entity])
        except IntegrityError:
            await session.rollback()
            raise
        return entity

    async def delete(self, entity: ModelT, session: AsyncSession) -> None:
        await session.delete(entity)
        await session.flush()
