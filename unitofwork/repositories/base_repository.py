import asyncio
from typing import Any, Generic, Iterable, Optional, Protocol, Sequence, Type, TypeVar, runtime_checkable
from sqlalchemy import Select, func, select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from unitofwork.paging import AsyncSelectSource, DEFAULT_INDEX_FROM, PagedList, paginate_async

# --- los modelos deben exponer .id ---
@runtime_checkable
class HasId(Protocol):
    id: Any  # columna PK

ModelT = TypeVar("ModelT", bound=HasId)


class Repository(Generic[ModelT]):
    """
    Data access for one mapped class, bound to the session of a unit of work.

    Only composes statements and registers changes; tracking, flushing and
    transactions are SQLAlchemy's.
    """

    def __init__(self, session: AsyncSession, model: Type[ModelT]):
        self.session = session
        self.model = model

    # ---------- queries ----------

    def query(
        self,
        *where: Any,
        order_by: Any | None = None,
        options: Sequence[Any] | None = None,
    ) -> Select:
        if order_by is None:
            order_by = self.model.id.desc()
        stmt: Select = select(self.model).where(*where).order_by(order_by)
        if options:
            stmt = stmt.options(*options)
        return stmt

    async def get_by_id(
        self,
        id_: Any,
        *,
        options: Sequence[Any] | None = None,
        for_update: bool = False,
    ) -> Optional[ModelT]:
        stmt: Select = select(self.model).where(self.model.id == id_)
        if for_update:
            stmt = stmt.with_for_update()
        if options:
            stmt = stmt.options(*options)
        res = await self.session.execute(stmt)
        return res.scalars().first()

    async def get_first_or_default(
        self,
        *where: Any,
        order_by: Any | None = None,
        options: Sequence[Any] | None = None,
    ) -> Optional[ModelT]:
        stmt = self.query(*where, order_by=order_by, options=options).limit(1)
        res = await self.session.execute(stmt)
        return res.scalars().first()

    async def list_all(
        self,
        *where: Any,
        order_by: Any | None = None,
        options: Sequence[Any] | None = None,
    ) -> list[ModelT]:
        res = await self.session.execute(self.query(*where, order_by=order_by, options=options))
        return list(res.scalars().all())

    async def count(self, *where: Any) -> int:
        stmt = select(func.count(self.model.id)).select_from(self.model).where(*where)
        return int(await self.session.scalar(stmt) or 0)

    async def exists(self, *where: Any) -> bool:
        stmt = select(select(self.model.id).where(*where).exists())
        return bool(await self.session.scalar(stmt))

    async def get_paged_list(
        self,
        *where: Any,
        order_by: Any | None = None,
        options: Sequence[Any] | None = None,
        page_index: int = DEFAULT_INDEX_FROM,
        page_size: int = 20,
        index_from: int = DEFAULT_INDEX_FROM,
        cancellation: asyncio.Event | None = None,
    ) -> PagedList[ModelT]:
        source: AsyncSelectSource[ModelT] = AsyncSelectSource(
            self.session, self.query(*where, order_by=order_by, options=options)
        )
        return await paginate_async(
            source, page_index, page_size, index_from, cancellation=cancellation
        )

    async def from_sql(self, sql: str, **params: Any) -> list[ModelT]:
        stmt = select(self.model).from_statement(text(sql).bindparams(**params))
        res = await self.session.execute(stmt)
        return list(res.scalars().all())

    # ---------- changes ----------

    async def add(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise
        return entity

    async def add_many(self, entities: Iterable[ModelT]) -> list[ModelT]:
        items = list(entities)
        self.session.add_all(items)
        await self.session.flush()
        return items

    async def update(self, entity: ModelT) -> ModelT:
        merged = await self.session.merge(entity)
        await self.session.flush()
        return merged

    async def update_fields(
        self,
        entity: ModelT,
        data: dict[str, Any],
        *,
        allow: set[str] | None = None,
        deny: set[str] | None = None,
    ) -> ModelT:
        for k, v in data.items():
            if allow and k not in allow:
                continue
            if deny and k in deny:
                continue
            setattr(entity, k, v)
        await self.session.flush()
        return entity

    async def delete(self, entity: ModelT) -> None:
        await self.session.delete(entity)
        await self.session.flush()

    async def delete_by_id(self, id_: Any) -> int:
        obj = await self.get_by_id(id_)
        if not obj:
            return 0
        await self.session.delete(obj)
        await self.session.flush()
        return 1
