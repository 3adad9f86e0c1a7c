from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, Sequence, TypeVar
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

T = TypeVar("T")


class PageSource(ABC, Generic[T]):
    """Synchronous source a page can be cut from."""

    @abstractmethod
    def count(self) -> int: ...

    @abstractmethod
    def fetch(self, offset: int, limit: int) -> Sequence[T]: ...


class AsyncPageSource(ABC, Generic[T]):
    """Source whose count and slice are evaluated remotely, off the caller's loop."""

    @abstractmethod
    async def count(self) -> int: ...

    @abstractmethod
    async def fetch(self, offset: int, limit: int) -> Sequence[T]: ...


class SequenceSource(PageSource[T]):
    """Already materialized items; count and slice happen in memory."""

    def __init__(self, items: Iterable[T]) -> None:
        # generators se consumen una sola vez
        self._items: Sequence[T] = items if isinstance(items, Sequence) else list(items)

    def count(self) -> int:
        return len(self._items)

    def fetch(self, offset: int, limit: int) -> Sequence[T]:
        return list(self._items[offset:offset + limit])


def count_statement(statement: Select) -> Select:
    """``SELECT count(*)`` over the statement, ordering dropped."""
    return select(func.count()).select_from(statement.order_by(None).subquery())


def page_statement(statement: Select, offset: int, limit: int) -> Select:
    return statement.offset(offset).limit(limit)


class SelectSource(PageSource[T]):
    """
    A SELECT bound to a sync ``Session``.

    ``count()`` and ``fetch()`` are two separate round-trips against the same
    statement.
    """

    def __init__(self, session: Session, statement: Select) -> None:
        self.session = session
        self.statement = statement

    def count(self) -> int:
        return int(self.session.scalar(count_statement(self.statement)) or 0)

    def fetch(self, offset: int, limit: int) -> Sequence[T]:
        return list(self.session.scalars(page_statement(self.statement, offset, limit)).all())


class AsyncSelectSource(AsyncPageSource[T]):
    """A SELECT bound to an ``AsyncSession``."""

    def __init__(self, session: AsyncSession, statement: Select) -> None:
        self.session = session
        self.statement = statement

    async def count(self) -> int:
        return int(await self.session.scalar(count_statement(self.statement)) or 0)

    async def fetch(self, offset: int, limit: int) -> Sequence[T]:
        res = await self.session.scalars(page_statement(self.statement, offset, limit))
        return list(res.all())


def as_page_source(source: Any) -> PageSource[Any] | AsyncPageSource[Any]:
    """
    Normalize what a caller hands the paginator.

    Sources are returned as-is; any other iterable becomes a ``SequenceSource``.
    A bare ``Select`` has no session to run on and is rejected.
    """
    if isinstance(source, (PageSource, AsyncPageSource)):
        return source
    if isinstance(source, Select):
        raise TypeError("Select statements must be bound to a session: use SelectSource or AsyncSelectSource")
    return SequenceSource(source)
