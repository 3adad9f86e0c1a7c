from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional, Type, TypeVar
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from unitofwork.core.logger import logger
from unitofwork.repositories import Repository, RepositoryRegistry

ModelT = TypeVar("ModelT")


class UnitOfWork:
    """
    One ``AsyncSession`` and the repositories that share it.

    The session is opened on first use. ``save_changes`` commits whatever the
    repositories registered; leaving ``async with`` on an error rolls back.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        registry: Optional[RepositoryRegistry] = None,
    ) -> None:
        self._session_factory = session_factory
        self._registry = registry or RepositoryRegistry()
        self._session: Optional[AsyncSession] = None
        self._repositories: dict[type, Repository[Any]] = {}
        self._written = 0

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is not None and self._session is not None:
                logger.warning("[UnitOfWork] rolling back after %s", exc_type.__name__)
                await self.rollback()
        finally:
            await self.close()

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            self._session = self._session_factory()
            event.listen(self._session.sync_session, "after_flush", self._on_flush)
            event.listen(self._session.sync_session, "after_rollback", self._on_rollback)
        return self._session

    def _on_flush(self, session, flush_context) -> None:
        # new/dirty/deleted todavía reflejan el estado previo al flush
        dirty = [o for o in session.dirty if session.is_modified(o)]
        self._written += len(session.new) + len(dirty) + len(session.deleted)

    def _on_rollback(self, session) -> None:
        self._written = 0

    def get_repository(self, model: Type[ModelT]) -> Repository[ModelT]:
        repo = self._repositories.get(model)
        if repo is None:
            repository_cls = self._registry.resolve(model)
            if self._registry.has_custom(model):
                repo = repository_cls(self.session)
            else:
                repo = repository_cls(self.session, model)
            self._repositories[model] = repo
        return repo

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[AsyncSession]:
        """Reuse the open transaction, or open one that commits when the block ends."""
        session = self.session
        if session.in_transaction():
            yield session
        else:
            async with session.begin():
                yield session

    async def save_changes(self) -> int:
        """Flush pending changes and commit. Returns the rows written since the last save."""
        session = self.session
        await session.flush()
        written = self._written
        await session.commit()
        self._written = 0
        logger.info("[UnitOfWork] saved %s change(s)", written)
        return written

    async def rollback(self) -> None:
        if self._session is None:
            return
        await self._session.rollback()

    async def execute_sql(self, sql: str, **params: Any) -> int:
        res = await self.session.execute(text(sql), params)
        return res.rowcount

    async def close(self) -> None:
        if self._session is None:
            return
        await self._session.close()
        self._session = None
        self._repositories.clear()
        self._written = 0
