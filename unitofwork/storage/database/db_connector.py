from collections.abc import AsyncGenerator
from sqlalchemy.engine.url import make_url, URL
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool
from unitofwork.core.settings import Settings, settings as default_settings


def normalize_url(raw: str) -> URL:
    """
    Build the async URL the engine connects with.

    Postgres URLs are rebuilt without query args and with the asyncpg driver
    (sslmode/channel_binding must not reach asyncpg.connect()).
    Any other backend is passed through untouched.
    """
    u = make_url(raw)
    if u.get_backend_name() != "postgresql":
        return u
    return URL.create(
        drivername="postgresql+asyncpg",
        username=u.username,
        password=u.password,
        host=u.host,
        port=u.port,
        database=u.database,
    )


def _is_memory_sqlite(url: URL) -> bool:
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def build_engine(settings: Settings | None = None) -> AsyncEngine:
    settings = settings or default_settings
    url = normalize_url(settings.DATABASE_URL_PLAIN)

    kwargs: dict = {"echo": bool(settings.DB_ECHO)}
    if _is_memory_sqlite(url):
        # una sola conexión, si no cada conexión ve una base vacía
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    elif settings.DB_NULL_POOL:
        kwargs["poolclass"] = NullPool
        kwargs["pool_pre_ping"] = True
    else:
        kwargs["pool_pre_ping"] = True

    return create_async_engine(url.render_as_string(hide_password=False), **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False, class_=AsyncSession)


def get_db(session_factory: async_sessionmaker[AsyncSession]):
    async def _get_db() -> AsyncGenerator[AsyncSession, None]:
        session: AsyncSession = session_factory()
        try:
            yield session
        finally:
            await session.close()

    return _get_db


async def dispose_engine(engine: AsyncEngine) -> None:
    await engine.dispose()
