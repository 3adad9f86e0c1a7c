"""Pytest configuration and fixtures for unitofwork tests."""

import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from unitofwork import UnitOfWork, RepositoryRegistry
from unitofwork.core.settings import Settings
from unitofwork.storage.database import build_engine, build_session_factory
from host.models import Base, Blog, Post
from host.repositories import CustomBlogRepository

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def test_settings():
    """Settings pointing at a private in-memory database."""
    return Settings(_env_file=None, DATABASE_URL=MEMORY_URL, DEFAULT_PAGE_SIZE=5, MAX_PAGE_SIZE=10)


@pytest_asyncio.fixture
async def engine(test_settings):
    engine = build_engine(test_settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def registry():
    registry = RepositoryRegistry()
    registry.register(Blog, CustomBlogRepository)
    return registry


@pytest_asyncio.fixture
async def uow(session_factory, registry):
    async with UnitOfWork(session_factory, registry) as unit:
        yield unit


@pytest_asyncio.fixture
async def seeded(session_factory):
    """25 blogs titled ``blog-00`` .. ``blog-24``, every third one with two posts."""
    async with session_factory() as session:
        async with session.begin():
            for i in range(25):
                posts = [Post(title=f"post-{i}-{j}") for j in range(2)] if i % 3 == 0 else []
                session.add(Blog(url=f"https://blogs.example.com/{i}", title=f"blog-{i:02d}", posts=posts))
    return 25


@pytest.fixture
def sync_session():
    """Plain sync Session on its own in-memory SQLite database."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        session.add_all(
            [Blog(url=f"https://blogs.example.com/{i}", title=f"blog-{i:02d}") for i in range(25)]
        )
        session.commit()
        yield session
    engine.dispose()
