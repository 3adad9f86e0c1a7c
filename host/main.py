from contextlib import asynccontextmanager
from typing import Optional, cast

from fastapi import Depends, FastAPI, APIRouter
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from unitofwork import add_custom_repository
from unitofwork.core.logger import logger, setup_logging
from unitofwork.core.settings import Settings, settings as default_settings
from unitofwork.storage.database import dispose_engine, get_db
from host.app_containers import ApplicationContainer
from host.models import Base, Blog
from host.repositories import CustomBlogRepository
from host.routers import blog_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = cast(ApplicationContainer, app.state.container)
    settings = container.settings()
    engine = container.uow_container.engine()
    # base en memoria por defecto: las tablas se crean al arrancar
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{settings.APP_NAME} starting in {settings.APP_ENV}")
    try:
        yield
    finally:
        logger.info(f"{settings.APP_NAME} shutdown")
        await dispose_engine(engine)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)
    container = ApplicationContainer()
    container.settings.override(settings)
    add_custom_repository(container.uow_container, Blog, CustomBlogRepository)

    api_prefix = settings.API_PREFIX
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        openapi_url=f"{api_prefix}/openapi.json",
        docs_url=f"{api_prefix}/docs",
        redoc_url=f"{api_prefix}/redoc",
        lifespan=lifespan,
    )

    app.state.container = container
    db_session = get_db(container.uow_container.session_factory())

    base_router = APIRouter(prefix=api_prefix)
    base_router.include_router(blog_router)

    @base_router.get("/", tags=["health"])
    @base_router.get("/ready", tags=["health"])
    async def ready(db: AsyncSession = Depends(db_session)):
        await db.execute(text("SELECT 1"))
        return {
            "message": "ready",
            "database": "ok",
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "env": settings.APP_ENV,
            "prefix": api_prefix,
        }

    app.include_router(base_router)

    return app


app = create_app()
