from typing import Optional
from dependency_injector import containers, providers

from unitofwork.core.logger import logger
from unitofwork.core.settings import Settings, settings as default_settings
from unitofwork.repositories import RepositoryRegistry
from unitofwork.storage.database import build_engine, build_session_factory
from unitofwork.unit_of_work import UnitOfWork


class UnitOfWorkContainer(containers.DeclarativeContainer):
    settings = providers.Object(default_settings)

    engine = providers.Singleton(build_engine, settings)
    session_factory = providers.Singleton(build_session_factory, engine)
    repository_registry = providers.Singleton(RepositoryRegistry)

    unit_of_work = providers.Factory(
        UnitOfWork,
        session_factory=session_factory,
        registry=repository_registry,
    )


def add_unit_of_work(settings: Optional[Settings] = None) -> UnitOfWorkContainer:
    """Container that hands out a new ``UnitOfWork`` per call of ``unit_of_work()``."""
    container = UnitOfWorkContainer()
    if settings is not None:
        container.settings.override(settings)
    return container


def add_custom_repository(container: UnitOfWorkContainer, model: type, repository_cls: type) -> UnitOfWorkContainer:
    """Make ``UnitOfWork.get_repository(model)`` return ``repository_cls`` instances."""
    container.repository_registry().register(model, repository_cls)
    logger.info("[UnitOfWorkContainer] custom repository %s for %s", repository_cls.__name__, model.__name__)
    return container
