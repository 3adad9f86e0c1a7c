from dependency_injector import containers, providers

from unitofwork.containers import UnitOfWorkContainer
from unitofwork.core.settings import settings as default_settings
from host.services import BlogService

class ApplicationContainer(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(
        modules=[
                "host.routers.blog_router",
            ]
    )
    settings = providers.Object(default_settings)

    uow_container = providers.Container(
        UnitOfWorkContainer,
        settings=settings,
    )

    blog_service = providers.Factory(
        BlogService,
        page_size=settings.provided.DEFAULT_PAGE_SIZE,
        max_page_size=settings.provided.MAX_PAGE_SIZE,
    )
