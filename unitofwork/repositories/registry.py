from typing import Any, Type

from unitofwork.core.exceptions import RepositoryRegistrationError
from unitofwork.core.logger import logger
from .base_repository import Repository


class RepositoryRegistry:
    """Custom repository classes per mapped model; everything else gets ``Repository``."""

    def __init__(self) -> None:
        self._custom: dict[type, Type[Repository[Any]]] = {}

    def register(self, model: type, repository_cls: type) -> None:
        if not (isinstance(repository_cls, type) and issubclass(repository_cls, Repository)):
            raise RepositoryRegistrationError(
                f"{getattr(repository_cls, '__name__', repository_cls)!s} is not a Repository subclass"
            )
        logger.debug("[RepositoryRegistry] %s -> %s", model.__name__, repository_cls.__name__)
        self._custom[model] = repository_cls

    def resolve(self, model: type) -> Type[Repository[Any]]:
        return self._custom.get(model, Repository)

    def has_custom(self, model: type) -> bool:
        return model in self._custom
