from .base_repository import HasId, Repository
from .registry import RepositoryRegistry

__all__ = ["HasId", "Repository", "RepositoryRegistry"]
