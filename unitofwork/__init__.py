from .containers import UnitOfWorkContainer, add_custom_repository, add_unit_of_work
from .paging import (
    PagedList,
    convert_paged,
    empty_paged_list,
    paginate,
    paginate_async,
    paginate_converted,
)
from .repositories import Repository, RepositoryRegistry
from .unit_of_work import UnitOfWork

__version__ = "1.0.0"

__all__ = [
    "UnitOfWork", "UnitOfWorkContainer", "add_unit_of_work", "add_custom_repository",
    "Repository", "RepositoryRegistry",
    "PagedList", "convert_paged", "empty_paged_list",
    "paginate", "paginate_async", "paginate_converted",
]
