from dataclasses import dataclass
from typing import Generic, List, TypeVar

from unitofwork.paging import PagedList

T = TypeVar("T")

@dataclass(slots=True)
class PageDTO(Generic[T]):
    """Generic pagination envelope."""
    items: List[T]
    page_index: int
    page_size: int
    index_from: int
    total_count: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool

    @classmethod
    def from_paged(cls, page: PagedList[T]) -> "PageDTO[T]":
        return cls(**page.to_dict())
