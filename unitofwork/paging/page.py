from dataclasses import dataclass, field
from math import ceil
from typing import Any, Callable, Generic, Iterable, Iterator, Sequence, TypeVar

from unitofwork.core.exceptions import InvalidPageError

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True, slots=True)
class PagedList(Generic[T]):
    """
    One page of a larger sequence.

    A snapshot: the items are copied into a tuple when the page is built, so
    later changes to the source are not observed.
    """
    page_index: int
    page_size: int
    index_from: int
    total_count: int
    total_pages: int
    items: tuple[T, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))
        if self._is_empty():
            return
        if self.page_size <= 0:
            raise InvalidPageError(f"page_size: {self.page_size}, must be > 0")
        if self.index_from > self.page_index:
            raise InvalidPageError(
                f"index_from: {self.index_from} > page_index: {self.page_index}, must index_from <= page_index"
            )
        if self.total_count < 0:
            raise InvalidPageError(f"total_count: {self.total_count}, must be >= 0")
        if self.total_pages != ceil(self.total_count / self.page_size):
            raise InvalidPageError(
                f"total_pages: {self.total_pages}, must be ceil(total_count / page_size)"
            )
        if len(self.items) > self.page_size:
            raise InvalidPageError(f"items: {len(self.items)} > page_size: {self.page_size}")

    def _is_empty(self) -> bool:
        # la página vacía es la única con page_size == 0
        return not (
            self.page_index or self.page_size or self.index_from
            or self.total_count or self.total_pages or self.items
        )

    @classmethod
    def build(
        cls,
        items: Iterable[T],
        *,
        page_index: int,
        page_size: int,
        index_from: int,
        total_count: int,
    ) -> "PagedList[T]":
        """Create the page once both the count and the slice are known."""
        total_count = int(total_count or 0)
        return cls(
            page_index=page_index,
            page_size=page_size,
            index_from=index_from,
            total_count=total_count,
            total_pages=ceil(total_count / page_size) if page_size else 0,
            items=tuple(items),
        )

    @classmethod
    def empty(cls) -> "PagedList[T]":
        return cls(page_index=0, page_size=0, index_from=0, total_count=0, total_pages=0)

    @property
    def has_previous_page(self) -> bool:
        return self.page_index - self.index_from > 0

    @property
    def has_next_page(self) -> bool:
        return self.page_index - self.index_from + 1 < self.total_pages

    def convert(self, converter: Callable[[Sequence[T]], Iterable[R]]) -> "PagedList[R]":
        """
        Return a page with the same metadata and ``converter(self.items)`` as items.

        The converter is applied once to the whole slice; nothing is re-counted
        or re-fetched.
        """
        return PagedList(
            page_index=self.page_index,
            page_size=self.page_size,
            index_from=self.index_from,
            total_count=self.total_count,
            total_pages=self.total_pages,
            items=tuple(converter(self.items)),
        )

    def map(self, func: Callable[[T], R]) -> "PagedList[R]":
        """Element-wise variant of :meth:`convert`."""
        return self.convert(lambda items: (func(item) for item in items))

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": list(self.items),
            "page_index": self.page_index,
            "page_size": self.page_size,
            "index_from": self.index_from,
            "total_count": self.total_count,
            "total_pages": self.total_pages,
            "has_previous_page": self.has_previous_page,
            "has_next_page": self.has_next_page,
        }

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)


def empty_paged_list() -> PagedList[Any]:
    """Page with no items and zeroed metadata, for when no query was needed."""
    return PagedList.empty()


def convert_paged(
    existing: PagedList[T],
    converter: Callable[[Sequence[T]], Iterable[R]],
) -> PagedList[R]:
    return existing.convert(converter)
