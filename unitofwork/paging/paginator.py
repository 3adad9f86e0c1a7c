import asyncio
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar

from unitofwork.core.exceptions import InvalidPageError
from unitofwork.core.logger import logger
from .page import PagedList
from .sources import AsyncPageSource, PageSource, SelectSource, as_page_source

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_INDEX_FROM = 1

Converter = Callable[[Sequence[Any]], Iterable[Any]]


def check_page_args(page_index: int, page_size: int, index_from: int) -> int:
    """
    Validate paging arguments and return the offset of the page.

    Raises:
        InvalidPageError: ``index_from > page_index`` or ``page_size <= 0``.
    """
    if index_from > page_index:
        raise InvalidPageError(
            f"index_from: {index_from} > page_index: {page_index}, must index_from <= page_index"
        )
    if page_size <= 0:
        raise InvalidPageError(f"page_size: {page_size}, must be > 0")
    return (page_index - index_from) * page_size


def paginate(
    source: PageSource[T] | Iterable[T],
    page_index: int,
    page_size: int,
    index_from: int = DEFAULT_INDEX_FROM,
) -> PagedList[T]:
    """
    Cut one page out of ``source``.

    In-memory iterables are counted and sliced in memory. A ``SelectSource``
    pushes both down to the database: one COUNT and one OFFSET/LIMIT query.
    Pages past the end come back with no items, not an error.
    """
    offset = check_page_args(page_index, page_size, index_from)
    src = as_page_source(source)
    if isinstance(src, AsyncPageSource):
        raise TypeError("async sources must be paginated with paginate_async")

    total = src.count()
    items = src.fetch(offset, page_size)
    logger.debug(
        "[Paginator] page=%s size=%s from=%s total=%s fetched=%s",
        page_index, page_size, index_from, total, len(items),
    )
    return PagedList.build(
        items,
        page_index=page_index,
        page_size=page_size,
        index_from=index_from,
        total_count=total,
    )


def paginate_converted(
    source: PageSource[Any] | Iterable[Any],
    converter: Callable[[Sequence[Any]], Iterable[R]],
    page_index: int,
    page_size: int,
    index_from: int = DEFAULT_INDEX_FROM,
) -> PagedList[R]:
    """Like :func:`paginate`, then ``converter`` runs once over the page slice only."""
    return paginate(source, page_index, page_size, index_from).convert(converter)


def _raise_if_cancelled(cancellation: Optional[asyncio.Event], stage: str) -> None:
    if cancellation is not None and cancellation.is_set():
        logger.debug("[Paginator] cancelled before %s", stage)
        raise asyncio.CancelledError(f"pagination cancelled before {stage}")


async def paginate_async(
    source: AsyncPageSource[T] | PageSource[T] | Iterable[T],
    page_index: int,
    page_size: int,
    index_from: int = DEFAULT_INDEX_FROM,
    *,
    converter: Optional[Converter] = None,
    cancellation: Optional[asyncio.Event] = None,
) -> PagedList[Any]:
    """
    Async counterpart of :func:`paginate`.

    Count and fetch are awaited one after the other (an ``AsyncSession`` runs a
    single statement at a time). Without snapshot isolation on the source the
    count may be stale relative to the fetched items under concurrent writes.

    ``cancellation`` is checked before the count, before the fetch and before
    the page is built; once set, ``asyncio.CancelledError`` is raised and no
    page is returned. Errors raised by the source propagate unchanged.

    A sync ``SelectSource`` is rejected: its blocking ``Session`` would run on
    the event loop. Bind the statement to an ``AsyncSession`` with
    ``AsyncSelectSource`` instead.
    """
    offset = check_page_args(page_index, page_size, index_from)
    src = as_page_source(source)
    if isinstance(src, SelectSource):
        raise TypeError("sync Session sources block the event loop: use AsyncSelectSource")

    _raise_if_cancelled(cancellation, "count")
    if isinstance(src, AsyncPageSource):
        total = await src.count()
    else:
        total = src.count()

    _raise_if_cancelled(cancellation, "fetch")
    if isinstance(src, AsyncPageSource):
        items = await src.fetch(offset, page_size)
    else:
        items = src.fetch(offset, page_size)

    _raise_if_cancelled(cancellation, "result")
    logger.debug(
        "[Paginator] async page=%s size=%s from=%s total=%s fetched=%s",
        page_index, page_size, index_from, total, len(items),
    )
    page = PagedList.build(
        items,
        page_index=page_index,
        page_size=page_size,
        index_from=index_from,
        total_count=total,
    )
    return page.convert(converter) if converter is not None else page
