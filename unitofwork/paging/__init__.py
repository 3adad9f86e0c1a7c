from .page import PagedList, convert_paged, empty_paged_list
from .paginator import (
    DEFAULT_INDEX_FROM,
    check_page_args,
    paginate,
    paginate_async,
    paginate_converted,
)
from .sources import (
    AsyncPageSource,
    AsyncSelectSource,
    PageSource,
    SelectSource,
    SequenceSource,
    as_page_source,
)

__all__ = [
    "PagedList", "convert_paged", "empty_paged_list",
    "DEFAULT_INDEX_FROM", "check_page_args",
    "paginate", "paginate_async", "paginate_converted",
    "PageSource", "AsyncPageSource",
    "SequenceSource", "SelectSource", "AsyncSelectSource",
    "as_page_source",
]
