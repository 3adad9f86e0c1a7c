"""
Tests for the synchronous paginator over in-memory and SELECT sources.
"""

import pytest
from sqlalchemy import select

from unitofwork.core.exceptions import InvalidPageError
from unitofwork.paging import (
    AsyncSelectSource,
    PageSource,
    SelectSource,
    SequenceSource,
    paginate,
    paginate_converted,
)
from host.models import Blog

ELEMENTS = [f"item-{i}" for i in range(25)]


class CountingSource(PageSource[int]):
    def __init__(self, items):
        self.items = list(items)
        self.calls = []

    def count(self):
        self.calls.append("count")
        return len(self.items)

    def fetch(self, offset, limit):
        self.calls.append(("fetch", offset, limit))
        return self.items[offset:offset + limit]


def test_first_page():
    page = paginate(ELEMENTS, page_index=1, page_size=10)

    assert list(page.items) == ELEMENTS[0:10]
    assert page.total_count == 25
    assert page.total_pages == 3
    assert page.has_previous_page is False
    assert page.has_next_page is True


def test_last_partial_page():
    page = paginate(ELEMENTS, page_index=3, page_size=10)

    assert list(page.items) == ELEMENTS[20:25]
    assert page.has_next_page is False
    assert page.has_previous_page is True


def test_page_past_the_end_is_empty_not_an_error():
    page = paginate(ELEMENTS, page_index=4, page_size=10)

    assert page.items == ()
    assert page.total_count == 25
    assert page.total_pages == 3
    assert page.has_next_page is False
    assert page.has_previous_page is True


def test_item_count_matches_remaining_elements():
    for index_from in (0, 1):
        for page_size in (1, 4, 10, 30):
            for page_index in range(index_from, index_from + 8):
                page = paginate(ELEMENTS, page_index, page_size, index_from)
                offset = (page_index - index_from) * page_size
                assert len(page.items) == min(page_size, max(0, 25 - offset))
                assert page.has_previous_page == (page_index - index_from > 0)
                assert page.has_next_page == (page_index - index_from + 1 < page.total_pages)


def test_zero_based_pages():
    page = paginate(ELEMENTS, page_index=0, page_size=10, index_from=0)
    assert list(page.items) == ELEMENTS[0:10]
    assert page.has_previous_page is False


@pytest.mark.parametrize("index_from, page_index", [(2, 1), (1, 0), (5, -3)])
def test_index_from_greater_than_page_index_fails(index_from, page_index):
    with pytest.raises(InvalidPageError) as exc:
        paginate(ELEMENTS, page_index=page_index, page_size=10, index_from=index_from)

    message = str(exc.value)
    assert f"index_from: {index_from}" in message
    assert f"page_index: {page_index}" in message


def test_invalid_page_error_is_a_value_error():
    with pytest.raises(ValueError):
        paginate(ELEMENTS, page_index=1, page_size=10, index_from=2)


@pytest.mark.parametrize("page_size", [0, -1])
def test_page_size_must_be_positive(page_size):
    with pytest.raises(InvalidPageError):
        paginate(ELEMENTS, page_index=1, page_size=page_size)


def test_bounds_checked_before_source_is_evaluated():
    source = CountingSource(range(5))

    with pytest.raises(InvalidPageError):
        paginate(source, page_index=1, page_size=2, index_from=2)

    assert source.calls == []


def test_source_is_counted_once_and_fetched_once():
    source = CountingSource(range(25))

    page = paginate(source, page_index=2, page_size=10)

    assert source.calls == ["count", ("fetch", 10, 10)]
    assert page.items == tuple(range(10, 20))


def test_generator_source_is_realized_once():
    consumed = []

    def numbers():
        for i in range(7):
            consumed.append(i)
            yield i

    page = paginate(numbers(), page_index=2, page_size=3)

    assert page.items == (3, 4, 5)
    assert page.total_count == 7
    assert consumed == list(range(7))


def test_paginating_first_page_again_returns_same_items():
    first = paginate(ELEMENTS, page_index=1, page_size=10)
    again = paginate(first.items, page_index=1, page_size=10)

    assert again.items == first.items


def test_sequence_source_slices_in_memory():
    source = SequenceSource("abcdef")
    assert source.count() == 6
    assert list(source.fetch(4, 10)) == ["e", "f"]


def test_converted_page_converts_only_the_slice():
    seen = []

    def upper(items):
        seen.append(list(items))
        return [s.upper() for s in items]

    page = paginate_converted(ELEMENTS, upper, page_index=2, page_size=10)

    assert seen == [ELEMENTS[10:20]]
    assert list(page.items) == [s.upper() for s in ELEMENTS[10:20]]
    assert page.total_count == 25
    assert page.total_pages == 3
    assert page.page_index == 2
    assert page.index_from == 1


def test_converted_page_uses_same_default_origin():
    plain = paginate(ELEMENTS, 1, 10)
    converted = paginate_converted(ELEMENTS, list, 1, 10)
    assert converted.index_from == plain.index_from == 1


def test_select_source_pushes_count_and_slice_down(sync_session):
    stmt = select(Blog).order_by(Blog.id)

    page = paginate(SelectSource(sync_session, stmt), page_index=3, page_size=10)

    assert page.total_count == 25
    assert page.total_pages == 3
    assert [b.title for b in page.items] == [f"blog-{i:02d}" for i in range(20, 25)]


def test_select_source_count_ignores_order_and_respects_filters(sync_session):
    stmt = select(Blog).where(Blog.title.like("blog-1%")).order_by(Blog.title.desc())
    source = SelectSource(sync_session, stmt)

    assert source.count() == 10
    assert [b.title for b in source.fetch(0, 2)] == ["blog-19", "blog-18"]


def test_bare_select_is_rejected():
    with pytest.raises(TypeError):
        paginate(select(Blog), page_index=1, page_size=10)


def test_async_source_is_rejected_by_sync_paginator():
    source = AsyncSelectSource(None, select(Blog))
    with pytest.raises(TypeError):
        paginate(source, page_index=1, page_size=10)
