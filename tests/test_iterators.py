"""Tests for the cursor iterator and its transform proxy."""

from unittest.mock import AsyncMock

import pytest

from tweetfabric.exceptions import NetworkError
from tweetfabric.iterators import (
    PagedSource,
    TwitterIteratorPage,
    TwitterIteratorProxy,
    TwitterPageIterator,
    _PageIteration,
)

# Pages of a fake cursored endpoint: cursor -> (items, next cursor)
PAGES = {
    None: ([1, 2], "c1"),
    "c1": ([3, 4], "c2"),
    "c2": ([5], None),
}


def make_iterator(pages=PAGES, initial_cursor=None):
    fetch = AsyncMock(side_effect=lambda cursor: pages[cursor])
    iterator = TwitterPageIterator(
        initial_cursor,
        fetch,
        get_next_cursor=lambda page: page[1],
        is_completed=lambda page: page[1] is None,
    )
    return iterator, fetch


def test_empty_page():
    page = TwitterIteratorPage.empty()
    assert page.is_empty
    assert page.is_last_page
    assert page.next_cursor is None


def test_iterator_satisfies_paged_source():
    iterator, _ = make_iterator()
    assert isinstance(iterator, PagedSource)
    assert isinstance(TwitterIteratorProxy(iterator, lambda page: page), PagedSource)


def test_page_iteration_base_is_abstract():
    with pytest.raises(TypeError):
        _PageIteration()


def test_fresh_iterator_has_more():
    iterator, fetch = make_iterator()
    assert iterator.has_more
    assert not iterator.completed
    assert iterator.pages_fetched == 0
    fetch.assert_not_awaited()


@pytest.mark.asyncio
async def test_move_next_walks_cursors_until_exhausted():
    iterator, fetch = make_iterator()

    first = await iterator.move_next()
    assert first.content == ([1, 2], "c1")
    assert first.next_cursor == "c1"
    assert not first.is_last_page
    assert iterator.has_more

    await iterator.move_next()
    last = await iterator.move_next()
    assert last.is_last_page
    assert last.next_cursor is None
    assert not iterator.has_more
    assert iterator.completed

    assert [call.args[0] for call in fetch.await_args_list] == [None, "c1", "c2"]
    assert iterator.pages_fetched == 3


@pytest.mark.asyncio
async def test_exhausted_iterator_returns_empty_page_without_fetching():
    iterator, fetch = make_iterator({None: ([1], None)})

    await iterator.move_next()
    assert not iterator.has_more
    assert fetch.await_count == 1

    page = await iterator.move_next()
    assert page.is_empty
    assert page.is_last_page
    assert fetch.await_count == 1


@pytest.mark.asyncio
async def test_initial_cursor_is_sent_first():
    iterator, fetch = make_iterator(initial_cursor="c1")
    assert iterator.next_cursor == "c1"

    await iterator.move_next()
    fetch.assert_awaited_once_with("c1")


@pytest.mark.asyncio
async def test_failed_fetch_leaves_state_unchanged():
    fetch = AsyncMock(side_effect=[(["a"], "c1"), NetworkError("boom"), (["b"], None)])
    iterator = TwitterPageIterator(
        None, fetch, lambda page: page[1], lambda page: page[1] is None
    )
    await iterator.move_next()

    with pytest.raises(NetworkError):
        await iterator.move_next()

    assert iterator.next_cursor == "c1"
    assert iterator.has_more
    assert iterator.pages_fetched == 1

    page = await iterator.move_next()
    assert page.content == (["b"], None)
    assert fetch.await_args_list[-1].args[0] == "c1"
    assert not iterator.has_more


@pytest.mark.asyncio
async def test_async_for_yields_every_page():
    iterator, _ = make_iterator()
    contents = [page.content[0] async for page in iterator]
    assert contents == [[1, 2], [3, 4], [5]]


@pytest.mark.asyncio
async def test_collect_returns_remaining_contents():
    iterator, _ = make_iterator()
    await iterator.move_next()
    assert await iterator.collect() == [([3, 4], "c2"), ([5], None)]


@pytest.mark.asyncio
async def test_independent_iterators_do_not_share_state():
    first, _ = make_iterator()
    second, _ = make_iterator()

    await first.move_next()
    await first.move_next()

    assert second.next_cursor is None
    page = await second.move_next()
    assert page.content == ([1, 2], "c1")


@pytest.mark.asyncio
async def test_proxy_maps_pages_in_order():
    iterator, fetch = make_iterator()
    proxy = TwitterIteratorProxy(iterator, lambda page: [item * 10 for item in page[0]])

    transitions = []
    contents = []
    while proxy.has_more:
        page = await proxy.move_next()
        contents.append(page.content)
        transitions.append((proxy.has_more, iterator.has_more))

    assert contents == [[10, 20], [30, 40], [50]]
    assert transitions == [(True, True), (True, True), (False, False)]
    assert fetch.await_count == 3


@pytest.mark.asyncio
async def test_proxy_delegates_cursor_and_completion():
    iterator, _ = make_iterator()
    proxy = TwitterIteratorProxy(iterator, lambda page: page[0])

    assert proxy.source is iterator
    page = await proxy.move_next()

    assert page.next_cursor == "c1" == proxy.next_cursor
    assert not page.is_last_page
    assert proxy.completed is iterator.completed is False


@pytest.mark.asyncio
async def test_proxy_passes_empty_pages_through_without_transform():
    iterator, fetch = make_iterator({None: ([1], None)})
    seen = []

    def transform(page):
        seen.append(page)
        return page[0]

    proxy = TwitterIteratorProxy(iterator, transform)
    await proxy.move_next()
    page = await proxy.move_next()

    assert page.is_empty
    assert len(seen) == 1
    assert fetch.await_count == 1


@pytest.mark.asyncio
async def test_proxy_over_stub_source():
    class StubSource:
        def __init__(self, pages):
            self._pages = list(pages)

        @property
        def completed(self):
            return not self._pages

        @property
        def has_more(self):
            return not self.completed

        @property
        def next_cursor(self):
            return len(self._pages) or None

        async def move_next(self):
            if not self._pages:
                return TwitterIteratorPage.empty()
            content = self._pages.pop(0)
            return TwitterIteratorPage(content, self.next_cursor, self.completed)

    raw_pages = [["a", "b"], ["c"], ["d", "e", "f"]]
    proxy = TwitterIteratorProxy(StubSource(raw_pages), lambda page: [s.upper() for s in page])

    assert await proxy.collect() == [["A", "B"], ["C"], ["D", "E", "F"]]
    assert not proxy.has_more
