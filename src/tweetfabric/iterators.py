# tweetfabric/iterators.py
"""Cursor-driven pagination over Twitter endpoints.

`TwitterPageIterator` owns the pagination state machine and is shared by every
paged endpoint; endpoints differ only in the three callables they hand it (how
to fetch a page for a cursor, how to read the next cursor, how to recognise the
last page). `TwitterIteratorProxy` projects the raw pages of any `PagedSource`
into domain objects without touching the cursor.

An iterator is Fresh until its first fetch, Active while the server keeps
returning continuations, and Exhausted once it signals the end. Exhausted
iterators return empty pages without issuing requests. Iterators are
single-pass and not synchronized: share one between tasks only with external
locking, or open a new one from the same parameters.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from .log_config import logger

ResultT = TypeVar("ResultT")
TransformedT = TypeVar("TransformedT")
CursorT = TypeVar("CursorT")

ResultT_co = TypeVar("ResultT_co", covariant=True)
CursorT_co = TypeVar("CursorT_co", covariant=True)


class TwitterIteratorPage(Generic[ResultT, CursorT]):
    """One page produced by an iterator.

    Attributes:
        content: The page result, or None for an empty page.
        next_cursor: The cursor that the following fetch will send.
        is_last_page: True when the server signalled end-of-stream with this page.
    """

    __slots__ = ("content", "next_cursor", "is_last_page")

    def __init__(
        self,
        content: ResultT | None,
        next_cursor: CursorT | None = None,
        is_last_page: bool = False,
    ):
        self.content = content
        self.next_cursor = next_cursor
        self.is_last_page = is_last_page

    @classmethod
    def empty(cls) -> "TwitterIteratorPage[Any, Any]":
        return cls(content=None, next_cursor=None, is_last_page=True)

    @property
    def is_empty(self) -> bool:
        return self.content is None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(content={self.content!r}, "
            f"next_cursor={self.next_cursor!r}, is_last_page={self.is_last_page})"
        )


@runtime_checkable
class PagedSource(Protocol[ResultT_co, CursorT_co]):
    """Anything that can be pulled page by page until exhausted."""

    @property
    def has_more(self) -> bool: ...

    @property
    def completed(self) -> bool: ...

    @property
    def next_cursor(self) -> CursorT_co | None: ...

    async def move_next(self) -> TwitterIteratorPage[Any, Any]: ...


class _PageIteration(ABC, Generic[ResultT, CursorT]):
    """`async for` support shared by iterators and proxies."""

    @property
    @abstractmethod
    def completed(self) -> bool: ...

    @property
    def has_more(self) -> bool:
        return not self.completed

    @abstractmethod
    async def move_next(self) -> TwitterIteratorPage[ResultT, CursorT]: ...

    async def __aiter__(self) -> AsyncIterator[TwitterIteratorPage[ResultT, CursorT]]:
        while self.has_more:
            page = await self.move_next()
            if not page.is_empty:
                yield page

    async def collect(self) -> list[ResultT]:
        """Pull every remaining page and return their contents in order."""
        return [page.content async for page in self if page.content is not None]


class TwitterPageIterator(_PageIteration[ResultT, CursorT]):
    """Generic cursor iterator over a paged remote resource.

    Args:
        initial_cursor: Cursor sent with the first request; the caller's
            starting point, or None to start from the beginning.
        get_next_page: Coroutine function fetching the page for a cursor.
        get_next_cursor: Reads the continuation from a fetched page.
        is_completed: Tells whether a fetched page is the last one.
    """

    def __init__(
        self,
        initial_cursor: CursorT | None,
        get_next_page: Callable[[CursorT | None], Awaitable[ResultT]],
        get_next_cursor: Callable[[ResultT], CursorT | None],
        is_completed: Callable[[ResultT], bool],
    ):
        self._next_cursor: CursorT | None = initial_cursor
        self._get_next_page = get_next_page
        self._get_next_cursor = get_next_cursor
        self._is_completed = is_completed
        self._completed = False
        self._pages_fetched = 0

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def next_cursor(self) -> CursorT | None:
        return self._next_cursor

    @property
    def pages_fetched(self) -> int:
        return self._pages_fetched

    async def move_next(self) -> TwitterIteratorPage[ResultT, CursorT]:
        """Fetch the next page.

        Returns:
            The fetched page, or an empty page if the iterator is exhausted.

        Raises:
            Whatever `get_next_page` raises. The cursor and the completed flag
            are left untouched, so the same call can be retried.
        """
        if self._completed:
            logger.debug("Iterator already completed, returning an empty page.")
            return TwitterIteratorPage.empty()

        result = await self._get_next_page(self._next_cursor)

        next_cursor = self._get_next_cursor(result)
        completed = self._is_completed(result)

        self._next_cursor = next_cursor
        self._completed = completed
        self._pages_fetched += 1
        logger.debug(
            f"Fetched page {self._pages_fetched}, next cursor: {next_cursor}, "
            f"completed: {completed}"
        )
        return TwitterIteratorPage(
            content=result, next_cursor=next_cursor, is_last_page=completed
        )


class TwitterIteratorProxy(_PageIteration[TransformedT, CursorT]):
    """Maps every page of a `PagedSource` through a pure transform.

    The transform receives the raw page content and must neither issue
    requests nor touch the source's cursor. Empty pages are passed through
    without calling it.
    """

    def __init__(
        self,
        source: PagedSource[Any, CursorT],
        transform: Callable[[Any], TransformedT],
    ):
        self._source = source
        self._transform = transform

    @property
    def source(self) -> PagedSource[Any, CursorT]:
        return self._source

    @property
    def completed(self) -> bool:
        return self._source.completed

    @property
    def has_more(self) -> bool:
        return self._source.has_more

    @property
    def next_cursor(self) -> CursorT | None:
        return self._source.next_cursor

    async def move_next(self) -> TwitterIteratorPage[TransformedT, CursorT]:
        page = await self._source.move_next()
        if page.is_empty:
            return TwitterIteratorPage.empty()
        return TwitterIteratorPage(
            content=self._transform(page.content),
            next_cursor=page.next_cursor,
            is_last_page=page.is_last_page,
        )
