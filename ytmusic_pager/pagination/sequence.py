"""
Paginated sequence over a continuation-token API.

YouTube Music only ever answers "give me the page after token X". This
module turns such a page fetcher into a cursor that can:

    - iterate every item lazily (`async for item in sequence`)
    - step forward and backward one page at a time
    - extract an absolute range of items (`fetch_items(offset, limit)`)
    - reset and start over

State:
    The cursor is described by (current index, pending next token, stack of
    visited tokens). The stack holds the token used to reach every page up
    to the current one, with None for page 0, so its length is always
    current_index + 1 once a page has been fetched. Stepping back re-fetches
    the previous page from its stored token: visited pages are not cached,
    keeping memory bounded on long traversals.

Failure Semantics:
    Any exception raised by the fetcher (RequestError, asyncio.CancelledError,
    ...) propagates unchanged. State is only touched after the awaited fetch
    returns, so a failed call leaves the sequence exactly as it was and can
    simply be retried.

Concurrency:
    A PaginatedSequence is a per-traversal cursor owned by one task. It has
    no locking; driving the same instance from several tasks at once is
    unsupported. Separate instances share nothing.

Usage:
    sequence = PaginatedSequence(fetch_page)

    async for song in sequence:
        print(song)

    first_fifty = await sequence.fetch_items(0, 50)
"""

from typing import AsyncIterator, Generic, Sequence, TypeVar

from ytmusic_pager.core.logger import get_logger
from ytmusic_pager.pagination.page import Page, PageFetcher

logger = get_logger(__name__)

T = TypeVar("T")


class PaginatedSequence(Generic[T]):
    """
    Bidirectionally navigable, lazily fetched view over a paged API.

    Attributes:
        current_page: Items of the current page, or None before any fetch.
        current_index: Index of the current page, -1 before any fetch.
        has_more: Whether fetch_next_page() would fetch something.
        has_previous: Whether fetch_previous_page() would fetch something.

    Example:
        sequence = PaginatedSequence(fetch_page, first_page=already_fetched)

        await sequence.fetch_next_page()       # page 1 (page 0 was seeded)
        await sequence.fetch_previous_page()   # back to page 0, re-fetched
        sequence.reset()                       # fresh again, no request
    """

    def __init__(
        self,
        fetch_page: PageFetcher[T],
        first_page: Page[T] | None = None
    ) -> None:
        """
        Args:
            fetch_page: Async callable returning the page after a token
                        (None for the first page).
            first_page: Optional already-fetched first page. The sequence
                        starts positioned on it, so iterating does not
                        request page 0 again.
        """
        self._fetch_page = fetch_page
        self._visited_tokens: list[str | None] = []
        self._next_token: str | None = None
        self._current_page: Sequence[T] | None = None
        self._current_index = -1

        if first_page is not None:
            self._visited_tokens.append(None)
            self._next_token = first_page.continuation_token
            self._current_page = first_page.items
            self._current_index = 0

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(current_index={self._current_index}, "
            f"has_more={self.has_more}, has_previous={self.has_previous})"
        )

    # =========================================================================
    # Cursor State
    # =========================================================================

    @property
    def current_page(self) -> Sequence[T] | None:
        """Items of the current page, or None if no page has been fetched."""
        return self._current_page

    @property
    def current_index(self) -> int:
        """Index of the current page; -1 while fresh."""
        return self._current_index

    @property
    def has_more(self) -> bool:
        """
        Whether there is a next page to fetch.

        Always True while fresh: page 0 has not been attempted yet.
        """
        return self._current_index == -1 or self._next_token is not None

    @property
    def has_previous(self) -> bool:
        """Whether there is a page before the current one."""
        return self._current_index > 0

    # =========================================================================
    # Navigation
    # =========================================================================

    async def fetch_next_page(self) -> bool:
        """
        Fetch the page after the current one and make it current.

        Returns:
            True if a page was fetched, False if the sequence is exhausted.
            Exhaustion is a normal end-of-data signal, not an error, and
            does not call the fetcher.

        Raises:
            Whatever the page fetcher raises; state is left unchanged.
        """
        if not self.has_more:
            return False

        token = self._next_token
        logger.debug(f"Fetching page {self._current_index + 1} (token: {token or 'N/A'})")
        page = await self._fetch_page(token)

        self._visited_tokens.append(token)
        self._next_token = page.continuation_token
        self._current_page = page.items
        self._current_index += 1

        return True

    async def fetch_previous_page(self) -> bool:
        """
        Re-fetch the page before the current one and make it current.

        The previous page is requested again with the token stored when it
        was first reached.

        Returns:
            True if a page was fetched, False if already on the first page
            (or nothing has been fetched yet).

        Raises:
            Whatever the page fetcher raises; state is left unchanged.
        """
        if not self.has_previous:
            return False

        token = self._visited_tokens[-2]
        logger.debug(f"Re-fetching page {self._current_index - 1} (token: {token or 'N/A'})")
        page = await self._fetch_page(token)

        self._visited_tokens.pop()
        self._next_token = page.continuation_token
        self._current_page = page.items
        self._current_index -= 1

        return True

    def reset(self) -> None:
        """Return to the fresh, never-fetched state. Performs no request."""
        self._visited_tokens.clear()
        self._next_token = None
        self._current_page = None
        self._current_index = -1

    # =========================================================================
    # Bulk Operations
    # =========================================================================

    def _is_on_first_page(self) -> bool:
        return self._current_index == 0 and self._current_page is not None

    async def fetch_items(self, offset: int = 0, limit: int | None = None) -> list[T]:
        """
        Fetch the items in an absolute range of the whole sequence.

        Walks pages from the start, discarding the first `offset` items and
        collecting up to `limit` items. No page beyond the one completing the
        limit is requested.

        Args:
            offset: Number of items to skip. Skipped pages are still fetched.
            limit: Maximum number of items to return. None fetches every
                   remaining item, which may run for a long time on large
                   result sets; wrap the call in asyncio.timeout() if needed.

        Returns:
            Items in provider order, at most `limit` of them.

        Raises:
            ValueError: If offset or limit is negative.
            Whatever the page fetcher raises.

        Behavior:
            1. limit == 0 returns [] without touching the cursor
            2. If positioned on page 0, consume it without re-fetching;
               otherwise reset
            3. fetch_next_page() until the limit is met or pages run out
        """
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        result: list[T] = []
        if limit == 0:
            return result

        skipped = 0

        def consume(items: Sequence[T]) -> bool:
            """Take items from a page; True once the limit is reached."""
            nonlocal skipped
            for item in items:
                if skipped < offset:
                    skipped += 1
                    continue

                result.append(item)
                if limit is not None and len(result) >= limit:
                    return True

            return False

        if not self._is_on_first_page():
            self.reset()
        elif consume(self._current_page):
            return result

        while await self.fetch_next_page():
            if consume(self._current_page):
                break

        logger.debug(f"Fetched {len(result)} items (offset: {offset}, limit: {limit})")
        return result

    async def __aiter__(self) -> AsyncIterator[T]:
        """
        Iterate every item lazily, in provider order.

        Starts from the seeded/current page 0 when positioned there,
        otherwise resets first. Suspends only while a page is fetched.
        """
        if not self._is_on_first_page():
            self.reset()
        else:
            for item in self._current_page:
                yield item

        while await self.fetch_next_page():
            for item in self._current_page:
                yield item
