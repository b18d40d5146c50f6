"""
Page values and the page fetcher contract.

A Page is the result of exactly one round trip: an ordered batch of items
plus the continuation token that addresses the next batch. YouTube Music
offers no random access; the token is the only way to reach the next page.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Sequence, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """
    Immutable result of a single page fetch.

    Attributes:
        items: Items in provider order (display/playback order).
        continuation_token: Token to fetch the next page, or None if this
                            is the last page. A present token may still lead
                            to an empty page.

    Example:
        page = Page(items=["a", "b"], continuation_token="CAoQAA")
        page.items              # ("a", "b")
        page.has_continuation   # True
    """

    items: Sequence[T]
    continuation_token: str | None = None

    def __post_init__(self) -> None:
        # Copy into a tuple so mutating the caller's list can't change the page
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def has_continuation(self) -> bool:
        """Whether a further page can be requested after this one."""
        return self.continuation_token is not None

    def __len__(self) -> int:
        return len(self.items)


# Async callable performing one network round trip.
#
# Called with None for the first page, or with the continuation token of a
# previous page for the page after it. Calling it twice with the same token
# should yield an equivalent page. Cancellation is asyncio's: cancelling the
# awaiting task raises asyncio.CancelledError from inside the fetch.
PageFetcher = Callable[[str | None], Awaitable[Page[T]]]
