"""
Continuation-token pagination.

    - page: Page value and the PageFetcher callable type
    - sequence: PaginatedSequence cursor (iterate, step, range, reset)

Usage:
    from ytmusic_pager.pagination import Page, PaginatedSequence

    async def fetch_page(token: str | None) -> Page[int]:
        ...

    items = await PaginatedSequence(fetch_page).fetch_items(25, 25)
"""

from ytmusic_pager.pagination.page import Page, PageFetcher
from ytmusic_pager.pagination.sequence import PaginatedSequence

__all__ = [
    "Page",
    "PageFetcher",
    "PaginatedSequence",
]
