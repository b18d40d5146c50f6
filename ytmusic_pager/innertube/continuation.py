"""
Build PageFetchers on top of InnerTube continuation responses.

Continued InnerTube responses all follow the same outline: the first
request returns a "shelf" somewhere inside `contents`, later requests
(with `continuation` set) return it under `continuationContents` (or,
for browse pages, `onResponseReceivedActions`). Each shelf has a
`contents` list of item renderers and, if more results exist, a
continuation token:

    {
        "contents": [ {...renderer...}, ... ],
        "continuations": [
            {"nextContinuationData": {"continuation": "<token>"}}
        ]
    }

Browse pages append the token as a final `continuationItemRenderer`
entry of `contents` instead.

Where the shelf lives and what an item means differs per endpoint, so both
are supplied by the caller: `locate_shelf` finds the shelf, `parse_item`
converts a renderer into the item type.
"""

from typing import Any, Callable, TypeVar

from ytmusic_pager.core.exceptions import ResponseParseError
from ytmusic_pager.core.logger import get_logger
from ytmusic_pager.innertube.clients import ClientContext
from ytmusic_pager.innertube.request_handler import RequestHandler
from ytmusic_pager.pagination.page import Page, PageFetcher
from ytmusic_pager.utils import dig

logger = get_logger(__name__)

T = TypeVar("T")

ShelfLocator = Callable[[dict[str, Any], bool], dict[str, Any]]
ItemParser = Callable[[dict[str, Any]], T]


CONTINUATION_DATA_KEYS = ("nextContinuationData", "nextRadioContinuationData")


def extract_continuation_token(shelf: dict[str, Any]) -> str | None:
    """
    Read `continuations[0].<data>.continuation` from a shelf.

    `<data>` is nextContinuationData for shelves and
    nextRadioContinuationData for radio queues.

    Returns:
        The token, or None when the shelf is the last one.
    """
    continuations = shelf.get("continuations")
    if not isinstance(continuations, list) or not continuations:
        return None

    first = continuations[0]
    if not isinstance(first, dict):
        return None

    for key in CONTINUATION_DATA_KEYS:
        token = dig(first, key, "continuation")
        if isinstance(token, str) and token:
            return token
    return None


def extract_continuation_item_token(contents: list[Any]) -> str | None:
    """
    Read the token from a trailing `continuationItemRenderer`.

    Browse responses (playlists) put the continuation inside the item
    list instead of a `continuations` array:

        [..., {"continuationItemRenderer": {"continuationEndpoint":
              {"continuationCommand": {"token": "<token>"}}}}]
    """
    token = dig(
        contents, -1,
        "continuationItemRenderer", "continuationEndpoint", "continuationCommand", "token"
    )
    return token if isinstance(token, str) and token else None


def is_continued(response: dict[str, Any]) -> bool:
    """Whether a response answers a continuation request."""
    return "continuationContents" in response


def build_page(
    shelf: dict[str, Any],
    parse_item: ItemParser[T]
) -> Page[T]:
    """
    Turn a located shelf into a Page.

    A trailing `continuationItemRenderer` is not an item; it only carries
    the token when the shelf has no `continuations` array.

    Raises:
        ResponseParseError: If the shelf has no `contents` list.
    """
    contents = shelf.get("contents", [])
    if not isinstance(contents, list):
        raise ResponseParseError(
            "Shelf 'contents' is not a list",
            details={"shelf_keys": sorted(shelf)}
        )

    token = extract_continuation_token(shelf) or extract_continuation_item_token(contents)
    items = [
        parse_item(item) for item in contents
        if not (isinstance(item, dict) and "continuationItemRenderer" in item)
    ]
    return Page(items, token)


def read_page(
    response: dict[str, Any],
    locate_shelf: ShelfLocator,
    parse_item: ItemParser[T]
) -> Page[T]:
    """Locate the shelf in a response and build its Page."""
    return build_page(locate_shelf(response, is_continued(response)), parse_item)


def make_page_fetcher(
    handler: RequestHandler,
    url: str,
    payload: dict[str, Any],
    locate_shelf: ShelfLocator,
    parse_item: ItemParser[T],
    context: ClientContext | None = None
) -> PageFetcher[T]:
    """
    Create a PageFetcher for a continued InnerTube endpoint.

    Args:
        handler: Request handler used for every page.
        url: Endpoint URL (e.g. Endpoints.SEARCH).
        payload: Base request fields. `continuation` is added per page.
        locate_shelf: Called with (response, is_continued) and returns the
                      shelf dict holding `contents` and `continuations`.
        parse_item: Converts one renderer dict into an item.
        context: Client context, defaults to the handler's.

    Returns:
        An async callable suitable for PaginatedSequence.

    Example:
        fetch_page = make_page_fetcher(
            handler,
            Endpoints.BROWSE,
            {"browseId": "FEmusic_liked_videos"},
            locate_liked_shelf,
            parse_song
        )
        sequence = PaginatedSequence(fetch_page)
    """
    base_payload = dict(payload)

    async def fetch_page(continuation_token: str | None) -> Page[T]:
        request_payload = dict(base_payload)
        request_payload["continuation"] = continuation_token

        response = await handler.post(url, request_payload, context)
        page = read_page(response, locate_shelf, parse_item)

        logger.debug(
            f"Parsed {len(page)} items from {url} "
            f"(more: {'yes' if page.has_continuation else 'no'})"
        )
        return page

    return fetch_page
