"""
Playlist service for YouTube Music.

Opening a playlist is a single request: the browse response carries the
playlist header and its first page of tracks. That page seeds the
returned PaginatedSequence, so iterating it only costs requests for
page 2 onward.

Playlists are addressed by browse ID ("VL" + playlist ID). Radio
playlists ("RDAM..." IDs) are served by the /next endpoint instead of
/browse and use a different response layout:

    browse   contents.twoColumnBrowseResultsRenderer.secondaryContents
                 .sectionListRenderer.contents[0].musicPlaylistShelfRenderer
             continued: onResponseReceivedActions[0]
                 .appendContinuationItemsAction.continuationItems
    radio    contents.singleColumnMusicWatchNextResultsRenderer.tabbedRenderer
                 .watchNextTabbedResultsRenderer.tabs[0].tabRenderer.content
                 .musicQueueRenderer.content.playlistPanelRenderer
             continued: continuationContents.playlistPanelContinuation

Usage:
    playlist = await client.playlists.get("PLxxxxxxxx")
    print(playlist.browse_id)
    async for track in playlist.items:
        ...
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from ytmusic_pager.core.exceptions import ResponseParseError
from ytmusic_pager.core.logger import get_logger
from ytmusic_pager.innertube.continuation import make_page_fetcher, read_page
from ytmusic_pager.innertube.endpoints import Endpoints
from ytmusic_pager.innertube.request_handler import RequestHandler
from ytmusic_pager.pagination.sequence import PaginatedSequence
from ytmusic_pager.utils import dig, ensure_not_empty

logger = get_logger(__name__)

T = TypeVar("T")

BROWSE_ID_PREFIX = "VL"
RADIO_BROWSE_ID_PREFIX = "VLRDAM"

PLAYLIST_ITEM_KEY = "musicResponsiveListItemRenderer"
RADIO_ITEM_KEY = "playlistPanelVideoRenderer"


@dataclass(frozen=True)
class Playlist(Generic[T]):
    """
    An opened playlist.

    Attributes:
        browse_id: The "VL"-prefixed browse ID.
        is_radio: Whether this is a radio (auto-generated mix) playlist.
        response: The raw first response, for reading header fields.
        items: Tracks, seeded with the first page from `response`.
    """
    browse_id: str
    is_radio: bool
    response: dict[str, Any]
    items: PaginatedSequence[T]

    @property
    def playlist_id(self) -> str:
        return self.browse_id[len(BROWSE_ID_PREFIX):]


def browse_id_for(playlist_id: str) -> str:
    """
    Return the browse ID of a playlist, adding the "VL" prefix if missing.

    Raises:
        ValueError: If playlist_id is empty.
    """
    ensure_not_empty(playlist_id, "playlist_id")
    if playlist_id.startswith(BROWSE_ID_PREFIX):
        return playlist_id
    return BROWSE_ID_PREFIX + playlist_id


def _only(item_key: str, contents: Any) -> list[Any]:
    """Keep track renderers and the trailing continuation entry."""
    return [
        item for item in contents or []
        if isinstance(item, dict) and (item_key in item or "continuationItemRenderer" in item)
    ]


def locate_playlist_shelf(response: dict[str, Any], continued: bool) -> dict[str, Any]:
    """Shelf locator for browse playlist responses (first page and continued)."""
    contents = dig(
        response,
        "contents", "twoColumnBrowseResultsRenderer", "secondaryContents",
        "sectionListRenderer", "contents", 0, "musicPlaylistShelfRenderer", "contents"
    )
    if contents is None:
        contents = dig(
            response,
            "onResponseReceivedActions", 0, "appendContinuationItemsAction", "continuationItems"
        )

    if not isinstance(contents, list):
        raise ResponseParseError(
            "Playlist response has no track list",
            details={"response_keys": sorted(response)}
        )
    return {"contents": _only(PLAYLIST_ITEM_KEY, contents)}


def locate_radio_shelf(response: dict[str, Any], continued: bool) -> dict[str, Any]:
    """Shelf locator for radio playlist responses from the /next endpoint."""
    if continued:
        panel = dig(response, "continuationContents", "playlistPanelContinuation")
    else:
        panel = dig(
            response,
            "contents", "singleColumnMusicWatchNextResultsRenderer", "tabbedRenderer",
            "watchNextTabbedResultsRenderer", "tabs", 0, "tabRenderer", "content",
            "musicQueueRenderer", "content", "playlistPanelRenderer"
        )

    if not isinstance(panel, dict):
        raise ResponseParseError(
            "Radio response has no playlist panel",
            details={"response_keys": sorted(response)}
        )
    return {**panel, "contents": _only(RADIO_ITEM_KEY, panel.get("contents"))}


def _raw_item(item: dict[str, Any]) -> dict[str, Any]:
    return item


class PlaylistService:
    """
    Opens playlists and pages through their tracks.

    Attributes:
        handler: Request handler shared with the owning client.
    """

    def __init__(self, handler: RequestHandler) -> None:
        self.handler = handler

    async def get(
        self,
        playlist_id: str,
        parse_item: Callable[[dict[str, Any]], T] | None = None
    ) -> Playlist[T]:
        """
        Open a playlist and return it with its first page of tracks loaded.

        Args:
            playlist_id: Playlist ID or "VL"-prefixed browse ID.
            parse_item: Converts a track renderer dict into an item.
                        Defaults to returning the renderer dict unchanged.

        Returns:
            The Playlist. Its `items` sequence starts on page 0 and makes
            no request until page 1 is needed.

        Raises:
            ValueError: If playlist_id is empty.
            RequestError: If the request fails.
            ResponseParseError: If the response has no track list.
        """
        browse_id = browse_id_for(playlist_id)
        is_radio = browse_id.startswith(RADIO_BROWSE_ID_PREFIX)
        parse = parse_item or _raw_item

        if is_radio:
            url = Endpoints.NEXT
            locate = locate_radio_shelf
            base_payload = {"playlistId": browse_id[len(BROWSE_ID_PREFIX):]}
            first_payload = base_payload
        else:
            url = Endpoints.BROWSE
            locate = locate_playlist_shelf
            base_payload = {"browseId": browse_id}
            first_payload = {"browseId": browse_id, "playlistId": browse_id[len(BROWSE_ID_PREFIX):]}

        logger.debug(f"Opening {'radio ' if is_radio else ''}playlist: {browse_id}")
        response = await self.handler.post(url, first_payload)
        first_page = read_page(response, locate, parse)

        logger.debug(
            f"Playlist {browse_id}: {len(first_page)} items on first page "
            f"(more: {'yes' if first_page.has_continuation else 'no'})"
        )

        fetch_page = make_page_fetcher(self.handler, url, base_payload, locate, parse)
        return Playlist(
            browse_id=browse_id,
            is_radio=is_radio,
            response=response,
            items=PaginatedSequence(fetch_page, first_page)
        )
