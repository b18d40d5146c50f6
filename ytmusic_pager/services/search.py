"""
Search service for YouTube Music.

Every search category (songs, videos, albums...) is a separate filtered
search on the /search endpoint. The first response nests the results
inside a tabbed layout with one shelf per category; continuation responses
return the shelf directly under `continuationContents.musicShelfContinuation`.

Results are returned as a PaginatedSequence, so callers decide how much
to fetch:

    results = client.search.search("daft punk", SearchCategory.SONGS)
    top_ten = await results.fetch_items(0, 10)

Items are raw renderer dicts unless a `parse_item` callable is supplied;
converting renderers into song/album objects is left to the caller.
"""

from enum import Enum
from typing import Any, Callable, TypeVar

from ytmusic_pager.core.exceptions import ResponseParseError
from ytmusic_pager.core.logger import get_logger
from ytmusic_pager.innertube.continuation import make_page_fetcher
from ytmusic_pager.innertube.endpoints import Endpoints
from ytmusic_pager.innertube.request_handler import RequestHandler
from ytmusic_pager.pagination.page import Page
from ytmusic_pager.pagination.sequence import PaginatedSequence
from ytmusic_pager.utils import dig, ensure_not_empty

logger = get_logger(__name__)

T = TypeVar("T")


# `params` is <prefix><filter code><suffix>. Playlist categories use their
# own prefix and suffixes; library searches ignore the spelling flag.
FILTERED_PREFIX = "EgWKAQ"
PLAYLIST_PREFIX = "EgeKAQQoA"

GLOBAL_SUFFIX = "AWoMEA4QChADEAQQCRAF"
GLOBAL_SUFFIX_IGNORE_SPELLING = "AUICCAFqDBAOEAoQAxAEEAkQBQ%3D%3D"
PLAYLIST_SUFFIX = "BagwQDhAKEAMQBBAJEAU%3D"
PLAYLIST_SUFFIX_IGNORE_SPELLING = "BQgIIAWoMEA4QChADEAQQCRAF"
LIBRARY_SUFFIX = "AWoKEAUQCRADEAoYBA%3D%3D"


class SearchScope(Enum):
    """Where to search: all of YouTube Music, or the signed-in user's library."""

    GLOBAL = "global"
    LIBRARY = "library"


class SearchCategory(Enum):
    """
    Search filters.

    Each value is (filter_code, shelf_title): the filter part of the
    `params` string, and the title of the shelf holding that category's
    results.
    """

    SONGS = ("II", "Songs")
    VIDEOS = ("IQ", "Videos")
    ALBUMS = ("IY", "Albums")
    ARTISTS = ("Ig", "Artists")
    COMMUNITY_PLAYLISTS = ("EA", "Community playlists")
    FEATURED_PLAYLISTS = ("Dg", "Featured playlists")
    PODCASTS = ("JQ", "Podcasts")
    EPISODES = ("JI", "Episodes")
    PROFILES = ("JY", "Profiles")

    @property
    def filter_code(self) -> str:
        return self.value[0]

    @property
    def shelf_title(self) -> str:
        return self.value[1]

    @property
    def is_playlist(self) -> bool:
        return self in (SearchCategory.COMMUNITY_PLAYLISTS, SearchCategory.FEATURED_PLAYLISTS)


def search_params(
    category: SearchCategory,
    scope: SearchScope = SearchScope.GLOBAL,
    ignore_spelling: bool = True
) -> str:
    """
    Build the opaque `params` filter string for a category search.

    Args:
        category: Which category to search.
        scope: Global or library search.
        ignore_spelling: Search the query as typed instead of the
                         spelling-corrected suggestion. Global scope only.

    Raises:
        ValueError: If a playlist category is combined with library scope.
    """
    if scope is SearchScope.LIBRARY:
        if category.is_playlist:
            raise ValueError(
                f"Category '{category.shelf_title}' is not supported for library searches"
            )
        return FILTERED_PREFIX + category.filter_code + LIBRARY_SUFFIX

    if category.is_playlist:
        suffix = PLAYLIST_SUFFIX_IGNORE_SPELLING if ignore_spelling else PLAYLIST_SUFFIX
        return PLAYLIST_PREFIX + category.filter_code + suffix

    suffix = GLOBAL_SUFFIX_IGNORE_SPELLING if ignore_spelling else GLOBAL_SUFFIX
    return FILTERED_PREFIX + category.filter_code + suffix


def _raw_item(item: dict[str, Any]) -> dict[str, Any]:
    return item


def locate_search_shelf(shelf_title: str) -> Callable[[dict[str, Any], bool], dict[str, Any]]:
    """
    Build a shelf locator for one search category.

    Args:
        shelf_title: Title of the shelf to pick from the first response.

    Returns:
        A locator for make_page_fetcher(). It raises ResponseParseError if
        the shelf cannot be found.
    """

    def locate(response: dict[str, Any], continued: bool) -> dict[str, Any]:
        if continued:
            shelf = dig(response, "continuationContents", "musicShelfContinuation")
            if not isinstance(shelf, dict):
                raise ResponseParseError(
                    "Continuation response has no 'musicShelfContinuation'",
                    details={"shelf_title": shelf_title}
                )
            return shelf

        sections = dig(
            response,
            "contents", "tabbedSearchResultsRenderer", "tabs", 0,
            "tabRenderer", "content", "sectionListRenderer", "contents"
        )
        for section in sections or []:
            shelf = dig(section, "musicShelfRenderer")
            if isinstance(shelf, dict) and dig(shelf, "title", "runs", 0, "text") == shelf_title:
                return shelf

        raise ResponseParseError(
            f"Shelf '{shelf_title}' not found in search response",
            details={"shelf_title": shelf_title}
        )

    return locate


class SearchService:
    """
    Category searches returning paginated results.

    Attributes:
        handler: Request handler shared with the owning client.
    """

    def __init__(self, handler: RequestHandler) -> None:
        self.handler = handler

    def search(
        self,
        query: str,
        category: SearchCategory,
        scope: SearchScope = SearchScope.GLOBAL,
        ignore_spelling: bool = True,
        parse_item: Callable[[dict[str, Any]], T] | None = None,
        first_page: Page[T] | None = None
    ) -> PaginatedSequence[T]:
        """
        Search one category on YouTube Music.

        No request is made until the returned sequence is consumed.

        Args:
            query: The text to search for.
            category: Which category to search.
            scope: Search everything (default) or only the user's library.
            ignore_spelling: Keep the query as typed (default) instead of
                             searching YouTube's spelling correction.
            parse_item: Converts a result renderer dict into an item.
                        Defaults to returning the renderer dict unchanged.
            first_page: An already-fetched first page to seed the sequence with.

        Returns:
            A PaginatedSequence over the search results.

        Raises:
            ValueError: If query is empty, or a playlist category is
                        requested with library scope.
        """
        ensure_not_empty(query, "query")
        params = search_params(category, scope, ignore_spelling)
        logger.debug(f"Creating {scope.value} {category.shelf_title} search for: {query}")

        fetch_page = make_page_fetcher(
            self.handler,
            Endpoints.SEARCH,
            {"query": query, "params": params},
            locate_search_shelf(category.shelf_title),
            parse_item or _raw_item,
        )
        return PaginatedSequence(fetch_page, first_page)
