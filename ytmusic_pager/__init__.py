"""
ytmusic-pager: Paginated access to YouTube Music's internal API.

YouTube Music's web player talks to private "InnerTube" endpoints that
return one page of results plus an opaque continuation token. This package
wraps that pattern in a reusable cursor so callers can iterate, step
forward/backward, and pull arbitrary ranges out of large result sets.

Architecture:
    pagination/ - Page values and the PaginatedSequence cursor (the core)
    innertube/  - Client contexts, endpoints, aiohttp request handling,
                  and PageFetcher construction from continued responses
    services/   - Search and playlist facades returning PaginatedSequence objects
    core/       - Configuration, logging, exceptions
    utils/      - Small helpers (argument guards, nested JSON lookup)
    client.py   - YouTubeMusicClient tying it together

Usage:
    Pagination only (any page fetcher):
        from ytmusic_pager import Page, PaginatedSequence

        async def fetch_page(token: str | None) -> Page[int]:
            ...

        sequence = PaginatedSequence(fetch_page)
        items = await sequence.fetch_items(offset=25, limit=25)

    Against YouTube Music:
        from ytmusic_pager import YouTubeMusicClient, SearchCategory

        async with YouTubeMusicClient() as client:
            results = client.search.search("query", SearchCategory.ALBUMS)
            async for album in results:
                ...

Configuration:
    Optional config.yaml in the current directory, see core/config.py:

        client:
          type: "web_music"
          hl: "en"
          gl: "US"
        http:
          timeout: 30

Dependencies:
    - aiohttp: Async HTTP client
    - pyyaml: Configuration file parsing
    - tqdm: Progress-bar-safe console logging
"""

__version__ = "0.1.0"
__author__ = "ytmusic-pager"
__license__ = "MIT"

from ytmusic_pager.client import YouTubeMusicClient
from ytmusic_pager.core import (
    Config,
    ConfigError,
    RequestError,
    ResponseParseError,
    YTMusicPagerError,
    default_config,
    get_logger,
    load_config,
    setup_logging,
)
from ytmusic_pager.innertube import ClientContext, ClientType
from ytmusic_pager.pagination import Page, PageFetcher, PaginatedSequence
from ytmusic_pager.services import (
    Playlist,
    PlaylistService,
    SearchCategory,
    SearchScope,
    SearchService,
)

__all__ = [
    # Version
    "__version__",
    # Pagination
    "Page",
    "PageFetcher",
    "PaginatedSequence",
    # Client
    "YouTubeMusicClient",
    "ClientContext",
    "ClientType",
    "Playlist",
    "PlaylistService",
    "SearchCategory",
    "SearchScope",
    "SearchService",
    # Core
    "Config",
    "default_config",
    "load_config",
    "setup_logging",
    "get_logger",
    # Exceptions
    "YTMusicPagerError",
    "ConfigError",
    "RequestError",
    "ResponseParseError",
]
