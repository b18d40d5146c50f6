"""
YouTube Music client facade.

YouTubeMusicClient ties the pieces together: it turns a Config into an
immutable ClientContext, owns (or borrows) the aiohttp session, and
exposes the services.

Usage:
    from ytmusic_pager import YouTubeMusicClient, SearchCategory, load_config

    async with YouTubeMusicClient(load_config(), configure_logging=True) as client:
        songs = client.search.search("boards of canada", SearchCategory.SONGS)
        async for song in songs:
            print(song)

        playlist = await client.playlists.get("PLxxxxxxxx")

Session Ownership:
    If no session is passed, one is created on __aenter__ and closed on
    __aexit__. A session passed in by the caller is never closed here.

Logging:
    With configure_logging=True the client applies the config's logging
    section on construction and shuts logging down again in close().
    Otherwise logging is left to the embedding application.
"""

import aiohttp

from ytmusic_pager.core.config import Config, default_config, setup_logging_from_config
from ytmusic_pager.core.logger import get_logger, shutdown_logging
from ytmusic_pager.innertube.clients import ClientContext
from ytmusic_pager.innertube.request_handler import RequestHandler
from ytmusic_pager.services.playlists import PlaylistService
from ytmusic_pager.services.search import SearchService

logger = get_logger(__name__)


class YouTubeMusicClient:
    """
    Entry point for talking to YouTube Music.

    Attributes:
        config: The configuration this client was built from.
        context: ClientContext sent with every request.
        search: SearchService (available inside `async with`).
        playlists: PlaylistService (available inside `async with`).
    """

    def __init__(
        self,
        config: Config | None = None,
        session: aiohttp.ClientSession | None = None,
        extra_headers: dict[str, str] | None = None,
        configure_logging: bool = False
    ) -> None:
        """
        Args:
            config: Configuration to use. Defaults to default_config().
            session: Optional externally owned aiohttp session.
            extra_headers: Headers added to every request (e.g. Cookie).
            configure_logging: Apply config.logging (console level and log
                               files) for the lifetime of this client.
        """
        self.config = config or default_config()
        self.context: ClientContext = self.config.client_context()
        self._session = session
        self._owns_session = session is None
        self._extra_headers = extra_headers
        self._search: SearchService | None = None
        self._playlists: PlaylistService | None = None
        self._owns_logging = configure_logging

        if configure_logging:
            setup_logging_from_config(self.config)
            logger.debug(f"Logging configured at {self.config.logging.level}")

        if session is not None:
            self._build_services(session)

    def _build_services(self, session: aiohttp.ClientSession) -> None:
        handler = RequestHandler(
            session,
            self.context,
            timeout=self.config.http.timeout,
            proxy=self.config.http.proxy,
            extra_headers=self._extra_headers
        )
        self._search = SearchService(handler)
        self._playlists = PlaylistService(handler)

    def _require(self, service):
        if service is None:
            raise RuntimeError(
                "YouTubeMusicClient has no session. Use 'async with YouTubeMusicClient()' "
                "or pass an aiohttp.ClientSession."
            )
        return service

    @property
    def search(self) -> SearchService:
        """
        The search service.

        Raises:
            RuntimeError: If used before entering the client context
                          (and no session was supplied).
        """
        return self._require(self._search)

    @property
    def playlists(self) -> PlaylistService:
        """The playlist service. Same availability as `search`."""
        return self._require(self._playlists)

    async def __aenter__(self) -> "YouTubeMusicClient":
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._build_services(self._session)
            logger.debug(f"Opened HTTP session as {self.context.client_name}")
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the session if this client created it. Safe to call twice."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
            self._search = None
            self._playlists = None
            logger.debug("Closed HTTP session")

        if self._owns_logging:
            self._owns_logging = False
            shutdown_logging()
