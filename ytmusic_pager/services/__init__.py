"""
Service facades built on the pagination core.

    - search: Category searches (songs, videos, albums, ...)
    - playlists: Playlist tracks, seeded with the first browse page
"""

from ytmusic_pager.services.playlists import (
    Playlist,
    PlaylistService,
    browse_id_for,
    locate_playlist_shelf,
    locate_radio_shelf,
)
from ytmusic_pager.services.search import (
    SearchCategory,
    SearchScope,
    SearchService,
    locate_search_shelf,
    search_params,
)

__all__ = [
    "Playlist",
    "PlaylistService",
    "SearchCategory",
    "SearchScope",
    "SearchService",
    "browse_id_for",
    "locate_playlist_shelf",
    "locate_radio_shelf",
    "locate_search_shelf",
    "search_params",
]
