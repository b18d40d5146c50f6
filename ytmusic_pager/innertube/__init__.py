"""
InnerTube transport layer.

    - clients: Immutable ClientContext presets (web music, iOS, TV)
    - endpoints: Endpoint URLs
    - request_handler: aiohttp-based JSON request handling
    - continuation: PageFetcher construction from continued responses
"""

from ytmusic_pager.innertube.clients import ClientContext, ClientType
from ytmusic_pager.innertube.continuation import (
    build_page,
    extract_continuation_item_token,
    extract_continuation_token,
    make_page_fetcher,
    read_page,
)
from ytmusic_pager.innertube.endpoints import Endpoints
from ytmusic_pager.innertube.request_handler import RequestHandler

__all__ = [
    "ClientContext",
    "ClientType",
    "Endpoints",
    "RequestHandler",
    "build_page",
    "extract_continuation_item_token",
    "extract_continuation_token",
    "make_page_fetcher",
    "read_page",
]
