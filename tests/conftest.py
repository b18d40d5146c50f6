"""Test configuration and fixtures"""

import asyncio
import tempfile
from pathlib import Path

import pytest

from ytmusic_pager.pagination import Page

PAGE_SIZE = 10
BACKING_ITEMS = list(range(1, 101))


class RecordingFetcher:
    """
    Fake page fetcher over a fixed list of integers.

    Tokens are the string offset of the next page ("10", "20", ...);
    the last page returns no token. Every call is recorded in `calls`.
    """

    def __init__(self, items: list[int] | None = None, page_size: int = PAGE_SIZE):
        self.items = BACKING_ITEMS if items is None else items
        self.page_size = page_size
        self.calls: list[str | None] = []
        self.fail_on: set[str | None] = set()

    async def __call__(self, continuation_token: str | None) -> Page[int]:
        self.calls.append(continuation_token)
        await asyncio.sleep(0)

        if continuation_token in self.fail_on:
            raise ConnectionError(f"fetch failed for token {continuation_token!r}")

        offset = 0 if continuation_token is None else int(continuation_token)
        end = offset + self.page_size
        next_token = None if end >= len(self.items) else str(end)

        return Page(self.items[offset:end], next_token)


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def fetcher():
    """Fetcher over integers 1..100 in pages of 10"""
    return RecordingFetcher()


@pytest.fixture
def seeded_first_page():
    """Already-fetched first page of the 1..100 backing data"""
    return Page(BACKING_ITEMS[:PAGE_SIZE], str(PAGE_SIZE))


@pytest.fixture
def search_response():
    """First-page search response with a Songs and a Videos shelf"""
    return {
        "contents": {
            "tabbedSearchResultsRenderer": {
                "tabs": [{
                    "tabRenderer": {
                        "content": {
                            "sectionListRenderer": {
                                "contents": [
                                    {"itemSectionRenderer": {"contents": []}},
                                    {
                                        "musicShelfRenderer": {
                                            "title": {"runs": [{"text": "Songs"}]},
                                            "contents": [
                                                {"musicResponsiveListItemRenderer": {"id": "song-1"}},
                                                {"musicResponsiveListItemRenderer": {"id": "song-2"}},
                                            ],
                                            "continuations": [
                                                {"nextContinuationData": {"continuation": "CTOKEN-2"}}
                                            ],
                                        }
                                    },
                                    {
                                        "musicShelfRenderer": {
                                            "title": {"runs": [{"text": "Videos"}]},
                                            "contents": [
                                                {"musicResponsiveListItemRenderer": {"id": "video-1"}},
                                            ],
                                        }
                                    },
                                ]
                            }
                        }
                    }
                }]
            }
        }
    }


@pytest.fixture
def continuation_response():
    """Continued search response carrying the last page"""
    return {
        "continuationContents": {
            "musicShelfContinuation": {
                "contents": [
                    {"musicResponsiveListItemRenderer": {"id": "song-3"}},
                ],
            }
        }
    }


def continuation_item(token: str) -> dict:
    """Trailing browse entry carrying the next page token"""
    return {"continuationItemRenderer": {"continuationEndpoint": {
        "continuationCommand": {"token": token}
    }}}


@pytest.fixture
def playlist_response():
    """First browse response of a playlist: header plus tracks 1-2"""
    return {
        "header": {"musicResponsiveHeaderRenderer": {"title": {"runs": [{"text": "Mix"}]}}},
        "contents": {
            "twoColumnBrowseResultsRenderer": {
                "secondaryContents": {
                    "sectionListRenderer": {
                        "contents": [{
                            "musicPlaylistShelfRenderer": {
                                "contents": [
                                    {"musicResponsiveListItemRenderer": {"id": "track-1"}},
                                    {"musicResponsiveListItemRenderer": {"id": "track-2"}},
                                    continuation_item("PTOKEN-2"),
                                ]
                            }
                        }]
                    }
                }
            }
        }
    }


@pytest.fixture
def playlist_continuation_responses():
    """Browse continuations carrying tracks 3-4 and then track 5"""
    return [
        {"onResponseReceivedActions": [{"appendContinuationItemsAction": {"continuationItems": [
            {"musicResponsiveListItemRenderer": {"id": "track-3"}},
            {"musicResponsiveListItemRenderer": {"id": "track-4"}},
            continuation_item("PTOKEN-3"),
        ]}}]},
        {"onResponseReceivedActions": [{"appendContinuationItemsAction": {"continuationItems": [
            {"musicResponsiveListItemRenderer": {"id": "track-5"}},
        ]}}]},
    ]


@pytest.fixture
def radio_responses():
    """Radio /next responses: first queue page, then the last continuation"""
    first = {
        "contents": {
            "singleColumnMusicWatchNextResultsRenderer": {
                "tabbedRenderer": {
                    "watchNextTabbedResultsRenderer": {
                        "tabs": [{
                            "tabRenderer": {
                                "content": {
                                    "musicQueueRenderer": {
                                        "content": {
                                            "playlistPanelRenderer": {
                                                "contents": [
                                                    {"playlistPanelVideoRenderer": {"videoId": "r1"}},
                                                    {"automixPreviewVideoRenderer": {}},
                                                ],
                                                "continuations": [
                                                    {"nextRadioContinuationData": {"continuation": "RTOKEN-2"}}
                                                ],
                                            }
                                        }
                                    }
                                }
                            }
                        }]
                    }
                }
            }
        }
    }
    continued = {
        "continuationContents": {
            "playlistPanelContinuation": {
                "contents": [{"playlistPanelVideoRenderer": {"videoId": "r2"}}],
            }
        }
    }
    return [first, continued]
