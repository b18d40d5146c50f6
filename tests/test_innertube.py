"""Test the InnerTube transport layer"""

import json
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from ytmusic_pager.core.exceptions import RequestError, ResponseParseError
from ytmusic_pager.innertube import (
    ClientContext,
    ClientType,
    Endpoints,
    RequestHandler,
    build_page,
    extract_continuation_item_token,
    extract_continuation_token,
    make_page_fetcher,
)
from ytmusic_pager.pagination import PaginatedSequence


def make_session(status: int = 200, body: str = "{}") -> MagicMock:
    """Mock aiohttp session whose request() yields a response with status/body"""
    response = MagicMock()
    response.status = status
    response.text = AsyncMock(return_value=body)

    session = MagicMock()
    session.request.return_value.__aenter__.return_value = response
    return session


def sent_json(session: MagicMock, call_index: int = -1) -> dict:
    return session.request.call_args_list[call_index].kwargs["json"]


class TestClientContext:
    """Test client context presets"""

    @pytest.mark.parametrize("client_type,name", [
        (ClientType.WEB_MUSIC, "WEB_REMIX"),
        (ClientType.IOS, "iOS"),
        (ClientType.TV, "TVHTML5"),
        ("ios", "iOS"),
    ])
    def test_from_type(self, client_type, name):
        assert ClientContext.from_type(client_type).client_name == name

    def test_from_unknown_type(self):
        with pytest.raises(ValueError):
            ClientContext.from_type("android")

    def test_with_locale_returns_copy(self):
        original = ClientContext.web_music()

        localized = original.with_locale(hl="ja")

        assert localized.hl == "ja"
        assert localized.gl == original.gl
        assert original.hl == "en"

    def test_web_payload_includes_browser_fields(self):
        client = ClientContext.web_music().to_payload()["client"]

        assert client["clientName"] == "WEB_REMIX"
        assert client["browserName"] == "Chrome"
        assert client["originalUrl"] == "https://music.youtube.com/"

    def test_ios_payload_omits_browser_fields(self):
        client = ClientContext.ios().to_payload()["client"]

        assert client["deviceModel"] == "iPhone16,2"
        assert "browserName" not in client
        assert "originalUrl" not in client


class TestRequestHandler:
    """Test request sending and error mapping"""

    @pytest.mark.asyncio
    async def test_post_merges_context_and_drops_none(self):
        session = make_session(body='{"ok": true}')
        handler = RequestHandler(session, ClientContext.web_music())

        result = await handler.post(Endpoints.SEARCH, {"query": "abc", "continuation": None})

        assert result == {"ok": True}
        body = sent_json(session)
        assert body["query"] == "abc"
        assert "continuation" not in body
        assert body["context"]["client"]["clientName"] == "WEB_REMIX"

        args = session.request.call_args
        assert args.args == ("POST", Endpoints.SEARCH)
        assert args.kwargs["headers"]["User-Agent"] == ClientContext.web_music().user_agent

    @pytest.mark.asyncio
    async def test_post_with_explicit_context(self):
        session = make_session()
        handler = RequestHandler(session, ClientContext.web_music())

        await handler.post(Endpoints.NEXT, {"playlistId": "x"}, ClientContext.ios())

        assert sent_json(session)["context"]["client"]["clientName"] == "iOS"

    @pytest.mark.asyncio
    async def test_extra_headers_and_proxy(self):
        session = make_session()
        handler = RequestHandler(
            session,
            ClientContext.web_music(),
            proxy="http://proxy:3128",
            extra_headers={"Cookie": "SID=1"}
        )

        await handler.post(Endpoints.BROWSE)

        kwargs = session.request.call_args.kwargs
        assert kwargs["headers"]["Cookie"] == "SID=1"
        assert kwargs["proxy"] == "http://proxy:3128"

    @pytest.mark.parametrize("status,rate_limit,auth", [
        (429, True, False),
        (401, False, True),
        (403, False, True),
        (500, False, False),
    ])
    @pytest.mark.asyncio
    async def test_error_status(self, status, rate_limit, auth):
        handler = RequestHandler(make_session(status=status, body="nope"), ClientContext.web_music())

        with pytest.raises(RequestError) as exc_info:
            await handler.post(Endpoints.SEARCH, {"query": "abc"})

        error = exc_info.value
        assert error.status == status
        assert error.is_rate_limit is rate_limit
        assert error.is_auth_error is auth
        assert error.details["url"] == Endpoints.SEARCH

    @pytest.mark.asyncio
    async def test_transport_error_is_wrapped(self):
        session = MagicMock()
        session.request.side_effect = aiohttp.ClientConnectionError("connection reset")
        handler = RequestHandler(session, ClientContext.web_music())

        with pytest.raises(RequestError) as exc_info:
            await handler.post(Endpoints.SEARCH)

        assert exc_info.value.status is None
        assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)

    @pytest.mark.parametrize("body", ["not json", "[1, 2]"])
    @pytest.mark.asyncio
    async def test_invalid_json(self, body):
        handler = RequestHandler(make_session(body=body), ClientContext.web_music())

        with pytest.raises(ResponseParseError):
            await handler.post(Endpoints.SEARCH)


class TestContinuation:
    """Test continuation token extraction and page fetcher construction"""

    def test_extract_token(self):
        shelf = {"continuations": [{"nextContinuationData": {"continuation": "abc"}}]}

        assert extract_continuation_token(shelf) == "abc"

    @pytest.mark.parametrize("shelf", [
        {},
        {"continuations": []},
        {"continuations": [{}]},
        {"continuations": [{"nextContinuationData": {"continuation": ""}}]},
        {"continuations": "broken"},
    ])
    def test_extract_token_absent(self, shelf):
        assert extract_continuation_token(shelf) is None

    def test_build_page(self):
        shelf = {
            "contents": [{"id": 1}, {"id": 2}],
            "continuations": [{"nextContinuationData": {"continuation": "next"}}],
        }

        page = build_page(shelf, lambda item: item["id"])

        assert page.items == (1, 2)
        assert page.continuation_token == "next"

    def test_extract_radio_token(self):
        panel = {"continuations": [{"nextRadioContinuationData": {"continuation": "radio-2"}}]}

        assert extract_continuation_token(panel) == "radio-2"

    def test_extract_continuation_item_token(self):
        contents = [
            {"musicResponsiveListItemRenderer": {}},
            {"continuationItemRenderer": {"continuationEndpoint": {
                "continuationCommand": {"token": "browse-2"}
            }}},
        ]

        assert extract_continuation_item_token(contents) == "browse-2"
        assert extract_continuation_item_token(contents[:1]) is None
        assert extract_continuation_item_token([]) is None

    def test_build_page_drops_continuation_item(self):
        shelf = {"contents": [
            {"id": 1},
            {"continuationItemRenderer": {"continuationEndpoint": {
                "continuationCommand": {"token": "browse-2"}
            }}},
        ]}

        page = build_page(shelf, lambda item: item["id"])

        assert page.items == (1,)
        assert page.continuation_token == "browse-2"

    def test_build_page_rejects_bad_contents(self):
        with pytest.raises(ResponseParseError):
            build_page({"contents": "oops"}, lambda item: item)

    @pytest.mark.asyncio
    async def test_page_fetcher_drives_sequence(self):
        responses = {
            None: {"shelf": {
                "contents": [{"n": 1}, {"n": 2}],
                "continuations": [{"nextContinuationData": {"continuation": "t2"}}],
            }},
            "t2": {"continuationContents": {"contents": [{"n": 3}]}},
        }
        handler = MagicMock()
        handler.post = AsyncMock(side_effect=lambda url, payload, context: responses[payload["continuation"]])

        def locate(response, continued):
            return response["continuationContents"] if continued else response["shelf"]

        fetch_page = make_page_fetcher(
            handler, Endpoints.BROWSE, {"browseId": "FEmusic_liked_videos"}, locate, lambda item: item["n"]
        )

        result = [item async for item in PaginatedSequence(fetch_page)]

        assert result == [1, 2, 3]
        payloads = [call.args[1] for call in handler.post.call_args_list]
        assert payloads == [
            {"browseId": "FEmusic_liked_videos", "continuation": None},
            {"browseId": "FEmusic_liked_videos", "continuation": "t2"},
        ]

    @pytest.mark.asyncio
    async def test_page_fetcher_over_request_handler(self):
        body = json.dumps({"shelf": {"contents": [{"n": 7}]}})
        session = make_session(body=body)
        handler = RequestHandler(session, ClientContext.web_music())

        fetch_page = make_page_fetcher(
            handler, Endpoints.BROWSE, {"browseId": "x"},
            lambda response, continued: response["shelf"],
            lambda item: item["n"]
        )
        page = await fetch_page(None)

        assert page.items == (7,)
        assert page.continuation_token is None
        assert "continuation" not in sent_json(session)
