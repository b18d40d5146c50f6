"""
HTTP request handling for InnerTube endpoints.

RequestHandler wraps an aiohttp.ClientSession and knows the InnerTube
conventions:
    - JSON bodies carry a `context` object describing the client
    - None-valued payload fields are omitted (e.g. `continuation` on page 0)
    - User-Agent/Origin/Referer must look like the impersonated client

Error Mapping:
    - Non-2xx status -> RequestError (is_rate_limit for 429,
      is_auth_error for 401/403)
    - aiohttp.ClientError / timeout -> RequestError
    - Body that is not JSON -> ResponseParseError
    - asyncio.CancelledError is never caught and propagates as-is

Authentication headers (cookies, SAPISIDHASH) are not computed here; a
caller that has them passes them in as extra_headers.
"""

import asyncio
import json
from typing import Any

import aiohttp

from ytmusic_pager.core.exceptions import RequestError, ResponseParseError
from ytmusic_pager.core.logger import get_logger, log_request_failure
from ytmusic_pager.innertube.clients import ClientContext

logger = get_logger(__name__)

ORIGIN = "https://music.youtube.com"
DEFAULT_TIMEOUT = 30.0


class RequestHandler:
    """
    Sends InnerTube requests over a shared aiohttp session.

    The session is borrowed, never closed here; its owner (usually
    YouTubeMusicClient) is responsible for closing it.

    Attributes:
        context: Default ClientContext used when a call does not pass one.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        context: ClientContext,
        timeout: float = DEFAULT_TIMEOUT,
        proxy: str | None = None,
        extra_headers: dict[str, str] | None = None
    ) -> None:
        self._session = session
        self.context = context
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._proxy = proxy
        self._extra_headers = dict(extra_headers or {})

    def _headers(self, context: ClientContext) -> dict[str, str]:
        headers = {
            "User-Agent": context.user_agent,
            "Origin": ORIGIN,
            "Referer": context.original_url or ORIGIN + "/",
            "Accept": "application/json",
        }
        headers.update(self._extra_headers)
        return headers

    async def _send(
        self,
        method: str,
        url: str,
        context: ClientContext,
        body: dict[str, Any] | None = None
    ) -> str:
        """
        Send a request and return the response text.

        Raises:
            RequestError: On transport failure or non-success status.
        """
        logger.debug(f"Sending HTTP request: {method} {url}")

        try:
            async with self._session.request(
                method,
                url,
                json=body,
                headers=self._headers(context),
                proxy=self._proxy,
                timeout=self._timeout
            ) as response:
                content = await response.text()
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log_request_failure(logger, method, url, None, str(e) or type(e).__name__)
            raise RequestError(
                f"HTTP request failed: {method} {url}: {e}",
                details={"url": url, "original_error": str(e)}
            ) from e

        if status >= 400:
            log_request_failure(logger, method, url, status, f"status {status}")
            raise RequestError(
                f"HTTP request failed with status {status}: {method} {url}",
                details={"url": url, "status": status, "body": content[:500]},
                status=status,
                is_auth_error=status in (401, 403),
                is_rate_limit=status == 429
            )

        return content

    async def post(
        self,
        url: str,
        payload: dict[str, Any] | None = None,
        context: ClientContext | None = None
    ) -> dict[str, Any]:
        """
        POST an InnerTube request and return the decoded JSON body.

        Args:
            url: Endpoint URL (see Endpoints).
            payload: Request fields; entries with a None value are dropped.
            context: Client context for this request, defaults to self.context.

        Returns:
            The decoded JSON response.

        Raises:
            RequestError: On transport failure or non-success status.
            ResponseParseError: If the response is not a JSON object.
        """
        context = context or self.context
        body: dict[str, Any] = {"context": context.to_payload()}
        if payload:
            body.update({key: value for key, value in payload.items() if value is not None})

        content = await self._send("POST", url, context, body)

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ResponseParseError(
                f"Response from {url} is not valid JSON",
                details={"url": url, "original_error": str(e)}
            ) from e

        if not isinstance(data, dict):
            raise ResponseParseError(
                f"Response from {url} is not a JSON object",
                details={"url": url}
            )

        return data
