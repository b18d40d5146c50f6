"""
InnerTube client contexts.

Every InnerTube request carries a `context.client` object describing which
official client is talking (web player, iOS app, TV app...). Different
clients unlock different behaviour on the server side, so the context is
chosen per request rather than stored globally.

ClientContext is an immutable value: build one from a preset, adjust the
locale with with_locale(), and pass it explicitly to the RequestHandler.

Usage:
    context = ClientContext.web_music().with_locale(hl="de", gl="DE")
    response = await handler.post(Endpoints.SEARCH, {"query": "..."}, context)
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class ClientType(str, Enum):
    """Known InnerTube client presets."""

    WEB_MUSIC = "web_music"
    IOS = "ios"
    TV = "tv"


@dataclass(frozen=True)
class ClientContext:
    """
    Immutable description of the client sending InnerTube requests.

    Attributes:
        hl: Interface language (e.g. "en").
        gl: Content region (e.g. "US").
        platform: "DESKTOP", "MOBILE" or "TV".
        client_name: InnerTube client name (e.g. "WEB_REMIX").
        client_version: InnerTube client version string.
        device_make: Device manufacturer, empty for desktop.
        device_model: Device model, empty for desktop.
        os_name: Operating system name.
        os_version: Operating system version.
        user_agent: User-Agent header sent with every request.
        time_zone: Client time zone name.
        utc_offset_minutes: Offset of time_zone from UTC.
        browser_name: Browser name (web clients only).
        browser_version: Browser version (web clients only).
        original_url: Page URL the request pretends to originate from.

    Notes:
        WEB_MUSIC requires a Proof of Origin token for streaming.
        IOS does not support account cookies but serves HLS formats.
    """

    hl: str
    gl: str
    platform: str
    client_name: str
    client_version: str
    device_make: str
    device_model: str
    os_name: str
    os_version: str
    user_agent: str
    time_zone: str = "UTC"
    utc_offset_minutes: int = 0
    browser_name: str | None = None
    browser_version: str | None = None
    original_url: str | None = None

    @classmethod
    def web_music(cls) -> "ClientContext":
        """Context of the YouTube Music web player."""
        return cls(
            hl="en",
            gl="US",
            platform="DESKTOP",
            client_name="WEB_REMIX",
            client_version="1.20250428.03.00",
            device_make="",
            device_model="",
            os_name="Windows",
            os_version="10.0",
            user_agent=(
                "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
                "(KHTML, like Gecko) Chrome/137.0.7151.6 Safari/537.36"
            ),
            browser_name="Chrome",
            browser_version="137.0.7151.6",
            original_url="https://music.youtube.com/",
        )

    @classmethod
    def ios(cls) -> "ClientContext":
        """Context of the YouTube iOS app."""
        return cls(
            hl="en",
            gl="US",
            platform="MOBILE",
            client_name="iOS",
            client_version="20.11.6",
            device_make="Apple",
            device_model="iPhone16,2",
            os_name="iOS",
            os_version="18.1.0.22B83",
            user_agent=(
                "com.google.ios.youtube/20.11.6 "
                "(iPhone16,2; U; CPU iOS 18_1_0 like Mac OS X; US)"
            ),
        )

    @classmethod
    def tv(cls) -> "ClientContext":
        """Context of the YouTube TV (Cobalt) app."""
        return cls(
            hl="en",
            gl="US",
            platform="TV",
            client_name="TVHTML5",
            client_version="7.20250428.13.00",
            device_make="",
            device_model="",
            os_name="Cobalt",
            os_version="",
            user_agent=(
                "Mozilla/5.0 (ChromiumStylePlatform) Cobalt/Version"
            ),
        )

    @classmethod
    def from_type(cls, client_type: ClientType) -> "ClientContext":
        """
        Build the preset matching a ClientType.

        Raises:
            ValueError: If client_type is not a known preset.
        """
        presets = {
            ClientType.WEB_MUSIC: cls.web_music,
            ClientType.IOS: cls.ios,
            ClientType.TV: cls.tv,
        }
        try:
            return presets[ClientType(client_type)]()
        except (KeyError, ValueError) as e:
            raise ValueError(f"Unknown client type: {client_type!r}") from e

    def with_locale(self, hl: str | None = None, gl: str | None = None) -> "ClientContext":
        """Return a copy with the language and/or region replaced."""
        return replace(
            self,
            hl=hl if hl is not None else self.hl,
            gl=gl if gl is not None else self.gl,
        )

    def to_payload(self) -> dict[str, Any]:
        """
        Render the `context` object sent in InnerTube request bodies.

        Optional browser fields are only included when set.
        """
        client: dict[str, Any] = {
            "hl": self.hl,
            "gl": self.gl,
            "platform": self.platform,
            "clientName": self.client_name,
            "clientVersion": self.client_version,
            "deviceMake": self.device_make,
            "deviceModel": self.device_model,
            "osName": self.os_name,
            "osVersion": self.os_version,
            "userAgent": self.user_agent,
            "timeZone": self.time_zone,
            "utcOffsetMinutes": self.utc_offset_minutes,
        }
        if self.browser_name is not None:
            client["browserName"] = self.browser_name
        if self.browser_version is not None:
            client["browserVersion"] = self.browser_version
        if self.original_url is not None:
            client["originalUrl"] = self.original_url

        return {"client": client}
