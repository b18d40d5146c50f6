"""
Exception classes for ytmusic-pager.

This module defines the custom exceptions raised by the request layer,
the configuration loader and the service facade.

The pagination core never raises any of these itself: errors coming out
of a page fetcher are propagated to the caller unchanged.

Exception Hierarchy:
    YTMusicPagerError (base)
        ConfigError - Configuration file issues
        RequestError - HTTP/transport issues talking to YouTube Music
        ResponseParseError - Response lacks the expected structure
"""


class YTMusicPagerError(Exception):
    """
    Base exception for all ytmusic-pager errors.

    All custom exceptions in this project inherit from this class,
    allowing callers to catch every library error with a single
    except clause if desired.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., URL, status).

    Example:
        try:
            songs = await client.search.search("query", SearchCategory.SONGS).fetch_items(0, 20)
        except YTMusicPagerError as e:
            logger.error(f"Search failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'url': Endpoint that was requested
                     - 'status': HTTP status code
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(YTMusicPagerError):
    """
    Raised when there's an issue with the configuration file.

    Common causes:
        - config.yaml not found
        - config.yaml has invalid YAML syntax
        - Invalid field values (e.g., unknown client type, negative timeout)

    Example:
        raise ConfigError(
            "'http.timeout' must be a positive number",
            details={'field': 'http.timeout', 'value': -1}
        )
    """
    pass


class RequestError(YTMusicPagerError):
    """
    Raised when an HTTP request to YouTube Music fails.

    Covers both transport failures (connection reset, DNS, timeout) and
    non-success HTTP statuses.

    Attributes:
        status: HTTP status code, or None for transport failures.
        is_auth_error: True for 401/403 responses (cookies expired, etc.).
        is_rate_limit: True for 429 responses (may retry with backoff).

    Example:
        raise RequestError(
            "HTTP request failed with status 429",
            details={'url': url, 'status': 429},
            status=429,
            is_rate_limit=True
        )
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status: int | None = None,
        is_auth_error: bool = False,
        is_rate_limit: bool = False
    ) -> None:
        """
        Initialize request error with additional flags.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
            status: HTTP status code if a response was received.
            is_auth_error: Set to True if the request was rejected as unauthenticated.
            is_rate_limit: Set to True if the request was throttled.
        """
        super().__init__(message, details)
        self.status = status
        self.is_auth_error = is_auth_error
        self.is_rate_limit = is_rate_limit


class ResponseParseError(YTMusicPagerError):
    """
    Raised when a response does not contain the structure needed to build a page.

    YouTube Music changes its internal JSON without notice, so this usually
    means a shelf could not be located or a response body was not JSON.

    Example:
        raise ResponseParseError(
            "Shelf 'Songs' not found in search response",
            details={'shelf_title': 'Songs'}
        )
    """
    pass
