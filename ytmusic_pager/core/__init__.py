"""
Core module for ytmusic-pager.

This module provides the foundational components used throughout the library:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Logging setup with console and file outputs

Usage:
    from ytmusic_pager.core import (
        Config, load_config,
        setup_logging, get_logger,
        YTMusicPagerError, RequestError
    )
"""

from ytmusic_pager.core.config import (
    ClientConfig,
    Config,
    HttpConfig,
    LoggingConfig,
    default_config,
    load_config,
    setup_logging_from_config,
)
from ytmusic_pager.core.exceptions import (
    ConfigError,
    RequestError,
    ResponseParseError,
    YTMusicPagerError,
)
from ytmusic_pager.core.logger import (
    get_logger,
    log_request_failure,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "ClientConfig",
    "HttpConfig",
    "LoggingConfig",
    "default_config",
    "load_config",
    "setup_logging_from_config",
    # Exceptions
    "YTMusicPagerError",
    "ConfigError",
    "RequestError",
    "ResponseParseError",
    # Logger
    "setup_logging",
    "get_logger",
    "log_request_failure",
    "shutdown_logging",
]
