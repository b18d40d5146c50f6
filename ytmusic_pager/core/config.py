"""
Configuration management for ytmusic-pager.

This module handles loading, validating, and providing access to the
library configuration stored in config.yaml.

The configuration file contains:
    - Which InnerTube client to impersonate and its locale
    - HTTP timeout and optional proxy
    - Optional log directory and console log level

Every section is optional; missing sections fall back to defaults.
The resulting Config is immutable and is passed explicitly to
YouTubeMusicClient rather than being read from global state.

Example config.yaml:
    client:
      type: "web_music"   # web_music | ios | tv
      hl: "en"
      gl: "US"

    http:
      timeout: 30
      proxy: null

    logging:
      directory: "~/.cache/ytmusic-pager"
      level: "INFO"
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from ytmusic_pager.core.exceptions import ConfigError
from ytmusic_pager.core.logger import setup_logging
from ytmusic_pager.innertube.clients import ClientContext, ClientType


# Default configuration file name (looked up in current working directory)
CONFIG_FILENAME = "config.yaml"

DEFAULT_TIMEOUT = 30.0
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ClientConfig:
    """
    InnerTube client selection.

    Attributes:
        type: Which client preset to send in request contexts.
        hl: Interface language code, e.g. "en".
        gl: Region code, e.g. "US".
    """
    type: ClientType = ClientType.WEB_MUSIC
    hl: str = "en"
    gl: str = "US"


@dataclass(frozen=True)
class HttpConfig:
    """
    HTTP transport configuration.

    Attributes:
        timeout: Total timeout per request in seconds.
        proxy: Optional proxy URL passed to aiohttp (e.g. "http://127.0.0.1:8080").
    """
    timeout: float = DEFAULT_TIMEOUT
    proxy: str | None = None


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging configuration.

    Attributes:
        directory: Directory for log files, or None for console-only logging.
        level: Console log level name.
    """
    directory: Path | None = None
    level: str = "INFO"

    @property
    def level_number(self) -> int:
        """Numeric logging level for the configured name."""
        return getattr(logging, self.level)


@dataclass(frozen=True)
class Config:
    """
    Complete library configuration.

    Created by load_config() or default_config() and treated as immutable.

    Example:
        config = load_config()
        context = config.client_context()
        print(f"Requests as {context.client_name} ({context.hl}-{context.gl})")
    """
    client: ClientConfig
    http: HttpConfig
    logging: LoggingConfig

    def client_context(self) -> ClientContext:
        """Build the ClientContext preset with the configured locale applied."""
        return ClientContext.from_type(self.client.type).with_locale(
            hl=self.client.hl,
            gl=self.client.gl
        )


def default_config() -> Config:
    """Return the configuration used when no config.yaml is supplied."""
    return Config(
        client=ClientConfig(),
        http=HttpConfig(),
        logging=LoggingConfig()
    )


def setup_logging_from_config(config: Config) -> None:
    """
    Apply the logging section: console level, and log files when a
    directory is configured.

    See setup_logging() for the files created.
    """
    setup_logging(config.logging.directory, config.logging.level_number)


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate configuration from config.yaml.

    Args:
        config_path: Optional explicit path to config file.
                     If None, looks for config.yaml in current working directory.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If the config file is not found, has invalid YAML syntax,
                     is not a mapping, or contains invalid values.

    Behavior:
        1. Locate config file (explicit path or CWD/config.yaml)
        2. Read and parse YAML content (an empty file means "all defaults")
        3. Validate each present section is a dictionary
        4. Parse client, http and logging sections with defaults
        5. Create and return frozen Config object
    """
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME

    if not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            details={"file_path": str(config_path)}
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    if raw_config is None:
        raw_config = {}

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    _validate_config(raw_config)

    return Config(
        client=_parse_client_config(raw_config.get("client")),
        http=_parse_http_config(raw_config.get("http")),
        logging=_parse_logging_config(raw_config.get("logging"))
    )


def _validate_config(raw_config: dict[str, Any]) -> None:
    """
    Validate that every present section is a dictionary.

    Raises:
        ConfigError: If a section has a non-mapping value.
    """
    for section in ("client", "http", "logging"):
        value = raw_config.get(section)
        if value is not None and not isinstance(value, dict):
            raise ConfigError(
                f"Section '{section}' must be a dictionary",
                details={"section": section}
            )


def _parse_client_config(client_section: dict[str, Any] | None) -> ClientConfig:
    """
    Parse and validate the client section.

    Raises:
        ConfigError: If type is unknown or hl/gl are not non-empty strings.
    """
    if client_section is None:
        return ClientConfig()

    raw_type = client_section.get("type", ClientType.WEB_MUSIC.value)
    try:
        client_type = ClientType(raw_type)
    except ValueError as e:
        raise ConfigError(
            f"'client.type' must be one of: {', '.join(t.value for t in ClientType)}",
            details={"field": "client.type", "value": raw_type}
        ) from e

    locale: dict[str, str] = {}
    for field_name, default in (("hl", "en"), ("gl", "US")):
        value = client_section.get(field_name, default)
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(
                f"'client.{field_name}' must be a non-empty string",
                details={"field": f"client.{field_name}", "value": value}
            )
        locale[field_name] = value.strip()

    return ClientConfig(type=client_type, hl=locale["hl"], gl=locale["gl"])


def _parse_http_config(http_section: dict[str, Any] | None) -> HttpConfig:
    """
    Parse and validate the http section.

    Raises:
        ConfigError: If timeout is not a positive number or proxy is not a string.
    """
    if http_section is None:
        return HttpConfig()

    timeout = http_section.get("timeout", DEFAULT_TIMEOUT)
    # bool is an int subclass
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(
            "'http.timeout' must be a positive number",
            details={"field": "http.timeout", "value": timeout}
        )

    proxy = http_section.get("proxy")
    if proxy is not None and (not isinstance(proxy, str) or not proxy.strip()):
        raise ConfigError(
            "'http.proxy' must be a non-empty string or null",
            details={"field": "http.proxy"}
        )

    return HttpConfig(
        timeout=float(timeout),
        proxy=proxy.strip() if proxy else None
    )


def _parse_logging_config(logging_section: dict[str, Any] | None) -> LoggingConfig:
    """
    Parse and validate the logging section.

    Expands ~ in the directory and makes it absolute.
    Does NOT create the directory (setup_logging() does that).

    Raises:
        ConfigError: If directory is not a string or level is unknown.
    """
    if logging_section is None:
        return LoggingConfig()

    directory = None
    raw_directory = logging_section.get("directory")
    if raw_directory is not None:
        if not isinstance(raw_directory, str) or not raw_directory.strip():
            raise ConfigError(
                "'logging.directory' must be a non-empty string or null",
                details={"field": "logging.directory"}
            )
        directory = Path(raw_directory.strip()).expanduser().resolve()

    level = logging_section.get("level", "INFO")
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        raise ConfigError(
            f"'logging.level' must be one of: {', '.join(VALID_LOG_LEVELS)}",
            details={"field": "logging.level", "value": level}
        )

    return LoggingConfig(directory=directory, level=level.upper())
