"""
Logging configuration for ytmusic-pager.

This module sets up the logging system with multiple outputs:
    - Console: Colored, tqdm-compatible output
    - log_full_<ts>.log: Complete log of all events (DEBUG and above)
    - log_errors_<ts>.log: Only ERROR and CRITICAL level messages
    - request_failures_<ts>.log: Failed InnerTube requests (URL and status)

File outputs are only created when a log directory is given; a library
embedded in another application usually only wants the console handler,
or none at all.

Usage:
    from ytmusic_pager.core.logger import setup_logging, get_logger

    setup_logging(output_dir)  # Call once at startup (optional)
    logger = get_logger(__name__)  # Get logger for each module

    logger.info("Fetching search results")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

from tqdm import tqdm


# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Log format for console output (compact, tqdm-friendly)
CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"


class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    WHITE = "\033[37m"
    BOLD = "\033[1m"


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that colors the level name on console output.

    Colors:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bold Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.BLUE,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        colored_levelname = f"{color}{record.levelname}{Colors.RESET}"
        return f"{colored_levelname}: {record.getMessage()}"


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes to console without breaking tqdm progress bars.

    Applications showing a progress bar while draining a PaginatedSequence
    would otherwise get log lines printed through the middle of the bar.
    tqdm.write() prints above any active bar instead.

    Attributes:
        stream: The output stream (defaults to sys.stderr).
    """

    def __init__(self, stream: TextIO = sys.stderr) -> None:
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream)
        except Exception:
            self.handleError(record)


class RequestFailureHandler(logging.Handler):
    """
    Handler that records failed InnerTube requests in a report file.

    Only records carrying a 'request_failed_url' extra are written;
    everything else is ignored. Entries look like:

        POST https://music.youtube.com/youtubei/v1/search
        status: 429

    Attributes:
        report_path: Path to the request_failures log file.
        report_file: Open file handle, None until open() is called.

    Usage:
        log_request_failure(logger, "POST", url, status=429, error_message="Too Many Requests")
    """

    def __init__(self, report_path: Path) -> None:
        super().__init__()
        self.report_path = report_path
        self.report_file: TextIO | None = None

    def open(self) -> None:
        """Open the report file for writing (overwrites existing content)."""
        self.report_file = open(self.report_path, "w", encoding="utf-8")

    def emit(self, record: logging.LogRecord) -> None:
        if not hasattr(record, "request_failed_url"):
            return

        if self.report_file is None:
            return

        try:
            method = getattr(record, "request_failed_method", "?")
            url = getattr(record, "request_failed_url", "")
            status = getattr(record, "request_failed_status", None)

            self.report_file.write(f"{method} {url}\n")
            self.report_file.write(f"status: {status if status is not None else 'n/a'}\n\n")
            self.report_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the report file handle. Safe to call multiple times."""
        if self.report_file is not None:
            try:
                self.report_file.close()
            except OSError:
                pass
            self.report_file = None
        super().close()


class ErrorOnlyFilter(logging.Filter):
    """
    Filter that only allows ERROR and CRITICAL level records.

    Used by the error log file handler to exclude DEBUG, INFO, and WARNING.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def setup_logging(output_dir: Path | None = None, level: int = logging.INFO) -> None:
    """
    Configure the logging system.

    Call this ONCE from the application that embeds the library. The
    library modules themselves never configure logging.

    Args:
        output_dir: Directory where log files will be created, in a 'logs'
                    subdirectory. If None, only the console handler is installed.
        level: Level of the console handler. File handlers always log DEBUG.

    Behavior:
        1. Configure root logger level to DEBUG and drop existing handlers
        2. Add console handler (TqdmLoggingHandler) at `level`
        3. If output_dir is given:
           - Create output_dir/logs
           - Add full log file handler (DEBUG)
           - Add error-only log file handler (ErrorOnlyFilter)
           - Add request failure report handler
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = TqdmLoggingHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(ColoredConsoleFormatter())
    root_logger.addHandler(console_handler)

    if output_dir is None:
        return

    logs_dir = output_dir / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")

    full_log_path = logs_dir / f"log_full_{timestamp}.log"
    full_handler = logging.FileHandler(full_log_path, mode="w", encoding="utf-8")
    full_handler.setLevel(logging.DEBUG)
    full_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    root_logger.addHandler(full_handler)

    error_log_path = logs_dir / f"log_errors_{timestamp}.log"
    error_handler = logging.FileHandler(error_log_path, mode="w", encoding="utf-8")
    error_handler.setLevel(logging.DEBUG)  # Filter handles the level restriction
    error_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    error_handler.addFilter(ErrorOnlyFilter())
    root_logger.addHandler(error_handler)

    failures_path = logs_dir / f"request_failures_{timestamp}.log"
    failures_handler = RequestFailureHandler(failures_path)
    failures_handler.open()
    root_logger.addHandler(failures_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.
              This creates a hierarchy like 'ytmusic_pager.pagination.sequence'.

    Returns:
        logging.Logger: A logger instance configured by setup_logging().

    Note:
        Without setup_logging() the records propagate to whatever handlers
        the host application installed.
    """
    return logging.getLogger(name)


def log_request_failure(
    logger: logging.Logger,
    method: str,
    url: str,
    status: int | None,
    error_message: str
) -> None:
    """
    Log a failed InnerTube request.

    Logs an ERROR record with the extra fields RequestFailureHandler picks up.

    Args:
        logger: The logger to use for the message.
        method: HTTP method ("GET"/"POST").
        url: Requested URL.
        status: HTTP status, or None for transport failures.
        error_message: Short description of the failure.
    """
    logger.error(
        f"Request failed: {method} {url} - {error_message}",
        extra={
            "request_failed_method": method,
            "request_failed_url": url,
            "request_failed_status": status,
        }
    )


def shutdown_logging() -> None:
    """
    Flush, close and remove every handler on the root logger.

    Typically called in a finally block at application exit.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except OSError:
            pass
        root_logger.removeHandler(handler)
