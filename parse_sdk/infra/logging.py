"""
Parse SDK Logging
-----------------
Namespaced logging with request_id propagation for call traceability.

Design:
- Every Client.do() call gets a unique request_id
- request_id propagates through: Client -> request builder -> transport
- Nothing is configured on import; applications opt in via configure_logging()
- Clear severity discipline: DEBUG=request flow, WARNING=failed call

Usage:
    from parse_sdk.infra.logging import configure_logging, get_logger

    configure_logging(logging.DEBUG)
    logger = get_logger("api.client")
"""

import contextvars
import json
import logging
import logging.handlers
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "parse_sdk"

_request_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "parse_sdk_request_id", default=None
)


def generate_request_id() -> str:
    """Generate a unique request ID."""
    return f"req_{uuid.uuid4().hex[:12]}"


def get_request_id() -> Optional[str]:
    """Get the current request ID from context."""
    return _request_id_var.get()


class RequestContext:
    """
    Context manager scoping a request ID.

    Usage:
        with RequestContext() as request_id:
            logger.debug("Sending...")
    """

    def __init__(self, request_id: Optional[str] = None):
        self._request_id = request_id or generate_request_id()
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> str:
        self._token = _request_id_var.set(self._request_id)
        return self._request_id

    def __exit__(self, *args) -> None:
        if self._token is not None:
            _request_id_var.reset(self._token)
            self._token = None


class RequestIdFilter(logging.Filter):
    """Logging filter that adds request_id to every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = get_request_id() or "-"
        return True


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured file logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key in ["method", "url", "status_code", "error_category"]:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)

        return json.dumps(log_entry)


class ConsoleHandler(logging.StreamHandler):
    """Console handler with coloured level names."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",    # Cyan
        "INFO": "\033[32m",     # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",    # Red
        "CRITICAL": "\033[35m", # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, stream=None):
        super().__init__(stream or sys.stderr)

    def format(self, record: logging.LogRecord) -> str:
        request_id = getattr(record, "request_id", "-")
        color = self.LEVEL_COLORS.get(record.levelname, "")
        request_str = f" [{request_id}]" if request_id != "-" else ""
        # Format: [LEVEL] [request_id] logger: message
        return (
            f"{color}[{record.levelname:7}]{self.RESET}{request_str} "
            f"{record.name}: {record.getMessage()}"
        )


def configure_logging(
    level: int = logging.INFO,
    console: bool = True,
    log_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Configure the parse_sdk logger tree.

    Calling again replaces previously installed handlers.

    Args:
        level: Logging level (default INFO)
        console: Enable console output on stderr
        log_file: Path for JSON-lines output, rotated by size
        max_bytes: Rotation threshold for the log file
        backup_count: Rotated files to keep

    Returns:
        The package root logger
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    request_filter = RequestIdFilter()

    if console:
        console_handler = ConsoleHandler()
        console_handler.setLevel(level)
        console_handler.addFilter(request_filter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            str(log_path),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)  # File gets everything
        file_handler.setFormatter(JSONFormatter())
        file_handler.addFilter(request_filter)
        root_logger.addHandler(file_handler)

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger in the parse_sdk namespace.

    Args:
        name: Logger name (prefixed with 'parse_sdk.' if not already)
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)


# Libraries stay quiet unless the application configures logging.
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())
