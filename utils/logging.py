# utils/logging.py

"""Logging setup for the Biglio assistant CLI."""

from __future__ import annotations

import logging
import logging.handlers
import os

import structlog
from config import settings
from rich.logging import RichHandler

logger = structlog.get_logger(__name__)

# Third-party loggers capped at WARNING.
QUIET_LOGGERS = ("httpx", "httpcore")
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

__all__ = ["setup_logging"]


def _formatter() -> logging.Formatter:
    return logging.Formatter(settings.LOG_FORMAT, datefmt=settings.LOG_DATE_FORMAT)


def _log_file_path(log_file: str) -> str:
    """Relative log files live under ``BASE_OUTPUT_DIR``."""
    if os.path.isabs(log_file):
        return log_file
    return os.path.join(settings.BASE_OUTPUT_DIR, log_file)


def _file_handler(log_file: str) -> logging.Handler | None:
    path = _log_file_path(log_file)
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
    except OSError as e:  # pragma: no cover - path issues
        logger.error("Could not open log file %s: %s", path, e)
        return None
    handler.setFormatter(_formatter())
    return handler


def _console_handler() -> logging.Handler:
    if settings.ENABLE_RICH_LOGGING:
        return RichHandler(
            level=settings.LOG_LEVEL_STR,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
        )
    handler = logging.StreamHandler()
    handler.setFormatter(_formatter())
    return handler


def setup_logging() -> None:
    """Route structlog through stdlib logging and install the handlers."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.render_to_log_kwargs,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(settings.LOG_LEVEL_STR)

    if settings.LOG_FILE:
        file_handler = _file_handler(settings.LOG_FILE)
        if file_handler is not None:
            root_logger.addHandler(file_handler)
    root_logger.addHandler(_console_handler())

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.get_logger().info(
        "Biglio assistant logging ready",
        log_level=settings.LOG_LEVEL_STR,
        log_file=_log_file_path(settings.LOG_FILE) if settings.LOG_FILE else None,
    )
