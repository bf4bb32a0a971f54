"""
Logging configuration.

- **Console handler**: coloured, human-readable lines during development;
  JSON lines when ``ENVIRONMENT=production`` so the hosting platform can
  parse them.
- **Rotating file handlers**: JSON structured logs plus an error-only file.
- **Request-ID correlation**: every record carries the ID of the request
  being served (set by ``RequestIDMiddleware``).

Usage:
    Call ``setup_logging()`` once during application startup (in ``main.py``).
    Modules log through ``logging.getLogger(__name__)``.
"""

import json
import logging
import os
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from lab_system.core.config import settings

# Request ID of the request currently being handled, if any.
request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestIDFilter(logging.Filter):
    """Attach the current request ID to every record passing through."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = request_id_ctx.get()
        return True


class JSONFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON objects.

    Output example::

        {"timestamp": "2025-07-30T10:30:00.123+00:00", "level": "INFO",
         "logger": "lab_system.services.user_service", "message": "Created user 7",
         "module": "user_service", "function": "create_user", "line": 61}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = getattr(record, "request_id", None)
        if request_id:
            log_entry["request_id"] = request_id

        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key in ("status_code", "method", "path", "elapsed_ms"):
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val

        return json.dumps(log_entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter with ANSI-coloured levels."""

    COLOURS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        colour = self.COLOURS.get(record.levelname, self.RESET)
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
            "%Y-%m-%d %H:%M:%S"
        )

        request_id = getattr(record, "request_id", None)
        rid_str = f" [{request_id[:8]}]" if request_id else ""

        base = (
            f"{timestamp} | {colour}{record.levelname:<8}{self.RESET} | "
            f"{record.name}{rid_str} | {record.getMessage()}"
        )
        if record.exc_info and record.exc_info[0] is not None:
            base += "\n" + self.formatException(record.exc_info)
        return base


def _rotating_handler(filename: str, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=os.path.join(settings.LOG_DIR, filename),
        maxBytes=settings.LOG_FILE_MAX_BYTES,
        backupCount=settings.LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIDFilter())
    return handler


def setup_logging() -> None:
    """
    Configure the root logger with console + rotating file handlers.

    Subsequent calls are no-ops once the root logger has handlers.

    Configuration (via ``Settings``):
    - ``DEBUG=true`` → all loggers at DEBUG, SQL echo enabled.
    - ``LOG_LEVEL`` → root log level (default: INFO).
    - ``ENVIRONMENT=production`` → JSON console output.
    - ``LOG_DIR``, ``LOG_FILE_MAX_BYTES``, ``LOG_FILE_BACKUP_COUNT`` → file rotation.
    """
    root_logger = logging.getLogger()

    if root_logger.handlers:
        return

    level = (
        logging.DEBUG
        if settings.DEBUG
        else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    )
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        JSONFormatter() if settings.is_production else ConsoleFormatter()
    )
    console_handler.addFilter(RequestIDFilter())
    root_logger.addHandler(console_handler)

    os.makedirs(settings.LOG_DIR, exist_ok=True)
    root_logger.addHandler(_rotating_handler("lab-system.log", level))
    root_logger.addHandler(_rotating_handler("lab-system-error.log", logging.ERROR))

    # ── Suppress noisy third-party loggers ──
    # Request lines are logged by RequestLoggingMiddleware instead.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.DEBUG if settings.DEBUG else logging.WARNING
    )

    root_logger.info(
        "Logging initialized: level=%s, dir=%s, max_size=%s MB, backups=%d",
        logging.getLevelName(level),
        settings.LOG_DIR,
        settings.LOG_FILE_MAX_BYTES // (1024 * 1024),
        settings.LOG_FILE_BACKUP_COUNT,
    )
