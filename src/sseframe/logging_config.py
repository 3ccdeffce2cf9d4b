"""Structured logging via structlog, JSON to stderr with optional hourly rotating file."""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import TimedRotatingFileHandler

import structlog

# Handlers installed by the last setup_logging() call, replaced on the next one
_installed_handlers: list[logging.Handler] = []


def setup_logging(log_dir: str | None = None, log_level: str = "INFO") -> None:
    """Configure structlog with JSON output to stderr, plus a rotating file if log_dir is set.

    Safe to call more than once: handlers from a previous call are removed
    and closed before the new ones are attached.
    """
    log_level = log_level.upper()
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    stderr_handler = logging.StreamHandler()
    stderr_handler.setLevel(log_level)
    root_logger.addHandler(stderr_handler)
    _installed_handlers.append(stderr_handler)

    file_handler: TimedRotatingFileHandler | None = None
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

        # File handler: hourly rotation, JSON lines
        file_handler = TimedRotatingFileHandler(
            filename=os.path.join(log_dir, "sseframe.jsonl"),
            when="H",
            interval=1,
            backupCount=168,  # 7 days of hourly logs
            utc=True,
        )
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    class _TeeWriter:
        """Write structured log lines to stderr and, through the rotating handler, the log file."""

        def write(self, message: str) -> None:
            if file_handler is not None:
                file_handler.handle(logging.makeLogRecord({"msg": message.rstrip("\n")}))
            sys.stderr.write(message)

        def flush(self) -> None:
            if file_handler is not None:
                file_handler.flush()
            sys.stderr.flush()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level)
        ),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=_TeeWriter()),
        cache_logger_on_first_use=True,
    )
