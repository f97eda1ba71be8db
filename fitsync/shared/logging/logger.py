# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""loguru configuration shared by the API server and the session client.

Every record carries the correlation id of the request (or client call) that
produced it. Messages pass through the sensitive-data filter before reaching
any sink.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)
_FILE_FORMAT = "{time:YYYY-MM-DDTHH:mm:ss.SSSZ} {level:<8} {extra[correlation_id]} {name}:{line} {message}"

_QUIET_LOGGERS = {
    "werkzeug": logging.INFO,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
}

_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default="-")


def _inject_correlation_id(record) -> None:
    record["extra"].setdefault("correlation_id", _CORRELATION_ID.get())


_logger.configure(extra={"correlation_id": "-"}, patcher=_inject_correlation_id)


def _log_file_path() -> Path:
    configured = os.getenv("LOG_FILE")
    if configured:
        return Path(configured)
    return Path.cwd() / "instance" / "fitsync.log"


def _flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


class _InterceptHandler(logging.Handler):
    """Route stdlib logging (werkzeug, SQLAlchemy, httpx) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _logger.opt(depth=6, exception=record.exc_info).bind(
            correlation_id=_CORRELATION_ID.get()
        ).log(level, record.getMessage())


class ContextualLogger:
    """Proxy for loguru that binds the current correlation id on every call."""

    def __getattr__(self, name):  # pragma: no cover
        return getattr(_logger.bind(correlation_id=_CORRELATION_ID.get()), name)


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or "-")


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def clear_correlation_id() -> None:
    _CORRELATION_ID.set("-")


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> None:
    """(Re)install the console and file sinks.

    ``LOG_LEVEL`` overrides the default level, ``LOG_FILE`` the file location
    and ``LOG_JSON=1`` switches the file sink to JSON lines.
    """

    level = (level or os.getenv("LOG_LEVEL") or ("DEBUG" if debug_mode else "INFO")).upper()
    log_file = _log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    _logger.remove()
    _logger.add(
        sys.stderr,
        level=level,
        format=_CONSOLE_FORMAT,
        filter=sanitize_record,
        colorize=sys.stderr.isatty(),
        backtrace=debug_mode,
        diagnose=False,
    )
    _logger.add(
        str(log_file),
        level=level,
        format=_FILE_FORMAT,
        filter=sanitize_record,
        serialize=_flag("LOG_JSON"),
        colorize=False,
        backtrace=False,
        diagnose=False,
        enqueue=True,
        rotation="10 MB",
        retention=5,
        encoding="utf-8",
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


logger = ContextualLogger()

__all__ = [
    "logger",
    "setup_logging",
    "set_correlation_id",
    "clear_correlation_id",
    "get_correlation_id",
]
