"""Loguru setup with per-request context.

Every record carries the request's correlation id and, once a request has
been authenticated, the subject id. Both live in ``ContextVar``s so they follow
the request through any code that logs via :data:`logger`.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> "
    "<yellow>sub={extra[subject]}</yellow> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_NO_VALUE = "-"
_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default=_NO_VALUE)
_SUBJECT: ContextVar[str] = ContextVar("subject", default=_NO_VALUE)

_logger.configure(extra={"correlation_id": _NO_VALUE, "subject": _NO_VALUE})

# Loggers that are noisy at INFO and only interesting when debugging.
_QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")


def _default_log_file() -> Path | None:
    configured = os.getenv("LOG_FILE")
    if configured == "":
        return None
    if configured:
        return Path(configured)
    return Path(__file__).resolve().parents[2] / "instance" / "storefront.log"


def _context() -> dict[str, str]:
    return {"correlation_id": _CORRELATION_ID.get(), "subject": _SUBJECT.get()}


class _InterceptHandler(logging.Handler):
    """Route stdlib ``logging`` (werkzeug, SQLAlchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        _logger.bind(**_context()).opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


class ContextualLogger:
    """Drop-in for the loguru logger that binds the current request context."""

    def __getattr__(self, name: str) -> Any:
        return getattr(_logger.bind(**_context()), name)


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or _NO_VALUE)


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def set_subject(subject_id: int | str | None) -> None:
    _SUBJECT.set(_NO_VALUE if subject_id is None else str(subject_id))


def clear_correlation_id() -> None:
    _CORRELATION_ID.set(_NO_VALUE)
    _SUBJECT.set(_NO_VALUE)


def setup_logging(
    level: str | None = None,
    *,
    debug_mode: bool = False,
    log_file: str | Path | None = None,
) -> None:
    level = (level or os.getenv("LOG_LEVEL") or ("DEBUG" if debug_mode else "INFO")).upper()
    common: dict[str, Any] = {
        "level": level,
        "format": _FMT,
        "filter": sanitize_record,
        "backtrace": debug_mode,
        "diagnose": False,
    }

    _logger.remove()
    _logger.add(sys.stderr, colorize=True, **common)

    target = Path(log_file) if log_file else _default_log_file()
    if target is not None:
        target.parent.mkdir(parents=True, exist_ok=True)
        _logger.add(
            str(target),
            colorize=False,
            enqueue=True,
            encoding="utf-8",
            rotation="10 MB",
            retention=5,
            **common,
        )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO if debug_mode else logging.WARNING)


logger = ContextualLogger()

__all__ = [
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "set_subject",
    "setup_logging",
]
