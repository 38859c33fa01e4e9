"""Structured logging for the API, CLI and repositories (structlog over stdlib logging).

Every event is rendered twice: coloured on the console and as one JSON object per
line in ``output/logs/app.jsonl``. Request-scoped fields (request id, pharmacy id)
are carried in contextvars so repository and allocator logs pick them up without
passing them around.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

import structlog

from rxreturns.config import LOG_FILE, LOG_LEVEL, LOG_TO_FILE, VERBOSE_LOGGING

BoundLogger = structlog.stdlib.BoundLogger

_configured = False

# Third-party loggers that are noisy at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore", "uvicorn.access", "multipart")


def _coerce_level(level_name: str) -> int:
    if level_name.isdigit():
        return int(level_name)
    return getattr(logging, level_name.upper(), logging.INFO)


def _build_handlers(level: int, pre_chain: list) -> list[logging.Handler]:
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=True),
            foreign_pre_chain=pre_chain,
        )
    )
    handlers: list[logging.Handler] = [console_handler]

    if LOG_TO_FILE:
        LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(LOG_FILE, encoding="utf-8")
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.processors.JSONRenderer(),
                foreign_pre_chain=pre_chain,
            )
        )
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
    return handlers


def _configure_logging() -> None:
    global _configured
    if _configured:
        return

    level = logging.DEBUG if VERBOSE_LOGGING else _coerce_level(LOG_LEVEL)
    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        timestamper,
    ]

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    for handler in _build_handlers(level, pre_chain):
        root_logger.addHandler(handler)
    logging.captureWarnings(True)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str = "rxreturns", **bindings: Any) -> BoundLogger:
    """Return a structured logger, optionally bound with context."""
    if not _configured:
        _configure_logging()
    logger = structlog.get_logger(name)
    if bindings:
        logger = logger.bind(**bindings)
    return logger


def bind_context(**context: Any) -> None:
    """Bind fields to every log entry emitted from the current context."""
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


@contextmanager
def request_context(**context: Any) -> Iterator[None]:
    """Start from an empty context, bind ``context`` and clear it again on exit."""
    clear_context()
    bind_context(**{k: v for k, v in context.items() if v is not None})
    try:
        yield
    finally:
        clear_context()
