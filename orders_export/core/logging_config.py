"""Logging configuration with run-id support."""
from __future__ import annotations

import logging
from contextvars import ContextVar, Token
from logging.handlers import RotatingFileHandler
from pathlib import Path
from uuid import uuid4

from orders_export.core.settings import Settings


_run_id: ContextVar[str] = ContextVar("run_id", default="-")


class RunIdFilter(logging.Filter):
    """Injects run_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _run_id.get()
        return True


def new_run_id() -> str:
    return uuid4().hex[:8]


def set_run_id(value: str) -> Token:
    """Sets run id in context."""
    return _run_id.set(value)


def reset_run_id(token: Token) -> None:
    _run_id.reset(token)


def configure_logging(settings: Settings) -> None:
    """Configures root logger only once."""
    root_logger = logging.getLogger()
    if getattr(root_logger, "_orders_export_logging_configured", False):
        return

    level = getattr(logging, settings.log_level, logging.INFO)
    root_logger.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] [%(run_id)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    run_filter = RunIdFilter()

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    stream_handler.addFilter(run_filter)
    root_logger.addHandler(stream_handler)

    if settings.log_file is not None:
        log_path = settings.log_file
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=5, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.addFilter(run_filter)
        root_logger.addHandler(file_handler)

    root_logger._orders_export_logging_configured = True
