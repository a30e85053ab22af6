"""Structured logging helpers with correlation and resolving-service metadata."""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar, Token
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator, Optional

from pythonjsonlogger import jsonlogger

from locator_engine.core.config import settings

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
_service_id: ContextVar[Optional[str]] = ContextVar("service_id", default=None)

LEVEL_NAME = str(getattr(settings, "LOCATOR_LOG_LEVEL", "info")).upper()
LOG_LEVEL = getattr(logging, LEVEL_NAME, logging.INFO)
LOG_SCHEMA_VERSION = str(getattr(settings, "LOCATOR_LOG_SCHEMA_VERSION", "1.0.0"))

BASE_DIR = Path(__file__).resolve().parent.parent
ROOT_DIR = BASE_DIR.parent
LOG_FILE_NAME = "locator_engine.log"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 5

_handlers_installed = False


def _resolve_logs_dir() -> Path:
    """Select a writable logs directory honoring configuration overrides."""

    candidates = []
    configured_dir = getattr(settings, "LOCATOR_LOG_DIR", None)
    if configured_dir:
        candidates.append(Path(configured_dir))
    # Precedence: explicit override -> repo root logs -> package-local logs
    candidates.append(ROOT_DIR / "logs")
    candidates.append(BASE_DIR / "logs")

    for candidate in candidates:
        try:
            candidate.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            continue
        return candidate

    raise PermissionError("Unable to create a writable logs directory")


class VersionedJsonFormatter(jsonlogger.JsonFormatter):
    """Inject a schema version into each structured log entry."""

    def __init__(self, *args, schema_version: str, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._schema_version = schema_version

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.setdefault("schema_version", self._schema_version)


class CorrelationIdFilter(logging.Filter):  # pylint: disable=too-few-public-methods
    """Attach correlation and resolving-service metadata to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        record.service_id = get_service_id() or "-"
        return True


def bind_correlation_id(value: Optional[str]) -> Token[Optional[str]]:
    """Bind ``value`` to the correlation id context variable."""

    return _correlation_id.set(value)


def reset_correlation_id(token: Token[Optional[str]]) -> None:
    """Reset the correlation id context variable to a previous state."""

    _correlation_id.reset(token)


def get_correlation_id() -> Optional[str]:
    """Return the current correlation id if bound."""

    return _correlation_id.get()


def bind_service_id(value: Optional[str]) -> Token[Optional[str]]:
    """Bind the id of the service currently being resolved."""

    return _service_id.set(value)


def reset_service_id(token: Token[Optional[str]]) -> None:
    """Reset the resolving-service context variable."""

    _service_id.reset(token)


def get_service_id() -> Optional[str]:
    """Return the id of the service currently being resolved, if any."""

    return _service_id.get()


@contextmanager
def correlation_id_context(value: Optional[str]) -> Iterator[None]:
    """Context manager that temporarily binds a correlation id."""

    token = bind_correlation_id(value)
    try:
        yield
    finally:
        reset_correlation_id(token)


@contextmanager
def service_id_context(value: Optional[str]) -> Iterator[None]:
    """Context manager that temporarily binds the resolving service id."""

    token = bind_service_id(value)
    try:
        yield
    finally:
        reset_service_id(token)


def _ensure_handlers() -> None:
    global _handlers_installed  # pylint: disable=global-statement
    if _handlers_installed:
        return

    formatter = VersionedJsonFormatter(
        " ".join(
            [
                "%(asctime)s",
                "%(levelname)s",
                "%(name)s",
                "%(message)s",
                "%(correlation_id)s",
                "%(service_id)s",
            ]
        ),
        rename_fields={
            "asctime": "timestamp",
            "levelname": "level",
            "name": "logger",
            "correlation_id": "cid",
            "service_id": "service",
        },
        datefmt="%Y-%m-%d %H:%M:%S",
        json_ensure_ascii=False,
        schema_version=LOG_SCHEMA_VERSION,
    )
    correlation_filter = CorrelationIdFilter()
    root_logger = logging.getLogger()

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.addFilter(correlation_filter)
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if getattr(settings, "LOCATOR_LOG_TO_FILE", False):
        file_handler = RotatingFileHandler(
            _resolve_logs_dir() / LOG_FILE_NAME,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.addFilter(correlation_filter)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    _handlers_installed = True


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger with correlation id filtering."""

    logger = logging.getLogger(name)
    logger.setLevel(LOG_LEVEL)
    _ensure_handlers()
    return logger


__all__ = [
    "CorrelationIdFilter",
    "VersionedJsonFormatter",
    "bind_correlation_id",
    "bind_service_id",
    "reset_correlation_id",
    "reset_service_id",
    "get_correlation_id",
    "get_service_id",
    "correlation_id_context",
    "service_id_context",
    "get_logger",
    "LOG_SCHEMA_VERSION",
]
