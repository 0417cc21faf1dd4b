"""
object-mapper — opt-in structured logging.

File: src/object_mapper/observability/logging.py
Last updated: 2026-10-19

Purpose
- Route the library's ``object_mapper.*`` loggers to JSON-lines sinks (stderr
  and/or a file) for applications that want machine-readable diagnostics.

Functional requirements
- Nothing is configured at import time; ``setup_logging`` is explicit.
- A new setup replaces the handlers of the previous one.
- Extra ``logging`` fields are emitted under ``fields``; values that are not
  JSON-representable are written as their ``repr``.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Final

from object_mapper.constants import LOGGER_NAME
from object_mapper.core.json_codec import JSONValue, dump_json, is_json_safe

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRIBUTES: Final[frozenset[str]] = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", None, None).__dict__
) | {"message", "asctime"}

_active_lock = threading.Lock()
_active: LoggingHandle | None = None


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Where and how verbosely the library logs."""

    level: int | str = "WARNING"
    logger_name: str = LOGGER_NAME
    log_path: Path | str | None = None
    log_to_stderr: bool = True


class _JsonLineFormatter(logging.Formatter):
    """One sorted-key JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        event: dict[str, JSONValue] = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        fields = {
            key: value if is_json_safe(value) else repr(value)
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRIBUTES and not key.startswith("_")
        }
        if fields:
            event["fields"] = fields
        if record.exc_info is not None:
            event["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            event["stack"] = self.formatStack(record.stack_info)
        return dump_json(event)


class LoggingHandle:
    """Handlers installed by one :func:`setup_logging` call."""

    def __init__(
        self,
        logger: logging.Logger,
        handlers: tuple[logging.Handler, ...],
        log_path: Path | None = None,
    ) -> None:
        self.logger = logger
        self.handlers = handlers
        self.log_path = log_path
        self._closed = False
        self._close_lock = threading.Lock()

    @property
    def is_shutdown(self) -> bool:
        return self._closed

    def flush(self) -> None:
        for handler in self.handlers:
            handler.flush()

    def shutdown(self) -> None:
        """Detach and close the handlers; later calls do nothing."""

        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        for handler in self.handlers:
            self.logger.removeHandler(handler)
            handler.close()
        self.logger.propagate = True


def setup_logging(config: LoggingConfig | None = None) -> LoggingHandle:
    """Attach JSON-lines handlers to the library logger and return their handle."""

    global _active

    config = config or LoggingConfig()
    level = _parse_log_level(config.level)
    if not isinstance(config.logger_name, str) or not config.logger_name.strip():
        raise ValueError("logger_name must be a non-empty string")

    shutdown_logging()

    handlers: list[logging.Handler] = []
    log_path = Path(config.log_path) if config.log_path is not None else None
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    if config.log_to_stderr:
        handlers.append(logging.StreamHandler())

    logger = logging.getLogger(config.logger_name.strip())
    logger.setLevel(level)
    logger.propagate = False
    formatter = _JsonLineFormatter()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    handle = LoggingHandle(logger, tuple(handlers), log_path)
    with _active_lock:
        _active = handle
    return handle


def shutdown_logging(handle: LoggingHandle | None = None) -> None:
    """Close ``handle``, or the active setup when none is given."""

    global _active

    with _active_lock:
        target = handle if handle is not None else _active
        if target is None:
            return
        if _active is target:
            _active = None
    target.shutdown()


def get_active_logging_handle() -> LoggingHandle | None:
    with _active_lock:
        return _active


def _parse_log_level(value: int | str) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"unsupported logging level {value!r}")
    return level


__all__ = [
    "LoggingConfig",
    "LoggingHandle",
    "get_active_logging_handle",
    "setup_logging",
    "shutdown_logging",
]
