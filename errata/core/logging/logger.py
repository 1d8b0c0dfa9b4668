"""JSON-line logging with trace propagation."""

from __future__ import annotations

import json
import os
import sys
import traceback
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import IO, Any, Iterator
from uuid import uuid4

from loguru import logger

from errata.core.logging.config import LogConfig

_TRACE_ID_VAR: ContextVar[str | None] = ContextVar("errata_trace_id", default=None)
_CONTEXT_VAR: ContextVar[dict[str, Any]] = ContextVar("errata_log_context", default={})

_TOP_LEVEL_KEYS = {"trace_id", "error_code", "locale"}


def _ensure_trace_id() -> str:
    trace_id = _TRACE_ID_VAR.get()
    if trace_id is None:
        trace_id = uuid4().hex
        _TRACE_ID_VAR.set(trace_id)
    return trace_id


def _patch_record(record: dict[str, Any]) -> None:
    extra = record["extra"]
    if not extra.get("trace_id"):
        extra["trace_id"] = _ensure_trace_id()
    for key, value in _CONTEXT_VAR.get().items():
        extra.setdefault(key, value)
    extra.setdefault("error_code", None)
    extra.setdefault("locale", None)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _format_payload(record: dict[str, Any]) -> dict[str, Any]:
    extra = record.get("extra", {})
    context = {key: value for key, value in extra.items() if key not in _TOP_LEVEL_KEYS}
    timestamp = record.get("time") or datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "timestamp": timestamp.isoformat(),
        "level": record["level"].name,
        "message": record.get("message"),
        "trace_id": extra.get("trace_id"),
        "error_code": extra.get("error_code"),
        "locale": extra.get("locale"),
    }
    if context:
        payload["context"] = context
    exception = record.get("exception")
    if exception is not None and exception.value is not None:
        payload["exception"] = "".join(
            traceback.format_exception(exception.type, exception.value, exception.traceback)
        )
    return payload


class _StreamJsonSink:
    """Write one JSON object per line to a text stream."""

    def __init__(self, stream: IO[str] | None = None) -> None:
        self._stream = stream

    def __call__(self, message: Any) -> None:
        # sys.stderr is looked up per write
        stream = self._stream if self._stream is not None else sys.stderr
        stream.write(json.dumps(_format_payload(message.record), default=_json_default))
        stream.write("\n")
        stream.flush()


class _FileJsonSink:
    """Append JSON lines to a file path."""

    def __init__(self, path: str) -> None:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._path = path

    def __call__(self, message: Any) -> None:
        with open(self._path, "a", encoding="utf-8") as file:
            file.write(json.dumps(_format_payload(message.record), default=_json_default))
            file.write("\n")


def _configure_from_config(config: LogConfig) -> None:
    handlers: list[dict[str, Any]] = []
    # no local variable values in tracebacks
    sink_options = {"level": config.level.upper(), "diagnose": False}
    if config.console_output:
        handlers.append({"sink": _StreamJsonSink(config.console_stream), **sink_options})
    if config.file_output and config.file_path:
        handlers.append({"sink": _FileJsonSink(config.file_path), **sink_options})

    configure_kwargs: dict[str, Any] = {"handlers": handlers, "patcher": _patch_record}
    if config.extra:
        configure_kwargs["extra"] = config.extra
    logger.configure(**configure_kwargs)


def configure_logging(level: str = "INFO", **kwargs: Any) -> None:
    """Replace the installed sinks with JSON sinks at ``level``."""

    _configure_from_config(LogConfig(level=level, **kwargs))


class StructuredLogger:
    """Configured loguru logger with trace-aware context helpers."""

    def __init__(self, config: LogConfig | None = None) -> None:
        self.config = config or LogConfig()
        _configure_from_config(self.config)
        self.logger = logger

    def configure(self, **kwargs: Any) -> None:
        self.config = self.config.model_copy(update=kwargs)
        _configure_from_config(self.config)

    @contextmanager
    def context(self, *, trace_id: str | None = None, **extra: Any) -> Iterator[str]:
        with log_context(trace_id=trace_id, **extra) as active_trace:
            yield active_trace


@contextmanager
def log_context(*, trace_id: str | None = None, **extra: Any) -> Iterator[str]:
    """Attach a trace id and extra fields to every record logged inside."""

    context_token = _CONTEXT_VAR.set({**_CONTEXT_VAR.get(), **extra})
    active_trace = trace_id or uuid4().hex
    trace_token = _TRACE_ID_VAR.set(active_trace)
    try:
        yield active_trace
    finally:
        _TRACE_ID_VAR.reset(trace_token)
        _CONTEXT_VAR.reset(context_token)


def current_trace_id() -> str:
    return _ensure_trace_id()


configure_logging()


__all__ = [
    "StructuredLogger",
    "configure_logging",
    "current_trace_id",
    "log_context",
    "logger",
]
