"""Tests for JSON-line logging with trace propagation."""

from __future__ import annotations

import io
import json
from pathlib import Path

from errata.core.exceptions.base import AppError
from errata.core.exceptions.codes import ErrorCode
from errata.core.exceptions.handler import BoundaryHandler
from errata.core.exceptions.messages import MessageTemplateStore
from errata.core.logging import LogConfig, StructuredLogger, configure_logging, current_trace_id, log_context


def _read_records(stream: io.StringIO) -> list[dict[str, object]]:
    lines = [line for line in stream.getvalue().splitlines() if line.strip()]
    return [json.loads(line) for line in lines]


def test_structured_log_contains_trace_and_context() -> None:
    buffer = io.StringIO()
    logger = StructuredLogger(LogConfig(console_stream=buffer))

    with logger.context(trace_id="trace-123", request_id="req-42"):
        logger.logger.bind(error_code="NOT_FOUND").info("lookup failed", order=42)

    records = _read_records(buffer)
    assert len(records) == 1
    record = records[0]
    assert record["trace_id"] == "trace-123"
    assert record["error_code"] == "NOT_FOUND"
    assert record["level"] == "INFO"
    assert record["context"]["request_id"] == "req-42"
    assert record["context"]["order"] == 42


def test_trace_id_propagates_within_context() -> None:
    buffer = io.StringIO()
    logger = StructuredLogger(LogConfig(console_stream=buffer))

    with log_context() as trace_id:
        logger.logger.info("first event")
        logger.logger.info("second event")

    logger.logger.info("outside context")

    records = _read_records(buffer)
    assert len(records) == 3
    assert records[0]["trace_id"] == records[1]["trace_id"] == trace_id
    assert records[2]["trace_id"] != trace_id


def test_level_filters_records() -> None:
    buffer = io.StringIO()
    logger = StructuredLogger(LogConfig(console_stream=buffer))
    logger.configure(level="WARNING")

    logger.logger.info("hidden")
    logger.logger.warning("shown")

    assert [record["message"] for record in _read_records(buffer)] == ["shown"]


def test_boundary_handler_writes_one_json_line_with_chain(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "errors.jsonl"
    buffer = io.StringIO()
    configure_logging("INFO", console_stream=buffer, file_output=True, file_path=str(log_file))
    handler = BoundaryHandler(MessageTemplateStore({"en": {"BAD_CONFIG": "Invalid configuration. File: {0}"}}))

    handler.handle(AppError(ErrorCode.BAD_CONFIG, "config.properties", cause=OSError("permission denied")))

    console_records = _read_records(buffer)
    assert len(console_records) == 1
    record = console_records[0]
    assert record["level"] == "ERROR"
    assert record["message"] == "Invalid configuration. File: config.properties"
    assert record["error_code"] == "BAD_CONFIG"
    assert record["locale"] == "en"
    assert record["context"]["cause_chain"] == [
        {"type": "AppError", "message": "BAD_CONFIG"},
        {"type": "OSError", "message": "permission denied"},
    ]
    assert "OSError: permission denied" in record["exception"]

    file_lines = log_file.read_text(encoding="utf-8").splitlines()
    assert len(file_lines) == 1
    assert json.loads(file_lines[0])["error_code"] == "BAD_CONFIG"


def test_current_trace_id_matches_active_context() -> None:
    with log_context(trace_id="abc123"):
        assert current_trace_id() == "abc123"

    outside = current_trace_id()
    assert len(outside) == 32
    assert outside == current_trace_id()
