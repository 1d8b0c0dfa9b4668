"""Structured logging built on loguru."""

from errata.core.logging.config import LogConfig
from errata.core.logging.logger import (
    StructuredLogger,
    configure_logging,
    current_trace_id,
    log_context,
    logger,
)

__all__ = [
    "LogConfig",
    "StructuredLogger",
    "configure_logging",
    "current_trace_id",
    "log_context",
    "logger",
]
