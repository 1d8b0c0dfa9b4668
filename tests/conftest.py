"""Shared fixtures for the errata test suite."""

from __future__ import annotations

from typing import Any, Iterator

import pytest

from errata.core.exceptions.codes import ErrorCode
from errata.core.exceptions.messages import MessageTemplateStore
from errata.core.logging import logger


@pytest.fixture
def captured_logs() -> Iterator[list[dict[str, Any]]]:
    """Collect loguru records emitted while the test runs."""

    records: list[dict[str, Any]] = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(sink_id)


@pytest.fixture
def store() -> MessageTemplateStore:
    """Small template store with an English default and a Spanish table."""

    return MessageTemplateStore(
        {
            "en": {
                ErrorCode.GENERAL_ERROR: "Something went wrong. Please try again later.",
                ErrorCode.BAD_CONFIG: "Invalid configuration. File: {0}",
                ErrorCode.NOT_FOUND: "{0} was not found.",
            },
            "es": {
                ErrorCode.BAD_CONFIG: "Configuración no válida. Archivo: {0}",
            },
        },
        default_locale="en",
    )
