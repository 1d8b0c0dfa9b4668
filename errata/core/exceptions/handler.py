"""Boundary error handling and reporting."""

from __future__ import annotations

import functools
import threading
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

from errata.core.exceptions.base import AppError
from errata.core.exceptions.chain import describe_cause_chain, describe_failure
from errata.core.exceptions.messages import MessageTemplateStore
from errata.core.logging import logger

T = TypeVar("T")

GENERIC_FALLBACK_MESSAGE = "An unexpected error occurred. Please try again later."


class ExternalResponse(BaseModel):
    """What the caller may show to an end user."""

    model_config = ConfigDict(frozen=True)

    user_message: str
    internal_code: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump()


class ErrorTracker:
    """Counts failures handled per error code."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.error_counts: dict[str, int] = {}
        self.last_errors: dict[str, str] = {}

    def record(self, error_code: str) -> None:
        with self._lock:
            self.error_counts[error_code] = self.error_counts.get(error_code, 0) + 1
            self.last_errors[error_code] = datetime.now(UTC).isoformat()

    def stats(self) -> dict[str, Any]:
        with self._lock:
            return {
                "error_counts": dict(self.error_counts),
                "last_errors": dict(self.last_errors),
                "total_errors": sum(self.error_counts.values()),
            }

    def reset(self) -> None:
        with self._lock:
            self.error_counts.clear()
            self.last_errors.clear()


class BoundaryHandler:
    """Terminal catch point for a call graph.

    Classifies the failure, renders the localized user message, writes a
    single ERROR record carrying the cause chain and returns an
    :class:`ExternalResponse` that never contains developer details.
    Components upstream must not log a failure they re-raise.
    """

    def __init__(
        self,
        store: MessageTemplateStore,
        *,
        generic_message: str = GENERIC_FALLBACK_MESSAGE,
        tracker: ErrorTracker | None = None,
        expose_codes: bool = True,
    ):
        self.store = store
        self.generic_message = generic_message
        self.tracker = tracker
        self.expose_codes = expose_codes

    def classify(self, failure: BaseException) -> AppError:
        if isinstance(failure, AppError):
            return failure
        return AppError.from_failure(failure)

    def handle(self, failure: BaseException, locale: str | None = None) -> ExternalResponse:
        """Report ``failure`` and build the safe response. Never raises."""

        error = self.classify(failure)
        resolution_failure: Exception | None = None
        try:
            user_message = self.store.render(error.code, locale, error.params)
        except Exception as exc:
            # startup validation should make this unreachable
            resolution_failure = exc
            user_message = self.generic_message

        extra: dict[str, Any] = {
            "error_code": error.code_value,
            "locale": locale or self.store.default_locale,
            "cause_chain": describe_cause_chain(error),
        }
        if resolution_failure is not None:
            failure_name = type(resolution_failure).__name__
            extra["resolution_error"] = f"{failure_name}: {describe_failure(resolution_failure)}"
        logger.bind(**extra).opt(exception=failure).error(user_message)

        if self.tracker is not None:
            self.tracker.record(error.code_value)

        return ExternalResponse(
            user_message=user_message,
            internal_code=error.code_value if self.expose_codes else None,
        )

    def boundary(self, locale: str | None = None) -> Callable[[Callable[..., T]], Callable[..., T | ExternalResponse]]:
        """Decorator returning an :class:`ExternalResponse` instead of raising."""

        def decorator(func: Callable[..., T]) -> Callable[..., T | ExternalResponse]:
            @functools.wraps(func)
            def wrapper(*args: Any, **kwargs: Any) -> T | ExternalResponse:
                try:
                    return func(*args, **kwargs)
                except Exception as failure:
                    return self.handle(failure, locale)

            return wrapper

        return decorator


__all__ = ["GENERIC_FALLBACK_MESSAGE", "BoundaryHandler", "ErrorTracker", "ExternalResponse"]
