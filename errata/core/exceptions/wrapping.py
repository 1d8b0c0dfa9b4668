"""Adapters that classify foreign failures at a subsystem boundary.

Place these where a subsystem's public contract meets the libraries it
depends on. Code above the boundary only ever sees :class:`AppError`.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from enum import Enum
from typing import Any, TypeVar

from errata.core.exceptions.base import AppError
from errata.core.exceptions.codes import ErrorCode

T = TypeVar("T")


def wrap(
    operation: Callable[[], T],
    code: Enum = ErrorCode.GENERAL_ERROR,
    *params: Any,
    developer_message: str | None = None,
) -> T:
    """Run ``operation`` and return its value.

    Any ``Exception`` it raises is re-raised as ``AppError(code, *params)``
    with the original failure as cause.

    Examples:
        >>> text = wrap(lambda: Path("config.properties").read_text(),
        ...             ErrorCode.BAD_CONFIG, "config.properties")
    """

    try:
        return operation()
    except Exception as failure:
        raise AppError(code, *params, developer_message=developer_message, cause=failure) from failure


@contextmanager
def wrapping(
    code: Enum = ErrorCode.GENERAL_ERROR,
    *params: Any,
    developer_message: str | None = None,
) -> Iterator[None]:
    """Context manager form of :func:`wrap`."""

    try:
        yield
    except Exception as failure:
        raise AppError(code, *params, developer_message=developer_message, cause=failure) from failure


def wrapped(
    code: Enum = ErrorCode.GENERAL_ERROR,
    *params: Any,
    developer_message: str | None = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator marking a function as a boundary classified with ``code``."""

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            return wrap(
                lambda: func(*args, **kwargs),
                code,
                *params,
                developer_message=developer_message,
            )

        return wrapper

    return decorator


__all__ = ["wrap", "wrapped", "wrapping"]
