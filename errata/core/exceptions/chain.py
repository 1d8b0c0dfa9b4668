"""Cause chain traversal."""

from __future__ import annotations

from typing import Iterator

from errata.core.exceptions.base import AppError


def _next_cause(failure: BaseException) -> BaseException | None:
    if isinstance(failure, AppError):
        return failure.cause
    if failure.__cause__ is not None:
        return failure.__cause__
    if not failure.__suppress_context__:
        return failure.__context__
    return None


def iter_cause_chain(failure: BaseException) -> Iterator[BaseException]:
    """Yield ``failure`` and its causes from outermost to root.

    Each failure is yielded at most once, so a cyclic chain built by
    foreign code still terminates.
    """

    seen: set[int] = set()
    current: BaseException | None = failure
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = _next_cause(current)


def describe_failure(failure: BaseException) -> str:
    """``str(failure)``, or a placeholder when the failure cannot render itself."""

    try:
        return str(failure)
    except Exception:
        return f"<unprintable {type(failure).__name__}>"


def describe_cause_chain(failure: BaseException) -> list[dict[str, str]]:
    """Return ``{"type", "message"}`` pairs from outermost to root."""

    return [{"type": type(item).__name__, "message": describe_failure(item)} for item in iter_cause_chain(failure)]


__all__ = ["describe_cause_chain", "describe_failure", "iter_cause_chain"]
