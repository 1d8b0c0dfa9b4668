"""Per-item outcomes for batch operations.

A batch never stops at the first failing item: every input gets an
:class:`Outcome` in the slot matching its position.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar, overload

from errata.core.exceptions.base import AppError
from errata.core.exceptions.codes import ErrorCode

ItemT = TypeVar("ItemT")
ResultT = TypeVar("ResultT")
T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def map(self, func: Callable[[T], U]) -> Success[U]:
        return Success(func(self.value))


@dataclass(frozen=True, slots=True)
class Failure:
    error: AppError

    @property
    def is_success(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise self.error

    def map(self, func: Callable[[Any], Any]) -> Failure:
        return self


Outcome = Success[T] | Failure


@dataclass(frozen=True, slots=True)
class BatchResult(Generic[T]):
    """Outcomes index-aligned with the batch input."""

    outcomes: tuple[Outcome[T], ...]

    def __len__(self) -> int:
        return len(self.outcomes)

    def __iter__(self) -> Iterator[Outcome[T]]:
        return iter(self.outcomes)

    @overload
    def __getitem__(self, index: int) -> Outcome[T]: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Outcome[T], ...]: ...

    def __getitem__(self, index: int | slice) -> Outcome[T] | tuple[Outcome[T], ...]:
        return self.outcomes[index]

    @property
    def success_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.is_success)

    @property
    def failure_count(self) -> int:
        return len(self.outcomes) - self.success_count

    def success_ratio(self) -> float:
        """Successes divided by total; ``0.0`` for an empty batch."""

        if not self.outcomes:
            return 0.0
        return self.success_count / len(self.outcomes)

    def successes_only(self) -> list[T]:
        return [outcome.value for outcome in self.outcomes if isinstance(outcome, Success)]

    def failures_only(self) -> list[AppError]:
        return [outcome.error for outcome in self.outcomes if isinstance(outcome, Failure)]

    def failed_indices(self) -> list[int]:
        return [index for index, outcome in enumerate(self.outcomes) if isinstance(outcome, Failure)]

    def require_success_ratio(self, min_ratio: float) -> BatchResult[T]:
        """Return ``self`` when enough items succeeded.

        Raises:
            AppError: ``BATCH_THRESHOLD_NOT_MET`` with the achieved and the
                required ratio as params.
        """

        if not 0.0 <= min_ratio <= 1.0:
            raise ValueError(f"min_ratio must be within [0, 1], got {min_ratio}")
        ratio = self.success_ratio()
        if ratio < min_ratio:
            raise AppError(
                ErrorCode.BATCH_THRESHOLD_NOT_MET,
                f"{ratio:.0%}",
                f"{min_ratio:.0%}",
                developer_message=f"{self.failure_count} of {len(self)} items failed",
            )
        return self


def _as_app_error(failure: Exception, code: Enum) -> AppError:
    if isinstance(failure, AppError):
        return failure
    return AppError.from_failure(failure, code)


def _run_one(item: ItemT, transform: Callable[[ItemT], ResultT], code: Enum) -> Outcome[ResultT]:
    try:
        return Success(transform(item))
    except Exception as failure:
        return Failure(_as_app_error(failure, code))


def _filled(slots: list[Outcome[ResultT] | None]) -> tuple[Outcome[ResultT], ...]:
    empty = [index for index, slot in enumerate(slots) if slot is None]
    if empty:
        raise RuntimeError(f"Batch slots left without an outcome: {empty}")
    return tuple(slots)  # type: ignore[arg-type]


def map_collecting_failures(
    inputs: Iterable[ItemT],
    transform: Callable[[ItemT], ResultT],
    code: Enum = ErrorCode.GENERAL_ERROR,
) -> BatchResult[ResultT]:
    """Apply ``transform`` to every input in order.

    Failures are captured as :class:`Failure` and processing moves on to the
    next item. Unclassified failures become ``AppError(code)`` with the
    original as cause.

    Examples:
        >>> result = map_collecting_failures(["1", "x", "3"], int)
        >>> result.success_ratio()
        0.6666666666666666
    """

    return BatchResult(tuple(_run_one(item, transform, code) for item in inputs))


def map_collecting_failures_concurrently(
    inputs: Iterable[ItemT],
    transform: Callable[[ItemT], ResultT],
    code: Enum = ErrorCode.GENERAL_ERROR,
    max_workers: int | None = None,
) -> BatchResult[ResultT]:
    """Thread-pool variant of :func:`map_collecting_failures`.

    Each worker writes only its own slot, so output order follows input order
    whatever the completion order.
    """

    items: Sequence[ItemT] = list(inputs)
    slots: list[Outcome[ResultT] | None] = [None] * len(items)

    def _fill(index: int) -> None:
        slots[index] = _run_one(items[index], transform, code)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        # _run_one never raises, result() only surfaces interpreter failures
        for future in [executor.submit(_fill, index) for index in range(len(items))]:
            future.result()

    return BatchResult(_filled(slots))


async def amap_collecting_failures(
    inputs: Iterable[ItemT],
    transform: Callable[[ItemT], Awaitable[ResultT]],
    code: Enum = ErrorCode.GENERAL_ERROR,
    concurrent_limit: int = 10,
) -> BatchResult[ResultT]:
    """Asyncio variant running at most ``concurrent_limit`` transforms at once."""

    if concurrent_limit < 1:
        raise ValueError(f"concurrent_limit must be at least 1, got {concurrent_limit}")
    semaphore = asyncio.Semaphore(concurrent_limit)

    async def _run(item: ItemT) -> Outcome[ResultT]:
        async with semaphore:
            try:
                return Success(await transform(item))
            except Exception as failure:
                return Failure(_as_app_error(failure, code))

    outcomes = await asyncio.gather(*(_run(item) for item in inputs))
    return BatchResult(tuple(outcomes))


__all__ = [
    "BatchResult",
    "Failure",
    "Outcome",
    "Success",
    "amap_collecting_failures",
    "map_collecting_failures",
    "map_collecting_failures_concurrently",
]
