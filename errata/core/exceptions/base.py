"""Core exception classes for errata."""

from __future__ import annotations

from enum import Enum
from typing import Any, NamedTuple, Sequence

from errata.core.exceptions.codes import ErrorCode, code_value


class ErrataError(Exception):
    """Base class for developer-facing errors raised by errata itself."""


class TemplateError(ErrataError):
    """A message template could not be produced."""


class TemplateNotFoundError(TemplateError):
    """No template exists for a code in the requested locale or its fallbacks."""

    def __init__(self, code: str, locale: str):
        super().__init__(f"No template for {code!r} in locale {locale!r} or its fallbacks")
        self.code = code
        self.locale = locale


class MissingTemplateParameterError(TemplateError):
    """A template references a placeholder the caller supplied no param for."""

    def __init__(self, template: str, index: int, supplied: int):
        super().__init__(
            f"Template {template!r} references {{{index}}} but only {supplied} param(s) were supplied"
        )
        self.template = template
        self.index = index
        self.supplied = supplied


class MissingTemplate(NamedTuple):
    """A (code, locale) pair lacking a resolvable template."""

    code: str
    locale: str


class StartupError(ErrataError):
    """Registry validation failed; the process must not start serving."""

    def __init__(self, missing: Sequence[MissingTemplate]):
        self.missing = tuple(missing)
        pairs = ", ".join(f"{item.code}@{item.locale}" for item in self.missing)
        super().__init__(f"Error codes without a resolvable template: {pairs}")


class AppError(Exception):
    """Classified application error.

    ``developer_message`` is for logs only and never reaches end users.
    ``params`` are interpolated into the code's message template in order.
    Instances are immutable once constructed.
    """

    code: Enum
    developer_message: str | None
    params: tuple[Any, ...]
    cause: BaseException | None

    def __init__(
        self,
        code: Enum,
        *params: Any,
        developer_message: str | None = None,
        cause: BaseException | None = None,
    ):
        key = code_value(code)
        super().__init__(developer_message or key)
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "developer_message", developer_message)
        object.__setattr__(self, "params", tuple(params))
        object.__setattr__(self, "cause", cause)
        if cause is not None:
            self.__cause__ = cause
        object.__setattr__(self, "_sealed", True)

    def __setattr__(self, name: str, value: Any) -> None:
        # interpreter-managed slots (__traceback__, __cause__, __notes__) stay writable
        if name.startswith("__") and name.endswith("__"):
            object.__setattr__(self, name, value)
            return
        if getattr(self, "_sealed", False):
            raise AttributeError(f"{type(self).__name__} is immutable")
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_failure(
        cls,
        failure: BaseException,
        code: Enum = ErrorCode.GENERAL_ERROR,
        *params: Any,
        developer_message: str | None = None,
    ) -> AppError:
        """Classify ``failure``, keeping it as the cause."""

        return cls(code, *params, developer_message=developer_message, cause=failure)

    @property
    def code_value(self) -> str:
        return code_value(self.code)

    @property
    def root_cause(self) -> BaseException:
        """Innermost failure of the cause chain (``self`` when there is none)."""

        from errata.core.exceptions.chain import iter_cause_chain

        *_, root = iter_cause_chain(self)
        return root

    def __str__(self) -> str:
        if self.developer_message:
            return f"{self.code_value}: {self.developer_message}"
        return self.code_value

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code_value!r}, params={self.params!r}, "
            f"developer_message={self.developer_message!r}, cause={type(self.cause).__name__ if self.cause else None})"
        )

    def __reduce__(self) -> tuple[Any, ...]:
        return (_restore_app_error, (type(self), self.code, self.params, self.developer_message, self.cause))


def _restore_app_error(
    cls: type[AppError],
    code: Enum,
    params: tuple[Any, ...],
    developer_message: str | None,
    cause: BaseException | None,
) -> AppError:
    return cls(code, *params, developer_message=developer_message, cause=cause)
