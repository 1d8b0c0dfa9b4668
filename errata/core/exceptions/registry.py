"""Startup registry of error codes."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator

from errata.core.exceptions.base import MissingTemplate, StartupError
from errata.core.exceptions.codes import ErrorCode, code_value
from errata.core.exceptions.messages import MessageTemplateStore, normalize_locale


class ErrorCodeRegistry:
    """Closed set of error codes assembled at startup.

    The registry seals itself once :meth:`require_valid` succeeds; after that
    it is read-only and safe to share between threads.
    """

    def __init__(self, codes: Iterable[Enum] = ()):
        self._codes: dict[str, Enum] = {}
        self._sealed = False
        self.register(ErrorCode.GENERAL_ERROR)
        self.register_all(codes)

    def register(self, code: Enum) -> None:
        if self._sealed:
            raise RuntimeError("Error code registry is sealed; register codes before validation")
        key = code_value(code)
        existing = self._codes.get(key)
        if existing is not None and existing is not code:
            raise ValueError(f"Error code {key!r} is already registered by {type(existing).__name__}")
        self._codes[key] = code

    def register_all(self, codes: Iterable[Enum]) -> None:
        for code in codes:
            self.register(code)

    @property
    def codes(self) -> tuple[Enum, ...]:
        return tuple(self._codes.values())

    @property
    def sealed(self) -> bool:
        return self._sealed

    def __contains__(self, code: object) -> bool:
        return isinstance(code, Enum) and self._codes.get(code_value(code)) is code

    def __iter__(self) -> Iterator[Enum]:
        return iter(self.codes)

    def __len__(self) -> int:
        return len(self._codes)

    def validate(self, store: MessageTemplateStore, locales: Iterable[str] = ()) -> list[MissingTemplate]:
        """Return every (code, locale) pair without a resolvable template.

        The store's default locale is always checked, even when absent from
        ``locales``.
        """

        checked = [store.default_locale]
        for locale in locales:
            normalized = normalize_locale(locale)
            if normalized not in checked:
                checked.append(normalized)

        missing: list[MissingTemplate] = []
        for code in self._codes.values():
            for locale in checked:
                if not store.has_template(code, locale):
                    missing.append(MissingTemplate(code_value(code), locale))
        return missing

    def require_valid(self, store: MessageTemplateStore, locales: Iterable[str] = ()) -> None:
        """Validate and seal the registry.

        Raises:
            StartupError: at least one pair is missing a template.
        """

        missing = self.validate(store, locales)
        if missing:
            raise StartupError(missing)
        self._sealed = True


__all__ = ["ErrorCodeRegistry"]
