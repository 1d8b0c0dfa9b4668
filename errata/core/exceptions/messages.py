"""Localized error message templates."""

from __future__ import annotations

import re
from enum import Enum
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Sequence

import toml

from errata.core.exceptions.base import MissingTemplateParameterError, TemplateNotFoundError
from errata.core.exceptions.codes import code_value

DEFAULT_LOCALE = "en"

_TOKEN = re.compile(r"\{\{|\}\}|\{(\d+)\}")


def normalize_locale(locale: str) -> str:
    """``pt-BR`` and ``pt_br`` both become ``pt_BR``."""

    parts = locale.strip().replace("-", "_").split("_")
    language = parts[0].lower()
    if len(parts) == 1:
        return language
    return "_".join([language, parts[1].upper(), *parts[2:]])


def _template_key(code: Enum | str) -> str:
    if isinstance(code, Enum):
        return code_value(code)
    if isinstance(code, str):
        return code
    raise TypeError(f"Unsupported template key type: {type(code).__name__}")


def placeholder_count(template: str) -> int:
    """Highest placeholder index referenced by ``template`` plus one."""

    indices = [int(match.group(1)) for match in _TOKEN.finditer(template) if match.group(1) is not None]
    return max(indices) + 1 if indices else 0


def interpolate(template: str, params: Sequence[Any]) -> str:
    """Substitute ``{n}`` placeholders with ``str(params[n])``.

    Params past the highest placeholder are ignored. ``{{`` and ``}}`` render
    as literal braces.

    Raises:
        MissingTemplateParameterError: a placeholder has no matching param.
    """

    def _replace(match: re.Match[str]) -> str:
        token = match.group(0)
        if token == "{{":
            return "{"
        if token == "}}":
            return "}"
        index = int(match.group(1))
        if index >= len(params):
            raise MissingTemplateParameterError(template, index, len(params))
        return str(params[index])

    return _TOKEN.sub(_replace, template)


class MessageTemplateStore:
    """Read-only mapping from (code, locale) to a message template.

    Lookups fall back from ``pt_BR`` to ``pt`` and then to the default locale.
    """

    def __init__(
        self,
        templates: Mapping[str, Mapping[Enum | str, str]],
        default_locale: str = DEFAULT_LOCALE,
    ):
        self.default_locale = normalize_locale(default_locale)
        frozen: dict[str, Mapping[str, str]] = {}
        for locale, entries in templates.items():
            table = dict(frozen.get(normalize_locale(locale), {}))
            table.update({_template_key(code): str(template) for code, template in entries.items()})
            frozen[normalize_locale(locale)] = MappingProxyType(table)
        self._templates: Mapping[str, Mapping[str, str]] = MappingProxyType(frozen)

    @classmethod
    def from_toml(cls, path: str | Path, default_locale: str | None = None) -> MessageTemplateStore:
        """Load templates from a TOML document with one table per locale.

        A top-level ``default_locale`` string is honoured unless
        ``default_locale`` is passed explicitly.
        """

        document = toml.load(Path(path))
        file_default = document.pop("default_locale", None)
        tables = {locale: entries for locale, entries in document.items() if isinstance(entries, dict)}
        return cls(tables, default_locale=default_locale or file_default or DEFAULT_LOCALE)

    @classmethod
    def builtin(cls) -> MessageTemplateStore:
        """Templates shipped for the built-in :class:`ErrorCode` members."""

        with resources.as_file(resources.files("errata.data") / "messages.toml") as path:
            return cls.from_toml(path)

    @property
    def locales(self) -> tuple[str, ...]:
        return tuple(self._templates)

    def candidate_locales(self, locale: str | None = None) -> list[str]:
        """Locales consulted for ``locale``, most specific first."""

        candidates: list[str] = []
        if locale:
            normalized = normalize_locale(locale)
            candidates.append(normalized)
            language = normalized.split("_", 1)[0]
            if language not in candidates:
                candidates.append(language)
        if self.default_locale not in candidates:
            candidates.append(self.default_locale)
        return candidates

    def _lookup(self, key: str, locale: str | None) -> str | None:
        for candidate in self.candidate_locales(locale):
            template = self._templates.get(candidate, {}).get(key)
            if template and template.strip():
                return template
        return None

    def has_template(self, code: Enum | str, locale: str | None = None) -> bool:
        return self._lookup(_template_key(code), locale) is not None

    def resolve(self, code: Enum | str, locale: str | None = None) -> str:
        """Return the template for ``code`` in ``locale`` or a fallback locale.

        Raises:
            TemplateNotFoundError: no locale in the fallback chain has one.
        """

        key = _template_key(code)
        template = self._lookup(key, locale)
        if template is None:
            raise TemplateNotFoundError(key, normalize_locale(locale) if locale else self.default_locale)
        return template

    def render(self, code: Enum | str, locale: str | None = None, params: Sequence[Any] = ()) -> str:
        return interpolate(self.resolve(code, locale), params)


__all__ = [
    "DEFAULT_LOCALE",
    "MessageTemplateStore",
    "interpolate",
    "normalize_locale",
    "placeholder_count",
]
