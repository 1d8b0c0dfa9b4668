"""
Configuration management for errata.

Settings come from a TOML file and ``ERRATA_``-prefixed environment
variables; environment values win.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import toml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from errata.core.exceptions.handler import GENERIC_FALLBACK_MESSAGE
from errata.core.exceptions.messages import DEFAULT_LOCALE, normalize_locale


class LoggingSettings(BaseModel):
    """Configuration for logging."""

    level: str = Field("INFO", description="Log level")
    file_path: Path | None = Field(None, description="Optional JSON-lines log file")
    console: bool = Field(True, description="Write JSON lines to stderr")


class ErrataSettings(BaseSettings):
    """Main errata configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ERRATA_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    default_locale: str = Field(DEFAULT_LOCALE, description="Locale every code must have a template in")
    locales: list[str] = Field(default_factory=list, description="Additional locales served")
    templates_path: Path | None = Field(None, description="TOML file with message templates")
    generic_message: str = Field(
        GENERIC_FALLBACK_MESSAGE,
        description="Locale-independent message used when rendering fails",
    )
    expose_codes: bool = Field(True, description="Include the error code in external responses")
    logging: LoggingSettings = Field(default_factory=lambda: LoggingSettings())

    @field_validator("default_locale")
    @classmethod
    def _normalize_default(cls, value: str) -> str:
        return normalize_locale(value)

    @field_validator("locales")
    @classmethod
    def _normalize_locales(cls, value: list[str]) -> list[str]:
        return [normalize_locale(locale) for locale in value]


def _deep_merge(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in updates.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_settings(path: str | Path | None = None, **overrides: Any) -> ErrataSettings:
    """Build settings from an optional TOML file plus environment overrides.

    The file's ``[errata]`` table is used when present, otherwise the whole
    document. Nested tables are merged key by key, so an environment value
    replaces only the setting it names. Keyword ``overrides`` take precedence
    over both.
    """

    file_values: dict[str, Any] = {}
    if path is not None:
        document = toml.load(Path(path))
        file_values = document.get("errata", document)

    settings = ErrataSettings()
    # explicitly set environment values override the file
    env_values = settings.model_dump(exclude_unset=True)
    merged = _deep_merge(_deep_merge(file_values, env_values), overrides)
    return ErrataSettings.model_validate(merged) if merged else settings


__all__ = ["ErrataSettings", "LoggingSettings", "load_settings"]
