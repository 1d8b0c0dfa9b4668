"""Startup assembly: registry validation and handler wiring."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from errata.core.config import ErrataSettings
from errata.core.exceptions.base import MissingTemplate
from errata.core.exceptions.codes import ErrorCode
from errata.core.exceptions.handler import BoundaryHandler, ErrorTracker
from errata.core.exceptions.messages import MessageTemplateStore
from errata.core.exceptions.registry import ErrorCodeRegistry
from errata.core.logging import configure_logging, logger


@dataclass(frozen=True)
class ErrataRuntime:
    """Validated, read-only error reporting components shared by all requests."""

    registry: ErrorCodeRegistry
    store: MessageTemplateStore
    handler: BoundaryHandler
    tracker: ErrorTracker
    locales: tuple[str, ...]


def validate_registry(
    registry: ErrorCodeRegistry,
    store: MessageTemplateStore,
    locales: Iterable[str] = (),
) -> list[MissingTemplate]:
    """Pairs lacking a template; an empty list means the process may serve."""

    return registry.validate(store, locales)


def build_runtime(
    settings: ErrataSettings | None = None,
    *,
    codes: Iterable[Enum] = tuple(ErrorCode),
    store: MessageTemplateStore | None = None,
    configure_logs: bool = True,
) -> ErrataRuntime:
    """Assemble and validate the runtime.

    Raises:
        StartupError: some code has no template resolvable in a configured
            locale. The caller must not begin serving.
    """

    settings = settings or ErrataSettings()
    if configure_logs:
        configure_logging(
            settings.logging.level,
            console_output=settings.logging.console,
            file_output=settings.logging.file_path is not None,
            file_path=str(settings.logging.file_path) if settings.logging.file_path else None,
        )

    if store is None:
        if settings.templates_path is None:
            store = MessageTemplateStore.builtin()
        else:
            store = MessageTemplateStore.from_toml(settings.templates_path, default_locale=settings.default_locale)

    registry = ErrorCodeRegistry(codes)
    locales = tuple(dict.fromkeys([store.default_locale, *settings.locales]))
    registry.require_valid(store, locales)

    tracker = ErrorTracker()
    handler = BoundaryHandler(
        store,
        generic_message=settings.generic_message,
        tracker=tracker,
        expose_codes=settings.expose_codes,
    )
    logger.bind(locales=list(locales)).info(f"Error registry validated with {len(registry)} codes")
    return ErrataRuntime(registry=registry, store=store, handler=handler, tracker=tracker, locales=locales)


__all__ = ["ErrataRuntime", "build_runtime", "validate_registry"]
