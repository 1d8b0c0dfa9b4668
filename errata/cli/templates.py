"""Message template CLI commands."""

from __future__ import annotations

import importlib
from enum import Enum
from pathlib import Path

import toml
import typer

from errata.core.bootstrap import validate_registry
from errata.core.exceptions.base import TemplateError
from errata.core.exceptions.codes import ErrorCode, code_value
from errata.core.exceptions.messages import MessageTemplateStore, normalize_locale
from errata.core.exceptions.registry import ErrorCodeRegistry

from .constants import VALIDATION_EXIT_CODE
from .utils import emit_error, open_output

templates_app = typer.Typer(help="Message template utilities.")

VALIDATE_COLUMNS = ["code", "locale", "status"]
RENDER_COLUMNS = ["code", "locale", "message"]


def register(app: typer.Typer) -> None:
    """Register template commands on the root CLI application."""

    app.add_typer(templates_app, name="templates", help="Validate and render message templates")


def load_codes(spec: str | None) -> list[Enum]:
    """Built-in codes plus the members of ``module:EnumClass`` when given."""

    codes: list[Enum] = list(ErrorCode)
    if not spec:
        return codes
    module_name, _, attribute = spec.partition(":")
    if not module_name or not attribute:
        raise typer.BadParameter("Expected 'module:EnumClass'", param_hint="--codes")
    try:
        enum_class = getattr(importlib.import_module(module_name), attribute)
    except (ImportError, AttributeError) as exc:
        raise typer.BadParameter(f"Cannot load '{spec}': {exc}", param_hint="--codes") from exc
    if not (isinstance(enum_class, type) and issubclass(enum_class, Enum)):
        raise typer.BadParameter(f"'{spec}' is not an Enum class", param_hint="--codes")
    codes.extend(enum_class)
    return codes


def _load_store(path: Path, default_locale: str | None) -> MessageTemplateStore:
    try:
        return MessageTemplateStore.from_toml(path, default_locale=default_locale)
    except (OSError, toml.TomlDecodeError) as exc:
        emit_error(f"Unable to load templates from '{path}': {exc}", "TEMPLATE_FILE_ERROR")
        raise typer.Exit(code=VALIDATION_EXIT_CODE) from exc


def _build_registry(spec: str | None) -> ErrorCodeRegistry:
    selected = load_codes(spec)
    try:
        return ErrorCodeRegistry(selected)
    except ValueError as exc:
        emit_error(str(exc), "DUPLICATE_ERROR_CODE", details={"codes": spec})
        raise typer.BadParameter(str(exc), param_hint="--codes") from exc


@templates_app.command("validate")
def validate_command(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="TOML file with one table per locale."),
    locale: list[str] | None = typer.Option(None, "--locale", "-l", help="Locale that must resolve (repeatable)."),
    default_locale: str | None = typer.Option(None, "--default-locale", help="Override the file's default locale."),
    codes: str | None = typer.Option(None, "--codes", help="Application codes as 'module:EnumClass'."),
) -> None:
    """Check that every code resolves a template in every locale."""

    store = _load_store(path, default_locale)
    registry = _build_registry(codes)
    requested = [*store.locales, *(locale or [])]
    missing = set(validate_registry(registry, store, requested))

    checked = list(dict.fromkeys([store.default_locale, *(normalize_locale(item) for item in requested)]))
    rows = [
        {
            "code": code_value(code),
            "locale": item,
            "status": "missing" if (code_value(code), item) in missing else "ok",
        }
        for code in registry
        for item in checked
    ]

    with open_output(ctx) as (render, stream):
        render(rows, VALIDATE_COLUMNS, stream)

    if missing:
        emit_error(
            f"{len(missing)} code/locale pair(s) lack a template",
            "MISSING_TEMPLATES",
            details={"missing": ", ".join(sorted(f"{code}@{item}" for code, item in missing))},
        )
        raise typer.Exit(code=VALIDATION_EXIT_CODE)


@templates_app.command("render")
def render_command(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="TOML file with one table per locale."),
    code: str = typer.Argument(..., help="Error code to render."),
    locale: str | None = typer.Option(None, "--locale", "-l", help="Locale to render in."),
    param: list[str] | None = typer.Option(None, "--param", "-p", help="Positional parameter (repeatable)."),
) -> None:
    """Render the message a user would see for ``code``."""

    store = _load_store(path, None)
    try:
        message = store.render(code, locale, param or [])
    except TemplateError as exc:
        emit_error(str(exc), "TEMPLATE_ERROR", details={"code": code, "locale": locale})
        raise typer.Exit(code=VALIDATION_EXIT_CODE) from exc

    row = {"code": code, "locale": locale or store.default_locale, "message": message}
    with open_output(ctx) as (render, stream):
        render([row], RENDER_COLUMNS, stream)
