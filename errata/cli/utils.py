"""Helpers shared across CLI commands."""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from typing import Iterator, Mapping, TextIO

import typer

from .constants import VALIDATION_EXIT_CODE
from .formatters import RowRenderer, get_renderer


@contextmanager
def open_output(ctx: typer.Context) -> Iterator[tuple[RowRenderer, TextIO]]:
    """Yield the renderer picked by ``--format`` and the stream picked by ``--output``."""

    options = ctx.ensure_object(dict)
    render = get_renderer(str(options.get("format", "table")), no_color=bool(options.get("no_color", False)))
    output_path = options.get("output_path")
    if output_path is None:
        yield render, sys.stdout
        return

    try:
        stream = open(output_path, "w", encoding="utf-8")
    except OSError as exc:
        emit_error(f"Unable to open '{output_path}': {exc}", "OUTPUT_WRITE_ERROR")
        raise typer.Exit(code=VALIDATION_EXIT_CODE) from exc
    with stream:
        yield render, stream


def emit_error(message: str, code: str, *, details: Mapping[str, object] | None = None) -> None:
    """Print a structured error payload to stderr."""

    payload: dict[str, object] = {"code": code, "message": message}
    if details:
        payload["details"] = dict(details)
    typer.echo(json.dumps(payload, ensure_ascii=False, default=str), err=True)


__all__ = ["emit_error", "open_output"]
