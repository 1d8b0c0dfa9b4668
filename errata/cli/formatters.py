"""Row renderers for CLI output."""

from __future__ import annotations

import functools
import json
from typing import Callable, Mapping, Sequence, TextIO

from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table
from rich.text import Text

OUTPUT_FORMATS = ("table", "jsonl")

RowRenderer = Callable[[Sequence[Mapping[str, object]], Sequence[str], TextIO], None]

_STATUS_STYLES = {"ok": "green", "missing": "bold red"}


def _cell(column: str, value: object, no_color: bool) -> Text | str:
    text = "-" if value is None else str(value)
    if column == "status" and not no_color:
        return Text(text, style=_STATUS_STYLES.get(text, ""))
    return text


def render_table(
    rows: Sequence[Mapping[str, object]],
    columns: Sequence[str],
    stream: TextIO,
    *,
    no_color: bool = False,
) -> None:
    """Print ``rows`` as a Rich table; template status is colour coded."""

    console = Console(file=stream, color_system=None if no_color else "auto", no_color=no_color)
    table = Table(*columns, box=SIMPLE)
    for row in rows:
        table.add_row(*(_cell(column, row.get(column), no_color) for column in columns))
    console.print(table)


def render_jsonl(rows: Sequence[Mapping[str, object]], columns: Sequence[str], stream: TextIO) -> None:
    for row in rows:
        stream.write(json.dumps({column: row.get(column) for column in columns}, ensure_ascii=False, default=str))
        stream.write("\n")
    stream.flush()


def get_renderer(name: str, *, no_color: bool = False) -> RowRenderer:
    """Renderer for an ``--format`` value."""

    normalized = name.strip().lower()
    if normalized == "table":
        return functools.partial(render_table, no_color=no_color)
    if normalized == "jsonl":
        return render_jsonl
    raise ValueError(f"Unsupported format '{name}'. Available formats: {', '.join(OUTPUT_FORMATS)}.")


__all__ = ["OUTPUT_FORMATS", "RowRenderer", "get_renderer", "render_jsonl", "render_table"]
