"""Main entry point for the errata command line interface."""

from __future__ import annotations

from pathlib import Path

import typer

from errata.core.logging import configure_logging

from .formatters import get_renderer
from .templates import register as register_template_commands


def create_app() -> typer.Typer:
    """Create a Typer application instance for errata."""

    app = typer.Typer(add_completion=False, help="errata command line interface")

    @app.callback()
    def main(
        ctx: typer.Context,
        format: str = typer.Option(
            "table",
            "--format",
            "-f",
            help="Output format (table or jsonl).",
            show_default=True,
        ),
        output: Path | None = typer.Option(
            None,
            "--output",
            "-o",
            help="Write output to a file instead of stdout.",
        ),
        log_level: str = typer.Option(
            "WARNING",
            "--log-level",
            help="Minimum level of JSON log lines written to stderr.",
            show_default=True,
        ),
        no_color: bool = typer.Option(
            False,
            "--no-color",
            help="Disable colorized output for table format.",
        ),
    ) -> None:
        ctx.ensure_object(dict)
        normalized_format = format.strip().lower()
        try:
            get_renderer(normalized_format, no_color=no_color)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc

        ctx.obj.update(
            {
                "format": normalized_format,
                "output_path": output,
                "no_color": no_color,
            }
        )
        configure_logging(log_level.upper())

    register_template_commands(app)
    return app


app = create_app()
