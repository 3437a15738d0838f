"""Main Typer CLI application for testlens."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from testlens.cli import commands
from testlens.config import get_settings
from testlens.formatters import OUTPUT_FORMATS
from testlens.logging import configure_logging

app = typer.Typer(
    name="testlens",
    help="Browse, filter and deep-link Jest test reports",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Log level (default: TESTLENS_LOG_LEVEL or WARNING)",
        ),
    ] = None,
    json_logs: Annotated[
        bool,
        typer.Option(
            "--json-logs",
            help="Emit logs as JSON lines on stderr",
        ),
    ] = False,
) -> None:
    """Configure logging before any command runs."""
    settings = get_settings()
    configure_logging(
        log_level=log_level or settings.log_level,
        json_format=json_logs or settings.log_json_format,
    )


@app.command()
def show(
    report: Annotated[
        Path,
        typer.Argument(help="Path to Jest JSON report (jest --json)"),
    ],
    search: Annotated[
        str,
        typer.Option(
            "-s",
            "--search",
            help="Case-insensitive text to match in test or suite titles",
        ),
    ] = "",
    hide_passing: Annotated[
        bool,
        typer.Option(
            "--hide-passing",
            help="Only show tests that did not pass",
        ),
    ] = False,
    output_format: Annotated[
        str,
        typer.Option(
            "-f",
            "--output-format",
            help="Output format (text, markdown, json)",
        ),
    ] = "text",
) -> None:
    """Show test results grouped by suite."""
    if output_format not in OUTPUT_FORMATS:
        typer.echo(
            f"Error: Unknown output format '{output_format}'. "
            f"Choose from: {', '.join(OUTPUT_FORMATS)}",
            err=True,
        )
        raise typer.Exit(code=2)

    exit_code = commands.run_show(
        report_path=report,
        search=search,
        hide_passing=hide_passing,
        output_format=output_format,
    )
    raise typer.Exit(code=exit_code)


@app.command()
def grid(
    report: Annotated[
        Path,
        typer.Argument(help="Path to Jest JSON report (jest --json)"),
    ],
    width: Annotated[
        int,
        typer.Option("-w", "--width", min=1, help="Marks per row"),
    ] = 60,
) -> None:
    """Show a compact pass/fail overview of every test."""
    raise typer.Exit(code=commands.run_grid(report, width=width))


@app.command()
def copy(
    report: Annotated[
        Path,
        typer.Argument(help="Path to Jest JSON report (jest --json)"),
    ],
    anchor: Annotated[
        str,
        typer.Argument(help="Anchor of the test, as printed by 'show'"),
    ],
    no_clipboard: Annotated[
        bool,
        typer.Option(
            "--no-clipboard",
            help="Only print the test name pattern",
        ),
    ] = False,
) -> None:
    """Copy a shell-quoted test name pattern for re-running one test."""
    raise typer.Exit(code=commands.run_copy(report, anchor, use_clipboard=not no_clipboard))


@app.command()
def linkify(
    message_file: Annotated[
        Path | None,
        typer.Argument(help="File containing a failure message (default: stdin)"),
    ] = None,
    escape_html: Annotated[
        bool | None,
        typer.Option(
            "--escape-html/--no-escape-html",
            help="Escape the message before adding links (default: TESTLENS_ESCAPE_HTML)",
        ),
    ] = None,
) -> None:
    """Turn source references in a failure message into links."""
    raise typer.Exit(code=commands.run_linkify(message_file, escape_html=escape_html))
