"""TQS CLI Main Entry Point

Renders triple-quoted string templates from the command line.

Usage:
    tqs render page.tqs --set title=Hello --set name=world
    tqs render page.tqs --vars vars.yaml -o page.html
    tqs render page.tqs --config tqs.yaml
    tqs tokens page.tqs            # Show lexed segments as JSON
    tqs --version                  # Show version
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from ._version import __version__
from .commands import render_command, tokens_command
from .commands.utils import setup_logging

typer_app = typer.Typer(no_args_is_help=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"tqs {__version__}")
        raise typer.Exit()


@typer_app.callback()
def cli(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
) -> None:
    """Triple-quoted string templates with ${} interpolation."""
    setup_logging(verbose)


@typer_app.command("render")
def render(
    template: Path = typer.Argument(..., help="Template file to render."),
    assignments: Optional[List[str]] = typer.Option(
        None, "-s", "--set", help="Binding as name=value (repeatable)."
    ),
    vars_file: Optional[Path] = typer.Option(
        None, "--vars", help="YAML file of bindings."
    ),
    config_file: Optional[Path] = typer.Option(
        None, "-c", "--config", help="YAML config file."
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the result to a file instead of stdout."
    ),
) -> None:
    """Render a template file and print the result."""
    render_command(
        template,
        assignments=assignments,
        vars_file=vars_file,
        config_file=config_file,
        output=output,
    )


@typer_app.command("tokens")
def tokens(
    template: Path = typer.Argument(..., help="Template file to lex."),
) -> None:
    """Print the lexed segments of a template as JSON."""
    tokens_command(template)


def main() -> None:
    typer_app()


if __name__ == "__main__":
    main()
