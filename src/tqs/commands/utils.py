"""Shared utilities for CLI commands"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, List, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from tqs.exceptions import TqsError

err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the tqs CLI.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level
    - Debug (TQS_DEBUG=1): DEBUG level - shows lexed segments and evaluated spans
    """
    debug = bool(os.environ.get("TQS_DEBUG"))

    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=err_console,
        show_time=verbose,
        show_path=debug,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("tqs")
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False


def parse_assignments(assignments: Optional[List[str]]) -> dict[str, Any]:
    """Parse repeated `--set name=value` options into a dict."""
    result: dict[str, Any] = {}
    for item in assignments or []:
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise typer.BadParameter(
                f"Expected name=value, got {item!r}", param_hint="--set"
            )
        result[name] = value
    return result


def exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    """Exit the program with an error message."""
    typer.echo(f"Error: {message}", err=True)
    sys.exit(exit_code)


def handle_error(error: Exception) -> NoReturn:
    """Report a tqs error (or unexpected failure) and exit."""
    if isinstance(error, (TqsError, OSError, UnicodeDecodeError)):
        exit_with_error(str(error))
    else:
        typer.echo(f"Unexpected error: {error}", err=True)
        sys.exit(1)
