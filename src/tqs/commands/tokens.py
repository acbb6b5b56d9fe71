"""Tokens command - show how a template is lexed"""

from __future__ import annotations

from pathlib import Path

import msgspec
import typer

from tqs.ast import lex
from tqs.exceptions import TqsError

from .utils import handle_error


def tokens_command(template_path: Path) -> None:
    """Print the segments of `template_path` as JSON."""
    try:
        segments = lex(template_path.read_text(encoding="utf-8"))
    except (TqsError, OSError, UnicodeDecodeError) as e:
        handle_error(e)

    payload = msgspec.json.format(msgspec.json.encode(segments), indent=2)
    typer.echo(payload.decode())
