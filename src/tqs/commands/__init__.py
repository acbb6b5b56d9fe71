"""CLI commands"""

from .render import render_command
from .tokens import tokens_command

__all__ = ["render_command", "tokens_command"]
