"""TQS Exceptions

Every error raised while lexing, evaluating or rendering a template derives
from `TqsError`, so callers can catch the whole family at once.
"""

from __future__ import annotations


class TqsError(Exception):
    """Base exception for all tqs errors."""

    def __init__(self, message: str, offset: int | None = None) -> None:
        self.message = message
        self.offset = offset
        super().__init__(message)

    def __str__(self) -> str:
        if self.offset is None:
            return self.message
        return f"{self.message} (at offset {self.offset})"


class MalformedTemplate(TqsError):
    """Raised when template source cannot be lexed."""

    def __init__(self, message: str, offset: int):
        super().__init__(message, offset)


class EvaluationError(TqsError):
    """Base for errors raised while evaluating an interpolation span."""

    pass


class UnboundIdentifier(EvaluationError):
    """Raised when an expression references a name that is not bound."""

    def __init__(self, name: str, offset: int | None = None):
        self.name = name
        super().__init__(f"Unbound identifier: {name}", offset)


class UnsupportedMethod(EvaluationError):
    """Raised when an expression calls a method outside the enabled set."""

    def __init__(self, name: str, offset: int | None = None):
        self.name = name
        super().__init__(f"Unsupported method: {name}()", offset)


class InvalidExpressionSyntax(EvaluationError):
    """Raised when an interpolation span is not a valid expression."""

    def __init__(
        self, message: str, source: str, position: int, offset: int | None = None
    ):
        self.source = source
        self.position = position
        super().__init__(
            f"Invalid expression syntax: {message} at position {position} in {source!r}",
            offset,
        )


class ConfigError(TqsError):
    """Raised when a configuration file has invalid content."""

    pass
