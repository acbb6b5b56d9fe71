from __future__ import annotations

from typing import Tuple, Union

import msgspec


# =============================================================================
# Segments - produced by the lexer
# =============================================================================


class Segment(msgspec.Struct, frozen=True, tag_field="kind"):
    """A chunk of template body. `offset` is where its content starts in the source."""

    offset: int


class Literal(Segment, tag="literal"):
    """Literal text, with escapes already applied."""

    text: str


class Interpolation(Segment, tag="interpolation"):
    """The raw expression source between `${` and `}`."""

    source: str


SegmentType = Union[Literal, Interpolation]


# =============================================================================
# Expressions - produced by the expression parser
# =============================================================================


class Expr(msgspec.Struct, frozen=True):
    pass


class Name(Expr):
    ident: str


class Text(Expr):
    value: str


class Attribute(Expr):
    target: Expr
    name: str


class MethodCall(Expr):
    target: Expr
    name: str


class Concat(Expr):
    operands: Tuple[Expr, ...]


def dotted_path(expr: Expr) -> str:
    """Render an expression as a dotted path for error messages."""
    if isinstance(expr, Name):
        return expr.ident
    if isinstance(expr, Attribute):
        return f"{dotted_path(expr.target)}.{expr.name}"
    if isinstance(expr, MethodCall):
        return f"{dotted_path(expr.target)}.{expr.name}()"
    if isinstance(expr, Text):
        return repr(expr.value)
    return "<expr>"


def root_names(expr: Expr) -> list[str]:
    """Return the binding names an expression reads, in first-use order."""
    if isinstance(expr, Name):
        return [expr.ident]
    if isinstance(expr, (Attribute, MethodCall)):
        return root_names(expr.target)
    if isinstance(expr, Concat):
        names: list[str] = []
        for operand in expr.operands:
            for name in root_names(operand):
                if name not in names:
                    names.append(name)
        return names
    return []
