"""Evaluator - interprets parsed interpolation expressions against bindings."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Iterator, Optional

from tqs.ast.node import (
    Attribute,
    Concat,
    Expr,
    MethodCall,
    Name,
    Text,
    dotted_path,
)
from tqs.ast.parser import parse_expression
from tqs.exceptions import UnboundIdentifier, UnsupportedMethod

log = logging.getLogger(__name__)


# Zero-argument string methods an expression may call
METHODS: Dict[str, Callable[[str], str]] = {
    "toUpperCase": str.upper,
    "toLowerCase": str.lower,
    "trim": str.strip,
    "trimStart": str.lstrip,
    "trimEnd": str.rstrip,
    "toString": str,
}


def stringify(value: Any) -> str:
    """Convert an evaluated value to the text placed in the output."""
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Bindings(Mapping):
    """Read-only mapping of names available to interpolation expressions."""

    __slots__ = ("_values",)

    def __init__(self, values: Optional[Mapping[str, Any]] = None, /, **kwargs: Any):
        merged: Dict[str, Any] = dict(values or {})
        merged.update(kwargs)
        for key in merged:
            if not isinstance(key, str):
                raise TypeError(f"Binding names must be strings, got {key!r}")
        self._values = MappingProxyType(merged)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Bindings({dict(self._values)!r})"

    def merge(self, overrides: Optional[Mapping[str, Any]] = None) -> "Bindings":
        """Return new bindings with `overrides` taking precedence."""
        return Bindings(self, **dict(overrides or {}))


class Evaluator:
    """Evaluates interpolation source with a closed set of operations.

    Only identifier lookup, property access, the enabled zero-argument
    methods, string constants and `+` concatenation are understood.
    """

    def __init__(self, methods: Optional[Iterable[str]] = None):
        """
        Args:
            methods: Names of enabled methods. Defaults to every name in METHODS.
        """
        enabled = list(METHODS) if methods is None else list(methods)
        unknown = [name for name in enabled if name not in METHODS]
        if unknown:
            raise ValueError(f"Unknown method(s): {', '.join(unknown)}")
        self.methods = frozenset(enabled)

    def evaluate(self, source: str, bindings: Mapping[str, Any]) -> str:
        """Evaluate interpolation source and return its string form.

        Raises:
            InvalidExpressionSyntax: If the source does not parse.
            UnboundIdentifier: If a referenced name or property is missing.
            UnsupportedMethod: If a called method is not enabled.
        """
        expr = parse_expression(source.strip())
        result = stringify(self.eval_expr(expr, bindings))
        log.debug("Evaluated ${%s} -> %r", source, result)
        return result

    def eval_expr(self, expr: Expr, bindings: Mapping[str, Any]) -> Any:
        if isinstance(expr, Name):
            if expr.ident not in bindings:
                raise UnboundIdentifier(expr.ident)
            return bindings[expr.ident]

        if isinstance(expr, Text):
            return expr.value

        if isinstance(expr, Attribute):
            target = self.eval_expr(expr.target, bindings)
            return self._get_property(target, expr)

        if isinstance(expr, MethodCall):
            target = self.eval_expr(expr.target, bindings)
            if expr.name not in self.methods:
                raise UnsupportedMethod(expr.name)
            return METHODS[expr.name](stringify(target))

        if isinstance(expr, Concat):
            return "".join(
                stringify(self.eval_expr(operand, bindings))
                for operand in expr.operands
            )

        raise TypeError(f"Unknown expression node: {type(expr).__name__}")

    def _get_property(self, target: Any, expr: Attribute) -> Any:
        if isinstance(target, Mapping):
            if expr.name in target:
                return target[expr.name]
        elif isinstance(target, str) and expr.name == "length":
            return len(target)
        raise UnboundIdentifier(dotted_path(expr))
