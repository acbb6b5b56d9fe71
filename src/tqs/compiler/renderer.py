"""Renderer - turns a lexed template plus bindings into the final string."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple, Union

from tqs.ast.lexer import lex
from tqs.ast.node import Interpolation, SegmentType, root_names
from tqs.ast.parser import parse_expression
from tqs.compiler.evaluator import Bindings, Evaluator
from tqs.config import TqsConfig
from tqs.exceptions import EvaluationError

log = logging.getLogger(__name__)


class Template:
    """An immutable, pre-lexed template.

    The source is lexed once on construction; `render` can then be called
    any number of times, from any thread, with different bindings.
    """

    __slots__ = ("_source", "_config", "_segments", "_evaluator")

    def __init__(self, source: str, config: Optional[TqsConfig] = None):
        """
        Args:
            source: Full template source including the three-quote delimiters.
            config: Rendering options. Defaults to `TqsConfig()`.

        Raises:
            MalformedTemplate: If the source cannot be lexed.
        """
        self._source = source
        self._config = config or TqsConfig()
        self._segments = lex(source, quote=self._config.quote)
        self._evaluator = Evaluator(methods=self._config.methods)

    @classmethod
    def from_file(
        cls, path: Union[str, Path], config: Optional[TqsConfig] = None
    ) -> "Template":
        """Read a UTF-8 template file."""
        return cls(Path(path).read_text(encoding="utf-8"), config=config)

    @property
    def source(self) -> str:
        return self._source

    @property
    def config(self) -> TqsConfig:
        return self._config

    @property
    def segments(self) -> Tuple[SegmentType, ...]:
        return self._segments

    def identifiers(self) -> List[str]:
        """Names the template reads from its bindings, in first-use order."""
        names: List[str] = []
        for segment in self._segments:
            if not isinstance(segment, Interpolation):
                continue
            for name in root_names(parse_expression(segment.source.strip())):
                if name not in names:
                    names.append(name)
        return names

    def render(
        self, bindings: Optional[Mapping[str, Any]] = None, /, **kwargs: Any
    ) -> str:
        """Render the template.

        Per-call bindings (then keyword arguments) override `config.vars`.

        Raises:
            UnboundIdentifier, UnsupportedMethod, InvalidExpressionSyntax:
                annotated with the offset of the failing interpolation.
        """
        env = Bindings(self.config.vars).merge(Bindings(bindings, **kwargs))
        parts: List[str] = []

        for segment in self._segments:
            if isinstance(segment, Interpolation):
                try:
                    parts.append(self._evaluator.evaluate(segment.source, env))
                except EvaluationError as e:
                    if e.offset is None:
                        e.offset = segment.offset
                    raise
            else:
                parts.append(segment.text)

        log.debug("Rendered %d segment(s)", len(self._segments))
        return "".join(parts)

    def __repr__(self) -> str:
        return f"Template({self.source!r})"


def render(
    template: Union[Template, str],
    bindings: Optional[Mapping[str, Any]] = None,
    /,
    **kwargs: Any,
) -> str:
    """Render a `Template` (or raw template source) with the given bindings."""
    if isinstance(template, str):
        template = Template(template)
    return template.render(bindings, **kwargs)
