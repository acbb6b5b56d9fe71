"""tqs - triple-quoted string templates"""

from tqs._version import __version__
from tqs.ast import Interpolation, Lexer, Segment, lex, parse_expression
from tqs.compiler import METHODS, Bindings, Evaluator, Template, render
from tqs.config import TqsConfig, load_config, load_vars
from tqs.exceptions import (
    ConfigError,
    EvaluationError,
    InvalidExpressionSyntax,
    MalformedTemplate,
    TqsError,
    UnboundIdentifier,
    UnsupportedMethod,
)

__all__ = [
    "__version__",
    # ast
    "Interpolation",
    "Lexer",
    "Segment",
    "lex",
    "parse_expression",
    # compiler
    "METHODS",
    "Bindings",
    "Evaluator",
    "Template",
    "render",
    # config
    "TqsConfig",
    "load_config",
    "load_vars",
    # errors
    "ConfigError",
    "EvaluationError",
    "InvalidExpressionSyntax",
    "MalformedTemplate",
    "TqsError",
    "UnboundIdentifier",
    "UnsupportedMethod",
]
