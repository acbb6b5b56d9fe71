"""TQS AST - template lexing and expression parsing."""

from tqs.ast.lexer import Lexer, lex
from tqs.ast.node import Interpolation, Literal, Segment
from tqs.ast.parser import parse_expression

__all__ = ["Lexer", "lex", "Interpolation", "Literal", "Segment", "parse_expression"]
