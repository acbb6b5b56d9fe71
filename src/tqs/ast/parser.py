"""Expression parser for interpolation spans.

Grammar (left to right, `+` is the only operator):

    expr    := term ('+' term)*
    term    := primary ('.' IDENT ('(' ')')?)*
    primary := IDENT | STRING
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, NamedTuple, NoReturn

from tqs.ast.node import Attribute, Concat, Expr, MethodCall, Name, Text
from tqs.exceptions import InvalidExpressionSyntax

IDENT = "ident"
STRING = "string"
DOT = "."
PLUS = "+"
LPAREN = "("
RPAREN = ")"
EOF = "end of expression"

PUNCTUATION = {".": DOT, "+": PLUS, "(": LPAREN, ")": RPAREN}
STRING_ESCAPES = {"\\": "\\", "'": "'", '"': '"', "n": "\n", "t": "\t"}


class Token(NamedTuple):
    kind: str
    value: str
    position: int


def _is_ident_start(ch: str) -> bool:
    return ch.isalpha() or ch in "_$"


def _is_ident_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_$"


def tokenize(source: str) -> List[Token]:
    """Split expression source into tokens, ending with an EOF token."""
    tokens: List[Token] = []
    pos = 0

    while pos < len(source):
        ch = source[pos]

        if ch.isspace():
            pos += 1
        elif ch in PUNCTUATION:
            tokens.append(Token(PUNCTUATION[ch], ch, pos))
            pos += 1
        elif _is_ident_start(ch):
            start = pos
            while pos < len(source) and _is_ident_char(source[pos]):
                pos += 1
            tokens.append(Token(IDENT, source[start:pos], start))
        elif ch in ("'", '"'):
            start = pos
            value, pos = _read_string(source, pos)
            tokens.append(Token(STRING, value, start))
        else:
            raise InvalidExpressionSyntax(f"unexpected character {ch!r}", source, pos)

    tokens.append(Token(EOF, "", len(source)))
    return tokens


def _read_string(source: str, start: int) -> tuple[str, int]:
    quote = source[start]
    chars: List[str] = []
    pos = start + 1

    while pos < len(source):
        ch = source[pos]
        if ch == quote:
            return "".join(chars), pos + 1
        if ch == "\\" and pos + 1 < len(source):
            nxt = source[pos + 1]
            chars.append(STRING_ESCAPES.get(nxt, "\\" + nxt))
            pos += 2
            continue
        chars.append(ch)
        pos += 1

    raise InvalidExpressionSyntax("unterminated string constant", source, start)


class ExpressionParser:
    """Recursive descent parser over the token list of one expression."""

    def __init__(self, source: str):
        self.source = source
        self.tokens = tokenize(source)
        self.index = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def parse(self) -> Expr:
        operands = [self._term()]
        while self._accept(PLUS):
            operands.append(self._term())
        self._expect(EOF)

        if len(operands) == 1:
            return operands[0]
        return Concat(operands=tuple(operands))

    def _term(self) -> Expr:
        node = self._primary()
        while self._accept(DOT):
            name = self._expect(IDENT).value
            if self._accept(LPAREN):
                if self.current.kind != RPAREN:
                    self._fail("methods take no arguments")
                self._advance()
                node = MethodCall(target=node, name=name)
            else:
                node = Attribute(target=node, name=name)
        return node

    def _primary(self) -> Expr:
        token = self.current
        if token.kind == IDENT:
            self._advance()
            return Name(ident=token.value)
        if token.kind == STRING:
            self._advance()
            return Text(value=token.value)
        self._fail(f"expected identifier or string, got {token.kind}")

    def _advance(self) -> Token:
        token = self.current
        self.index += 1
        return token

    def _accept(self, kind: str) -> bool:
        if self.current.kind == kind:
            self._advance()
            return True
        return False

    def _expect(self, kind: str) -> Token:
        if self.current.kind != kind:
            self._fail(f"expected {kind}, got {self.current.kind}")
        return self._advance()

    def _fail(self, message: str) -> NoReturn:
        raise InvalidExpressionSyntax(message, self.source, self.current.position)


@lru_cache(maxsize=512)
def parse_expression(source: str) -> Expr:
    """Parse interpolation source into an expression tree.

    Raises:
        InvalidExpressionSyntax: If the source does not match the grammar.
    """
    return ExpressionParser(source).parse()
