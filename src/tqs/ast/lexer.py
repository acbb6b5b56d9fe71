"""Lexer - scans triple-quoted template source into segments.

The scanner walks the source one character at a time with a single character
of lookahead:

- `\\` followed by a line break joins the next line (nothing is emitted)
- `\\${` emits a literal `${`
- `${ ... }` becomes an Interpolation segment (first `}` closes it)
- a run of N delimiter quotes emits N - 3 literal quotes; when the run ends
  the source it is also the closing delimiter

Runs shorter than three quotes are ordinary text. A bare run of exactly three
quotes anywhere but the end is an unescaped delimiter and is rejected.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from tqs.ast.node import Interpolation, Literal, SegmentType
from tqs.exceptions import MalformedTemplate

log = logging.getLogger(__name__)

QUOTE_CHARS = ("'", '"')
DELIMITER_LENGTH = 3


class Lexer:
    """Single-use scanner over one template source."""

    def __init__(self, source: str, quote: Optional[str] = None):
        """
        Args:
            source: Full template source, delimiters included.
            quote: If set, the opening delimiter must use this quote character.
        """
        if quote is not None and quote not in QUOTE_CHARS:
            raise ValueError(f"quote must be one of {QUOTE_CHARS}, got {quote!r}")
        self.source = source
        self.required_quote = quote
        self.quote = ""
        self.pos = 0
        self._buffer: List[str] = []
        self._buffer_offset = 0
        self._segments: List[SegmentType] = []

    def peek(self, ahead: int = 0) -> str:
        index = self.pos + ahead
        if index < len(self.source):
            return self.source[index]
        return ""

    def tokenize(self) -> Tuple[SegmentType, ...]:
        """Scan the whole source and return its segments in order.

        Raises:
            MalformedTemplate: If delimiters or interpolation spans are broken.
        """
        self._read_opening()

        while True:
            ch = self.peek()
            if not ch:
                raise MalformedTemplate(
                    f"Unterminated template: missing closing {self.quote * DELIMITER_LENGTH}",
                    self.pos,
                )

            if ch == "\\":
                self._read_backslash()
            elif ch == "$" and self.peek(1) == "{":
                self._read_interpolation()
            elif ch == self.quote:
                if self._read_quote_run():
                    break
            else:
                self._append(ch, self.pos)
                self.pos += 1

        self._flush()
        log.debug("Lexed template into %d segment(s)", len(self._segments))
        return tuple(self._segments)

    # -------------------------------------------------------------------------
    # States
    # -------------------------------------------------------------------------

    def _read_opening(self) -> None:
        self.pos = len(self.source) - len(self.source.lstrip())
        quote = self.peek()
        opener = self.source[self.pos : self.pos + DELIMITER_LENGTH]

        if quote not in QUOTE_CHARS or opener != quote * DELIMITER_LENGTH:
            raise MalformedTemplate(
                "Template must start with a three-quote delimiter", self.pos
            )
        if self.required_quote is not None and quote != self.required_quote:
            raise MalformedTemplate(
                f"Template must be delimited by {self.required_quote * DELIMITER_LENGTH}",
                self.pos,
            )

        self.quote = quote
        self.pos += DELIMITER_LENGTH

    def _read_backslash(self) -> None:
        start = self.pos
        nxt = self.peek(1)

        if nxt == "\n":
            self.pos += 2
        elif nxt == "\r":
            self.pos += 3 if self.peek(2) == "\n" else 2
        elif nxt == "$" and self.peek(2) == "{":
            self._append("${", start)
            self.pos += 3
        else:
            # lone backslash is literal
            self._append("\\", start)
            self.pos += 1

    def _read_interpolation(self) -> None:
        opener = self.pos
        start = opener + 2
        end = self.source.find("}", start)

        if end == -1:
            raise MalformedTemplate(
                f"Unterminated interpolation opened at offset {opener}",
                len(self.source),
            )

        expression = self.source[start:end]
        if not expression.strip():
            raise MalformedTemplate("Empty interpolation", opener)

        self._flush()
        self._segments.append(Interpolation(offset=start, source=expression))
        self.pos = end + 1

    def _read_quote_run(self) -> bool:
        """Consume a run of delimiter quotes. Returns True on the closing delimiter."""
        start = self.pos
        while self.peek() == self.quote:
            self.pos += 1
        count = self.pos - start

        if count < DELIMITER_LENGTH:
            self._append(self.quote * count, start)
            return False

        if self._at_end():
            self._append(self.quote * (count - DELIMITER_LENGTH), start)
            self.pos = len(self.source)
            return True

        if count == DELIMITER_LENGTH:
            raise MalformedTemplate(
                "Unescaped delimiter inside template body "
                "(write N + 3 quotes to embed N quote characters)",
                start,
            )

        self._append(self.quote * (count - DELIMITER_LENGTH), start)
        return False

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _at_end(self) -> bool:
        # trailing whitespace after the closing delimiter is allowed
        return not self.source[self.pos :].strip()

    def _append(self, text: str, offset: int) -> None:
        if not text:
            return
        if not self._buffer:
            self._buffer_offset = offset
        self._buffer.append(text)

    def _flush(self) -> None:
        if self._buffer:
            self._segments.append(
                Literal(offset=self._buffer_offset, text="".join(self._buffer))
            )
            self._buffer = []


def lex(source: str, quote: Optional[str] = None) -> Tuple[SegmentType, ...]:
    """Lex template source into an ordered tuple of segments."""
    return Lexer(source, quote=quote).tokenize()
