"""
Tokenizer for infix arithmetic.

Scans a single line into a lazy stream of tokens using a two-state machine:

- GENERAL: skip whitespace, emit operators and parentheses, hand off to
  NUMBER on a digit (without consuming it), finish cleanly at end of input.
- NUMBER: consume the maximal run of ASCII digits as one ``Number`` token,
  then return to GENERAL.

The tokenizer never looks further ahead than the end of the current token and
never backtracks. The first bad character raises ``TokenizeError`` from
``__next__``; the iterator is exhausted afterwards.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from enum import StrEnum, auto

from infixcalc.core.errors import TokenizeError
from infixcalc.core.tokens import (
    I64_MAX,
    LPAREN,
    RPAREN,
    Number,
    Operator,
    OperatorKind,
    Token,
)

logger = logging.getLogger(__name__)

# ASCII only: str.isdigit() also accepts superscripts and other scripts.
_DIGITS_RE = re.compile(r"[0-9]+")

_SINGLE_CHAR_TOKENS: dict[str, Token] = {
    "+": Operator(kind=OperatorKind.ADD),
    "-": Operator(kind=OperatorKind.SUB),
    "*": Operator(kind=OperatorKind.MUL),
    "/": Operator(kind=OperatorKind.DIV),
    "(": LPAREN,
    ")": RPAREN,
}


class ScanState(StrEnum):
    """Tokenizer sub-states."""

    GENERAL = auto()
    NUMBER = auto()
    DONE = auto()


class Tokenizer:
    """Lazy iterator of tokens over one line of text."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self.state = ScanState.GENERAL

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        while True:
            if self.state == ScanState.GENERAL:
                token = self._scan_general()
            elif self.state == ScanState.NUMBER:
                token = self._scan_number()
            else:
                raise StopIteration
            if token is not None:
                return token

    @property
    def remainder(self) -> str:
        """The text not yet consumed."""
        return self.source[self.pos :]

    def _scan_general(self) -> Token | None:
        """Advance in GENERAL state; return a token or None after a state switch."""
        start = self.pos
        n = len(self.source)

        while self.pos < n:
            c = self.source[self.pos]

            if c.isspace():
                self.pos += 1
                continue

            if _DIGITS_RE.match(c):
                self.state = ScanState.NUMBER
                return None

            token = _SINGLE_CHAR_TOKENS.get(c)
            if token is not None:
                self.pos += 1
                return token

            self.state = ScanState.DONE
            logger.debug("Invalid symbol %r at %d in %r", c, self.pos, self.source)
            raise TokenizeError.invalid_symbol(self.pos - start, self.pos, c)

        self.state = ScanState.DONE
        return None

    def _scan_number(self) -> Token:
        """Consume a digit run and emit it as a single Number."""
        m = _DIGITS_RE.match(self.source, self.pos)
        assert m is not None
        digits = m.group(0)
        significant = digits.lstrip("0") or "0"
        # Bound the length first; int() refuses very long digit strings.
        if len(significant) > len(str(I64_MAX)) or int(significant) > I64_MAX:
            self.state = ScanState.DONE
            raise TokenizeError.number_too_large(0, self.pos, digits)

        self.pos = m.end()
        self.state = ScanState.GENERAL
        return Number(value=int(significant))


def tokenize(source: str) -> Tokenizer:
    """Start tokenizing a line. Nothing is scanned until the result is iterated."""
    return Tokenizer(source)
