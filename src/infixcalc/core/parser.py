"""
Shunting-yard parser: infix tokens in, postfix (Reverse Polish) tokens out.

The parser is a lazy iterator that pulls from the tokenizer only when it needs
another token. Validation happens inline:

- a running operand surplus (operands emitted minus operators emitted) must
  stay >= 1 after every operator and end at exactly 1 (0 for empty input);
- a running open-parenthesis count must never go negative and end at 0;
- operands and operators must alternate: two operands in a row fail with
  NOT_ENOUGH_OPS, an operator without a left operand with NOT_ENOUGH_ARGS.

Control flow is an explicit state machine so that a token which forces the
operator stack to be popped can be re-examined on a later step, one output
token per step.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from enum import StrEnum, auto
from typing import NoReturn

from infixcalc.core.errors import ParseError, ParseErrorKind, TokenizeError
from infixcalc.core.tokenizer import tokenize
from infixcalc.core.tokens import LPAREN, Number, Operator, Paren, ParenSide, Token

logger = logging.getLogger(__name__)


class ParserState(StrEnum):
    """What the next step of the parser does."""

    ACCUMULATING = auto()  # examine the current token, pulling one if needed
    CURR_TO_OUT = auto()  # emit the current token (a number)
    POP_OP = auto()  # emit the stack top, then re-examine the current token
    POP_TILL_PAREN = auto()  # emit operators down to the matching "("
    DRAIN = auto()  # input exhausted: emit everything left on the stack
    DONE = auto()


class Parser:
    """Lazy infix-to-postfix converter over any iterable of tokens."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self.inner: Iterator[Token] = iter(tokens)
        self.stack: list[Operator | Paren] = []
        self.curr: Token | None = None
        self.state = ParserState.ACCUMULATING
        self.surplus = 0
        self.open_parens = 0
        self.expect_operand = True

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        while True:
            if self.state == ParserState.DONE:
                raise StopIteration

            if self.state == ParserState.ACCUMULATING:
                if self.curr is None:
                    self.curr = self._pull()
                    if self.curr is None:
                        self.state = ParserState.DRAIN
                        continue
                    self._check_adjacency(self.curr)
                self._visit(self.curr)
                continue

            if self.state == ParserState.CURR_TO_OUT:
                token = self.curr
                assert token is not None
                self.curr = None
                self.surplus += 1
                self.state = ParserState.ACCUMULATING
                return token

            if self.state == ParserState.POP_OP:
                top = self.stack.pop()
                assert isinstance(top, Operator)
                self.state = ParserState.ACCUMULATING
                return self._emit(top)

            if self.state == ParserState.POP_TILL_PAREN:
                if not self.stack:
                    self._fail(ParseErrorKind.UNMATCHED_PARENS)
                top = self.stack.pop()
                if isinstance(top, Paren):
                    self.state = ParserState.ACCUMULATING
                    continue
                return self._emit(top)

            if self.state == ParserState.DRAIN:
                if not self.stack:
                    self._finish()
                    continue
                top = self.stack.pop()
                if isinstance(top, Paren):
                    self._fail(ParseErrorKind.UNMATCHED_PARENS)
                return self._emit(top)

    # -- Steps --

    def _pull(self) -> Token | None:
        """Next infix token, or None once the input is exhausted."""
        try:
            return next(self.inner)
        except StopIteration:
            return None
        except TokenizeError as e:
            self.state = ParserState.DONE
            raise ParseError.tokenization(e) from e

    def _check_adjacency(self, token: Token) -> None:
        """Reject a token that cannot follow the previous one in infix order.

        Operands and "(" must come where an operand is expected; operators and
        ")" must come after an operand or ")". A ")" with nothing open is left
        to the parenthesis counter.
        """
        if isinstance(token, Number):
            if not self.expect_operand:
                self._fail(ParseErrorKind.NOT_ENOUGH_OPS)
            self.expect_operand = False
        elif isinstance(token, Operator):
            if self.expect_operand:
                self._fail(ParseErrorKind.NOT_ENOUGH_ARGS)
            self.expect_operand = True
        elif token.side == ParenSide.LEFT:
            if not self.expect_operand:
                self._fail(ParseErrorKind.NOT_ENOUGH_OPS)
        else:
            if self.expect_operand and self.open_parens > 0:
                self._fail(ParseErrorKind.NOT_ENOUGH_ARGS)
            self.expect_operand = False

    def _visit(self, token: Token) -> None:
        """Decide the next state for the current token."""
        if isinstance(token, Number):
            self.state = ParserState.CURR_TO_OUT
        elif isinstance(token, Paren):
            self._visit_paren(token)
        else:
            self._visit_op(token)

    def _visit_paren(self, paren: Paren) -> None:
        self.curr = None
        if paren.side == ParenSide.LEFT:
            self.stack.append(LPAREN)
            self.open_parens += 1
            self.state = ParserState.ACCUMULATING
            return

        self.open_parens -= 1
        if self.open_parens < 0:
            self._fail(ParseErrorKind.UNMATCHED_PARENS)
        self.state = ParserState.POP_TILL_PAREN

    def _visit_op(self, operator: Operator) -> None:
        top = self.stack[-1] if self.stack else None
        if top is None or isinstance(top, Paren) or top.priority < operator.priority:
            logger.debug("push %s (stack depth %d)", operator, len(self.stack))
            self.stack.append(operator)
            self.curr = None
            self.state = ParserState.ACCUMULATING
        else:
            # Equal or higher priority on the stack goes out first: left-to-right.
            self.state = ParserState.POP_OP

    def _emit(self, operator: Operator) -> Token:
        """Emit a popped operator, checking it has two operands to consume."""
        self.surplus -= 1
        logger.debug("pop %s (surplus %d)", operator, self.surplus)
        if self.surplus <= 0:
            self._fail(ParseErrorKind.NOT_ENOUGH_ARGS)
        return operator

    def _finish(self) -> None:
        """Final checks once the stack is drained."""
        if self.open_parens != 0:
            self._fail(ParseErrorKind.UNMATCHED_PARENS)
        if self.surplus > 1:
            self._fail(ParseErrorKind.NOT_ENOUGH_OPS)
        self.state = ParserState.DONE

    def _fail(self, kind: ParseErrorKind) -> NoReturn:
        self.state = ParserState.DONE
        logger.debug("parse failed: %s", kind)
        raise ParseError(kind)


def parse(source: str) -> Parser:
    """Start converting a line of infix text to postfix. Nothing is scanned yet."""
    return Parser(tokenize(source))


def to_postfix(source: str) -> list[Token]:
    """Convert a line of infix text to a list of postfix tokens.

    Raises:
        ParseError: If the line is malformed (tokenizer errors are wrapped).
    """
    return list(parse(source))
