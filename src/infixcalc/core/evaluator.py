"""
Postfix evaluator for infix arithmetic.

Reduces a postfix token sequence to one integer with a single value stack.
Pure evaluation: no I/O, no side effects, no Python ``eval()``.

The input is expected to come from a successful parse. Anything a parse
would have rejected (a parenthesis, an operator without two operands,
operands left over at the end) is reported as an ``EvaluationError`` defect
rather than a ``ParseError``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from infixcalc.core.errors import EvaluationError, EvaluationErrorKind
from infixcalc.core.parser import parse
from infixcalc.core.tokens import Number, Operator, Paren, Token

logger = logging.getLogger(__name__)


class Calculator:
    """Single-use postfix stack machine."""

    def __init__(self) -> None:
        self.stack: list[int] = []

    def calculate(self, tokens: Iterable[Token]) -> int:
        for token in tokens:
            self.visit_token(token)

        if not self.stack:
            return 0
        if len(self.stack) > 1:
            raise EvaluationError(
                EvaluationErrorKind.UNCONSUMED_OPERANDS,
                f"Not all arguments have corresponding operators: {self.stack}",
            )
        return self.stack.pop()

    def visit_token(self, token: Token) -> None:
        if isinstance(token, Number):
            self.visit_num(token)
        elif isinstance(token, Operator):
            self.visit_op(token)
        elif isinstance(token, Paren):
            self.visit_paren(token)
        else:
            raise TypeError(f"Not a token: {token!r}")

    def visit_num(self, number: Number) -> None:
        self.stack.append(number.value)

    def visit_op(self, operator: Operator) -> None:
        if len(self.stack) < 2:
            raise EvaluationError(
                EvaluationErrorKind.STACK_UNDERFLOW,
                f"Insufficient arguments for operation {operator}",
            )
        rhs = self.stack.pop()
        lhs = self.stack.pop()
        self.stack.append(operator.apply(lhs, rhs))

    def visit_paren(self, paren: Paren) -> None:
        raise EvaluationError(
            EvaluationErrorKind.STRAY_PAREN,
            f"Calculator should not see parentheses ({paren}); parse the input first",
        )


def calculate(tokens: Iterable[Token]) -> int:
    """Evaluate a postfix token sequence.

    Args:
        tokens: Postfix tokens, normally from ``Parser``.

    Returns:
        The integer value; 0 for an empty sequence.

    Raises:
        EvaluationError: On a defect in the sequence or division by zero.
    """
    return Calculator().calculate(tokens)


class Evaluation(BaseModel):
    """Outcome of evaluating one line: its postfix form and value."""

    source: str = Field(description="The input line")
    postfix: list[Token] = Field(default_factory=list, description="Postfix tokens")
    value: int = Field(description="Computed result")

    model_config = ConfigDict(frozen=True)


def evaluate_line(line: str) -> Evaluation:
    """Tokenize, parse, and evaluate one line.

    Raises:
        ParseError: If the line is malformed.
        EvaluationError: On division by zero or overflow.
    """
    postfix = list(parse(line))
    value = calculate(postfix)
    logger.debug("%r -> %d", line, value)
    return Evaluation(source=line, postfix=postfix, value=value)
