"""
Token model for infix arithmetic.

A token is one of three frozen value types:

- ``Number``: a signed 64-bit integer literal
- ``Paren``: a left or right parenthesis
- ``Operator``: one of ``+ - * /``

Tokens carry no source positions and no references to each other; two tokens
are equal when they hold the same value.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from infixcalc.core.errors import EvaluationError, EvaluationErrorKind

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1


# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class OperatorKind(StrEnum):
    """Binary arithmetic operators, valued by their source symbol."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @property
    def priority(self) -> int:
        """Binding strength: higher binds tighter."""
        if self in (OperatorKind.ADD, OperatorKind.SUB):
            return 1
        return 2

    def apply(self, lhs: int, rhs: int) -> int:
        """Apply the operator with 64-bit integer semantics.

        Division truncates toward zero.

        Raises:
            EvaluationError: On division by zero or a result outside 64 bits.
        """
        if self == OperatorKind.ADD:
            result = lhs + rhs
        elif self == OperatorKind.SUB:
            result = lhs - rhs
        elif self == OperatorKind.MUL:
            result = lhs * rhs
        else:
            if rhs == 0:
                raise EvaluationError(
                    EvaluationErrorKind.DIVISION_BY_ZERO, f"Division by zero: {lhs} / {rhs}"
                )
            result = abs(lhs) // abs(rhs)
            if (lhs < 0) != (rhs < 0):
                result = -result

        if not I64_MIN <= result <= I64_MAX:
            raise EvaluationError(
                EvaluationErrorKind.OVERFLOW,
                f"Integer overflow: {lhs} {self.value} {rhs}",
            )
        return result


class ParenSide(StrEnum):
    """Which way a parenthesis faces."""

    LEFT = "("
    RIGHT = ")"


# ---------------------------------------------------------------------------
# Token types
# ---------------------------------------------------------------------------


class Number(BaseModel):
    """An integer literal."""

    value: int = Field(ge=I64_MIN, le=I64_MAX, description="Literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value)


class Paren(BaseModel):
    """A parenthesis. Only ever seen in infix sequences."""

    side: ParenSide

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.side.value


class Operator(BaseModel):
    """A binary operator."""

    kind: OperatorKind

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.kind.value

    @property
    def priority(self) -> int:
        return self.kind.priority

    def apply(self, lhs: int, rhs: int) -> int:
        return self.kind.apply(lhs, rhs)


Token = Number | Paren | Operator

LPAREN = Paren(side=ParenSide.LEFT)
RPAREN = Paren(side=ParenSide.RIGHT)


def num(value: int) -> Number:
    """Shorthand for ``Number(value=value)``."""
    return Number(value=value)


def op(symbol: str) -> Operator:
    """Shorthand for an operator token from its symbol, e.g. ``op("+")``."""
    return Operator(kind=OperatorKind(symbol))
