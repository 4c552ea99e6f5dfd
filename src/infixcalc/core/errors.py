"""
Error types for infixcalc tokenizing, parsing, and evaluation.

Two families are kept apart:

- ``TokenizeError`` and ``ParseError`` describe malformed user input.
- ``EvaluationError`` describes a broken contract between the parser and the
  evaluator (or an arithmetic edge case such as division by zero).

Both derive from ``CalcError`` so a line-oriented driver can report any of
them without stopping.
"""

from __future__ import annotations

from enum import StrEnum, auto


class CalcError(Exception):
    """Base exception for all infixcalc errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TokenizeErrorKind(StrEnum):
    """Reasons the tokenizer can stop."""

    INVALID_SYMBOL = auto()
    NUMBER_TOO_LARGE = auto()


class TokenizeError(CalcError):
    """
    Raised when a line contains text that is not a token.

    Attributes:
        kind: What went wrong
        offset: Zero-based offset relative to the unscanned remainder
        position: Zero-based offset from the start of the line
        symbol: The offending character (or digit run)
    """

    def __init__(
        self,
        kind: TokenizeErrorKind,
        offset: int,
        position: int | None = None,
        symbol: str = "",
    ) -> None:
        self.kind = kind
        self.offset = offset
        self.position = offset if position is None else position
        self.symbol = symbol
        super().__init__(_TOKENIZE_MESSAGES[kind])

    @classmethod
    def invalid_symbol(
        cls, offset: int, position: int | None = None, symbol: str = ""
    ) -> TokenizeError:
        return cls(TokenizeErrorKind.INVALID_SYMBOL, offset, position, symbol)

    @classmethod
    def number_too_large(
        cls, offset: int, position: int | None = None, symbol: str = ""
    ) -> TokenizeError:
        return cls(TokenizeErrorKind.NUMBER_TOO_LARGE, offset, position, symbol)

    def describe(self, absolute: bool = False) -> str:
        """Human-readable form, reporting either the absolute or relative offset."""
        at = self.position if absolute else self.offset
        detail = f" {self.symbol!r}" if self.symbol else ""
        return f"TokenizeError: {self.message}{detail} at {at}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TokenizeError):
            return NotImplemented
        return self.kind == other.kind and self.offset == other.offset

    def __hash__(self) -> int:
        return hash((self.kind, self.offset))

    def __repr__(self) -> str:
        return f"TokenizeError({self.kind}, offset={self.offset}, position={self.position})"


_TOKENIZE_MESSAGES: dict[TokenizeErrorKind, str] = {
    TokenizeErrorKind.INVALID_SYMBOL: "invalid symbol",
    TokenizeErrorKind.NUMBER_TOO_LARGE: "number does not fit in 64 bits",
}


class ParseErrorKind(StrEnum):
    """Reasons the shunting-yard parser can reject a token stream."""

    TOKENIZATION = auto()
    UNMATCHED_PARENS = auto()
    NOT_ENOUGH_ARGS = auto()
    NOT_ENOUGH_OPS = auto()


_PARSE_MESSAGES: dict[ParseErrorKind, str] = {
    ParseErrorKind.TOKENIZATION: "Couldn't tokenize",
    ParseErrorKind.UNMATCHED_PARENS: "Unmatched parentheses",
    ParseErrorKind.NOT_ENOUGH_ARGS: "Not enough arguments for operator",
    ParseErrorKind.NOT_ENOUGH_OPS: "Not enough operators for arguments",
}


class ParseError(CalcError):
    """
    Raised when an infix token stream cannot be turned into postfix.

    Examples:
    - ``1 2`` (NOT_ENOUGH_OPS)
    - ``1 +- 2`` (NOT_ENOUGH_ARGS)
    - ``(1 + 2))`` (UNMATCHED_PARENS)
    - ``a + b`` (TOKENIZATION, wrapping the tokenizer's error as ``inner``)
    """

    def __init__(self, kind: ParseErrorKind, inner: TokenizeError | None = None) -> None:
        self.kind = kind
        self.inner = inner
        message = _PARSE_MESSAGES[kind]
        if inner is not None:
            message = f"{message}: {inner.describe()}"
        super().__init__(message)

    @classmethod
    def tokenization(cls, inner: TokenizeError) -> ParseError:
        return cls(ParseErrorKind.TOKENIZATION, inner)

    def describe(self, absolute: bool = False) -> str:
        if self.inner is not None:
            return f"{_PARSE_MESSAGES[self.kind]}: {self.inner.describe(absolute)}"
        return self.message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseError):
            return NotImplemented
        return self.kind == other.kind and self.inner == other.inner

    def __hash__(self) -> int:
        return hash((self.kind, self.inner))

    def __repr__(self) -> str:
        if self.inner is not None:
            return f"ParseError({self.kind}, inner={self.inner!r})"
        return f"ParseError({self.kind})"


class EvaluationErrorKind(StrEnum):
    """Defects detected while reducing a postfix sequence."""

    STRAY_PAREN = auto()
    STACK_UNDERFLOW = auto()
    UNCONSUMED_OPERANDS = auto()
    DIVISION_BY_ZERO = auto()
    OVERFLOW = auto()


class EvaluationError(CalcError):
    """
    Raised when a postfix sequence cannot be reduced to one integer.

    Apart from DIVISION_BY_ZERO and OVERFLOW, which ordinary input can reach,
    these mean the token sequence did not come from a successful parse.
    """

    def __init__(self, kind: EvaluationErrorKind, message: str) -> None:
        self.kind = kind
        super().__init__(message)

    @property
    def is_defect(self) -> bool:
        """True when the caller broke the parser/evaluator contract."""
        return self.kind not in (EvaluationErrorKind.DIVISION_BY_ZERO, EvaluationErrorKind.OVERFLOW)


class ConfigError(CalcError):
    """Raised when the configuration file cannot be read or is invalid."""
