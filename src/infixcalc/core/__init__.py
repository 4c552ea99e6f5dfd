"""
Core pipeline: tokenizer -> shunting-yard parser -> postfix evaluator.

Usage:
    from infixcalc.core import calculate, parse

    value = calculate(parse("1 + 2 * 3"))
    # value == 7
"""

from infixcalc.core.errors import (
    CalcError,
    ConfigError,
    EvaluationError,
    EvaluationErrorKind,
    ParseError,
    ParseErrorKind,
    TokenizeError,
    TokenizeErrorKind,
)
from infixcalc.core.evaluator import Calculator, Evaluation, calculate, evaluate_line
from infixcalc.core.parser import Parser, parse, to_postfix
from infixcalc.core.printer import format_error, format_result, format_tokens
from infixcalc.core.tokenizer import Tokenizer, tokenize
from infixcalc.core.tokens import (
    LPAREN,
    RPAREN,
    Number,
    Operator,
    OperatorKind,
    Paren,
    ParenSide,
    Token,
    num,
    op,
)

__all__ = [
    "LPAREN",
    "RPAREN",
    "CalcError",
    "Calculator",
    "ConfigError",
    "Evaluation",
    "EvaluationError",
    "EvaluationErrorKind",
    "Number",
    "Operator",
    "OperatorKind",
    "Paren",
    "ParenSide",
    "ParseError",
    "ParseErrorKind",
    "Parser",
    "Token",
    "TokenizeError",
    "TokenizeErrorKind",
    "Tokenizer",
    "calculate",
    "evaluate_line",
    "format_error",
    "format_result",
    "format_tokens",
    "num",
    "op",
    "parse",
    "to_postfix",
    "tokenize",
]
