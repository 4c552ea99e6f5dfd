"""
infixcalc - integer infix calculator.

Tokenizes a line of arithmetic, converts it to postfix with a validating
shunting-yard parser, and evaluates the postfix form.
"""

from __future__ import annotations

from ._version import get_version
from .core import (
    CalcError,
    EvaluationError,
    ParseError,
    TokenizeError,
    calculate,
    evaluate_line,
    parse,
    tokenize,
)

__version__ = get_version()

__all__ = [
    "CalcError",
    "EvaluationError",
    "ParseError",
    "TokenizeError",
    "__version__",
    "calculate",
    "evaluate_line",
    "parse",
    "tokenize",
]
