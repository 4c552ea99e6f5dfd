"""Render tokens, results, and errors as display text."""

from __future__ import annotations

from collections.abc import Iterable

from infixcalc.core.errors import CalcError, EvaluationError, ParseError, TokenizeError
from infixcalc.core.evaluator import Evaluation
from infixcalc.core.tokens import Token


def format_tokens(tokens: Iterable[Token]) -> str:
    """Space-separated token text, e.g. ``"1 2 +"``."""
    return " ".join(str(token) for token in tokens)


def format_result(evaluation: Evaluation, show_postfix: bool = True) -> str:
    """``"<postfix> = <value>"``, or just the value."""
    if not show_postfix:
        return str(evaluation.value)
    return f"{format_tokens(evaluation.postfix)} = {evaluation.value}"


def format_error(line: str, error: CalcError, absolute_offsets: bool = False) -> str:
    """Describe why a line failed, quoting the line."""
    if isinstance(error, (ParseError, TokenizeError)):
        detail = error.describe(absolute_offsets)
    else:
        detail = error.message
    # The line parsed; only the arithmetic failed.
    verb = "evaluate" if isinstance(error, EvaluationError) else "parse"
    return f'Couldn\'t {verb} "{line}": {detail}'
