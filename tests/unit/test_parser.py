"""Tests for the shunting-yard parser."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from infixcalc.core.errors import ParseError, ParseErrorKind, TokenizeError
from infixcalc.core.parser import Parser, ParserState, parse, to_postfix
from infixcalc.core.tokens import LPAREN, RPAREN, Number, Operator, Paren, Token, num, op

VALID_INPUTS = [
    "",
    "42",
    "1 + 2",
    "1 + 2 * 3",
    "1 * (2 + 3)",
    "1 * 2 - 3 * 4",
    "1 * 2 / 5 - 3 * 4",
    "1 + 2 * 3 / (4 - 5) * 6",
    "((1))",
    "(1 + (2 * (3 - 4))) / 5",
    "8 / 4 / 2",
]


class TestParserOrdering:
    """Infix text comes out in postfix order."""

    def test_one_op(self) -> None:
        assert to_postfix("1 + 2") == [num(1), num(2), op("+")]
        assert to_postfix("1 * 2") == [num(1), num(2), op("*")]

    def test_higher_priority_deferred(self) -> None:
        assert to_postfix("1 + 2 * 3") == [num(1), num(2), num(3), op("*"), op("+")]

    def test_higher_priority_first(self) -> None:
        assert to_postfix("1 * 2 + 3") == [num(1), num(2), op("*"), num(3), op("+")]

    def test_more_ops(self) -> None:
        assert to_postfix("1 * 2 - 3 * 4") == [
            num(1),
            num(2),
            op("*"),
            num(3),
            num(4),
            op("*"),
            op("-"),
        ]
        assert to_postfix("1 * 2 / 5 - 3 * 4") == [
            num(1),
            num(2),
            op("*"),
            num(5),
            op("/"),
            num(3),
            num(4),
            op("*"),
            op("-"),
        ]

    def test_parens(self) -> None:
        assert to_postfix("1 * (2 + 3)") == [num(1), num(2), num(3), op("+"), op("*")]

    def test_parens_mixed_priorities(self) -> None:
        assert to_postfix("1 + 2 * 3 / (4 - 5) * 6") == [
            num(1),
            num(2),
            num(3),
            op("*"),
            num(4),
            num(5),
            op("-"),
            op("/"),
            num(6),
            op("*"),
            op("+"),
        ]

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("1 + 2 + 3", [num(1), num(2), op("+"), num(3), op("+")]),
            ("1 - 2 + 3", [num(1), num(2), op("-"), num(3), op("+")]),
            ("8 / 4 / 2", [num(8), num(4), op("/"), num(2), op("/")]),
            ("2 * 3 / 4 * 5", [num(2), num(3), op("*"), num(4), op("/"), num(5), op("*")]),
        ],
    )
    def test_equal_priority_keeps_input_order(self, source: str, expected: list[Token]) -> None:
        assert to_postfix(source) == expected

    def test_single_number(self) -> None:
        assert to_postfix("42") == [num(42)]

    def test_empty_input(self) -> None:
        assert to_postfix("") == []
        assert to_postfix("   ") == []

    @pytest.mark.parametrize("source", VALID_INPUTS)
    def test_no_parens_in_output(self, source: str) -> None:
        assert not any(isinstance(t, Paren) for t in to_postfix(source))

    @pytest.mark.parametrize("source", VALID_INPUTS[1:])
    def test_arity_conservation(self, source: str) -> None:
        surplus = 0
        for token in to_postfix(source):
            if isinstance(token, Number):
                surplus += 1
            else:
                assert isinstance(token, Operator)
                surplus -= 1
            assert surplus >= 1
        assert surplus == 1


class TestParserErrors:
    """Structural problems are reported as ParseError kinds."""

    def test_not_enough_ops(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            to_postfix("1 2")
        assert exc_info.value == ParseError(ParseErrorKind.NOT_ENOUGH_OPS)

    def test_not_enough_args(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            to_postfix("1 +- 2")
        assert exc_info.value == ParseError(ParseErrorKind.NOT_ENOUGH_ARGS)

    def test_extra_closing_paren(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            to_postfix("(1 + 2))")
        assert exc_info.value.kind == ParseErrorKind.UNMATCHED_PARENS

    def test_unclosed_paren(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            to_postfix("((1 + 2")
        assert exc_info.value.kind == ParseErrorKind.UNMATCHED_PARENS

    def test_tokenization_error_wrapped(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            to_postfix("a + b")
        error = exc_info.value
        assert error == ParseError.tokenization(TokenizeError.invalid_symbol(0))
        assert error.kind == ParseErrorKind.TOKENIZATION
        assert isinstance(error.__cause__, TokenizeError)
        assert error.inner is error.__cause__

    @pytest.mark.parametrize(
        ("source", "kind"),
        [
            ("+", ParseErrorKind.NOT_ENOUGH_ARGS),
            ("- 1", ParseErrorKind.NOT_ENOUGH_ARGS),
            ("1 +", ParseErrorKind.NOT_ENOUGH_ARGS),
            ("(1 +)", ParseErrorKind.NOT_ENOUGH_ARGS),
            ("1 + (* 2)", ParseErrorKind.NOT_ENOUGH_ARGS),
            ("1 (2)", ParseErrorKind.NOT_ENOUGH_OPS),
            ("(1) (2) 3", ParseErrorKind.NOT_ENOUGH_OPS),
            (")", ParseErrorKind.UNMATCHED_PARENS),
            ("(", ParseErrorKind.UNMATCHED_PARENS),
            ("1 + 2) * (3", ParseErrorKind.UNMATCHED_PARENS),
            ("()", ParseErrorKind.NOT_ENOUGH_ARGS),
            ("1 # 2", ParseErrorKind.TOKENIZATION),
        ],
    )
    def test_error_kinds(self, source: str, kind: ParseErrorKind) -> None:
        with pytest.raises(ParseError) as exc_info:
            to_postfix(source)
        assert exc_info.value.kind == kind

    @pytest.mark.parametrize(
        ("source", "kind"),
        [
            ("* 1 2", ParseErrorKind.NOT_ENOUGH_ARGS),
            ("1 2 +", ParseErrorKind.NOT_ENOUGH_OPS),
            ("(1 2 +)", ParseErrorKind.NOT_ENOUGH_OPS),
            ("1 (+ 2)", ParseErrorKind.NOT_ENOUGH_OPS),
            ("(+ 1 2)", ParseErrorKind.NOT_ENOUGH_ARGS),
            ("1 + 2 3 *", ParseErrorKind.NOT_ENOUGH_OPS),
            ("(1 + 2) 3", ParseErrorKind.NOT_ENOUGH_OPS),
        ],
    )
    def test_operands_and_operators_must_alternate(
        self, source: str, kind: ParseErrorKind
    ) -> None:
        with pytest.raises(ParseError) as exc_info:
            to_postfix(source)
        assert exc_info.value.kind == kind

    def test_misplaced_operand_fails_before_emitting_it(self) -> None:
        parser = parse("2 + 3 4 *")
        assert [next(parser), next(parser)] == [num(2), num(3)]
        with pytest.raises(ParseError) as exc_info:
            next(parser)
        assert exc_info.value.kind == ParseErrorKind.NOT_ENOUGH_OPS

    def test_messages(self) -> None:
        with pytest.raises(ParseError, match="Unmatched parentheses"):
            to_postfix(")")
        with pytest.raises(ParseError, match="invalid symbol"):
            to_postfix("1 + x")


class _RecordingSource:
    """Token source that records how many tokens were pulled."""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pulled = 0

    def __iter__(self) -> Iterator[Token]:
        for token in self.tokens:
            self.pulled += 1
            yield token


class TestParserLaziness:
    """The parser pulls input only as needed and stops after a failure."""

    def test_pulls_one_token_for_leading_number(self) -> None:
        source = _RecordingSource([num(1), op("+"), num(2)])
        parser = Parser(source)
        assert next(parser) == num(1)
        assert source.pulled == 1

    def test_output_before_error(self) -> None:
        parser = parse("1 + 2 * a")
        assert next(parser) == num(1)
        assert next(parser) == num(2)
        with pytest.raises(ParseError) as exc_info:
            next(parser)
        assert exc_info.value.kind == ParseErrorKind.TOKENIZATION
        assert exc_info.value.inner is not None
        assert exc_info.value.inner.position == 8

    def test_stream_ends_after_error(self) -> None:
        parser = parse("1 2")
        assert next(parser) == num(1)
        with pytest.raises(ParseError):
            next(parser)
        assert parser.state == ParserState.DONE
        with pytest.raises(StopIteration):
            next(parser)

    def test_accepts_any_token_iterable(self) -> None:
        tokens = [LPAREN, num(3), op("-"), num(1), RPAREN, op("*"), num(2)]
        assert list(Parser(tokens)) == [num(3), num(1), op("-"), num(2), op("*")]

    def test_counters_at_end(self) -> None:
        parser = parse("(1 + 2) * 3")
        list(parser)
        assert parser.surplus == 1
        assert parser.open_parens == 0
        assert parser.stack == []
