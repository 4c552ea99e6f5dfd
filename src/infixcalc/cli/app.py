"""
infixcalc command line.

Commands:
- run: evaluate every line of a file (or stdin) independently
- eval: evaluate a single expression
- postfix: show the postfix form of a single expression
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from pathlib import Path

import typer

from infixcalc.cli.utils import configure_logging, print_error, version_callback
from infixcalc.config import DEFAULT_CONFIG_FILE, CalcConfig, load_config
from infixcalc.core.errors import CalcError, ConfigError, EvaluationError
from infixcalc.core.evaluator import evaluate_line
from infixcalc.core.parser import to_postfix
from infixcalc.core.printer import format_error, format_result, format_tokens

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Evaluate integer arithmetic: + - * / and parentheses, one expression per line.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    config_path: Path = typer.Option(
        Path(DEFAULT_CONFIG_FILE), "--config", "-c", help="Configuration file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging"),
) -> None:
    """infixcalc CLI main callback for global options."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        print_error(e.message)
        raise typer.Exit(code=2) from e

    configure_logging("DEBUG" if verbose else config.log_level)
    ctx.obj = config


def _config(ctx: typer.Context) -> CalcConfig:
    return ctx.obj if isinstance(ctx.obj, CalcConfig) else CalcConfig()


def evaluate_lines(lines: Iterable[str], config: CalcConfig) -> int:
    """Evaluate each line independently. Returns the number of failed lines."""
    failures = 0
    for lineno, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if config.skip_blank and not line.strip():
            continue
        try:
            evaluation = evaluate_line(line)
        except CalcError as e:
            failures += 1
            if isinstance(e, EvaluationError) and e.is_defect:
                logger.warning("line %d: internal evaluation defect: %s", lineno, e.message)
            else:
                logger.info("line %d rejected: %s", lineno, e.message)
            print_error(format_error(line, e, config.absolute_offsets))
            continue
        typer.echo(format_result(evaluation, config.show_postfix))
    return failures


@app.command("run")
def run_command(
    ctx: typer.Context,
    file: Path | None = typer.Argument(
        None, exists=True, dir_okay=False, help="File of expressions (default: stdin)"
    ),
    skip_blank: bool | None = typer.Option(
        None, "--skip-blank/--keep-blank", help="Ignore whitespace-only lines"
    ),
) -> None:
    """
    Evaluate every line of FILE, or of standard input.

    Results go to stdout, failures to stderr. A failing line does not stop
    the lines after it; the exit code is 1 if any line failed.
    """
    config = _config(ctx)
    if skip_blank is not None:
        config = config.model_copy(update={"skip_blank": skip_blank})

    if file is None:
        failures = evaluate_lines(sys.stdin, config)
    else:
        with open(file, encoding="utf-8") as f:
            failures = evaluate_lines(f, config)

    if failures:
        raise typer.Exit(code=1)


@app.command("eval")
def eval_command(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression, e.g. '1 + 2 * 3'"),
) -> None:
    """Evaluate a single expression."""
    config = _config(ctx)
    try:
        evaluation = evaluate_line(expression)
    except CalcError as e:
        print_error(format_error(expression, e, config.absolute_offsets))
        raise typer.Exit(code=1) from e
    typer.echo(format_result(evaluation, config.show_postfix))


@app.command("postfix")
def postfix_command(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression, e.g. '1 * (2 + 3)'"),
) -> None:
    """Print the postfix (Reverse Polish) form of an expression."""
    config = _config(ctx)
    try:
        tokens = to_postfix(expression)
    except CalcError as e:
        print_error(format_error(expression, e, config.absolute_offsets))
        raise typer.Exit(code=1) from e
    typer.echo(format_tokens(tokens))


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
