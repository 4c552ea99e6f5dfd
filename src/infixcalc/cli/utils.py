"""
infixcalc CLI utilities.

Shared helpers used by the command modules.
"""

from __future__ import annotations

import logging
import platform

import typer
from rich.console import Console

from infixcalc._version import get_version

err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"infixcalc version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        python = f"{platform.python_implementation()} {platform.python_version()}"
        typer.echo(f"  Python:        {python}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        raise typer.Exit()


def configure_logging(level: str) -> None:
    """Route log records to stderr at the given level name."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def print_error(message: str) -> None:
    """Print a message to stderr verbatim (no markup, no wrapping)."""
    err_console.print(message, markup=False, highlight=False, soft_wrap=True)
