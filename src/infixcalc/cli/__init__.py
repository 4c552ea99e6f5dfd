"""
infixcalc CLI package.

- app.py: the typer application and its commands
- utils.py: shared utilities
"""

from infixcalc.cli.app import app, evaluate_lines, main
from infixcalc.cli.utils import version_callback

__all__ = [
    "app",
    "evaluate_lines",
    "main",
    "version_callback",
]
