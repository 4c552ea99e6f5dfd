"""Installed version of infixcalc."""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Version from the installed distribution metadata."""
    try:
        return version("infixcalc")
    except PackageNotFoundError:
        # Running from a source checkout that was never installed.
        return "0+unknown"
