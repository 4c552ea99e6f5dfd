"""Shared pytest fixtures for infixcalc tests."""

from pathlib import Path

import pytest
from typer.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test inside an empty directory (no infixcalc.toml)."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
