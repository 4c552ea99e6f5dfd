"""
Configuration for the infixcalc command line.

Configuration is loaded from the ``[calc]`` section of ``infixcalc.toml``.
Every setting has a default, so the file is optional.
"""

from __future__ import annotations

import logging
import tomllib
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from infixcalc.core.errors import ConfigError

DEFAULT_CONFIG_FILE = "infixcalc.toml"


class OffsetMode(StrEnum):
    """How tokenizer error positions are reported."""

    RELATIVE = "relative"  # from the scan position at the failing step
    ABSOLUTE = "absolute"  # from the start of the line


class CalcConfig(BaseModel):
    """Settings for the line-evaluation loop."""

    offsets: OffsetMode = OffsetMode.RELATIVE
    show_postfix: bool = Field(default=True, description="Print postfix form before the value")
    skip_blank: bool = Field(default=False, description="Ignore whitespace-only lines")
    log_level: str = Field(default="WARNING", description="Root logging level")

    model_config = ConfigDict(extra="forbid")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value}")
        return level

    @property
    def absolute_offsets(self) -> bool:
        return self.offsets == OffsetMode.ABSOLUTE


def load_config(toml_path: Path) -> CalcConfig:
    """
    Load calculator configuration from a TOML file.

    Args:
        toml_path: Path to infixcalc.toml

    Returns:
        CalcConfig with values from the file, or defaults if the file or its
        [calc] section is absent.

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid settings.
    """
    if not toml_path.exists():
        return CalcConfig()

    try:
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot read {toml_path}: {e}") from e

    section = data.get("calc", {})
    if not isinstance(section, dict):
        raise ConfigError(f"{toml_path}: [calc] must be a table")

    try:
        return CalcConfig.model_validate(section)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid configuration in {toml_path}: {e}") from e
