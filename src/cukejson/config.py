"""Configuration management for cukejson."""

import tomllib
from pathlib import Path

import tomli_w
from pydantic import BaseModel, Field, ValidationError

from .constants import DEFAULT_CONFIG_FILE, DEFAULT_INDENT
from .errors import ConfigError


class FormatterConfig(BaseModel):
    """Configuration for building the report."""

    strict: bool = Field(
        default=False,
        description="Fail on records referencing unknown ids instead of skipping them",
    )
    include_hooks: bool = Field(
        default=False,
        description="Add before/after hook results to scenario elements",
    )


class OutputConfig(BaseModel):
    """Configuration for writing the report."""

    indent: int = Field(default=DEFAULT_INDENT, ge=0, description="JSON indentation")


class CukejsonConfig(BaseModel):
    """Root configuration for cukejson."""

    formatter: FormatterConfig = Field(default_factory=FormatterConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def load_config(config_path: Path | None = None) -> CukejsonConfig:
    """Load config from a TOML file.

    Args:
        config_path: Path to the config file (default: .cukejson.toml in cwd)

    Returns:
        Loaded configuration, or defaults if the file doesn't exist

    Raises:
        ConfigError: If the file is not valid TOML or has invalid values
    """
    config_path = config_path or Path(DEFAULT_CONFIG_FILE)
    if not config_path.exists():
        return CukejsonConfig()
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        return CukejsonConfig.model_validate(data)
    except (tomllib.TOMLDecodeError, ValidationError) as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e


def write_config_template(config_path: Path) -> Path:
    """Write default config template.

    Args:
        config_path: Destination file

    Returns:
        Path to the written config file
    """
    template = {
        "formatter": {"strict": False, "include_hooks": False},
        "output": {"indent": DEFAULT_INDENT},
    }
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
