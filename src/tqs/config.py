"""Configuration for tqs rendering.

A config file is YAML:

    quote: "'"              # require ''' delimiters (optional)
    methods: [toUpperCase]  # enabled methods (default: all)
    vars:                   # default bindings
      title: Hello
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from tqs.compiler.evaluator import METHODS
from tqs.exceptions import ConfigError


class TqsConfig(BaseModel):
    """Rendering options shared by every render of a template."""

    model_config = {"frozen": True, "extra": "forbid"}

    quote: Literal["'", '"'] | None = Field(
        default=None, description="Quote character the delimiter must use"
    )
    methods: list[str] = Field(
        default_factory=lambda: list(METHODS),
        description="Methods expressions may call",
    )
    vars: dict[str, Any] = Field(
        default_factory=dict, description="Default bindings, overridden per render"
    )

    @field_validator("methods")
    @classmethod
    def check_known_methods(cls, value: list[str]) -> list[str]:
        unknown = [name for name in value if name not in METHODS]
        if unknown:
            raise ValueError(f"Unknown method(s): {', '.join(unknown)}")
        return value


def _read_yaml_mapping(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    return data


def load_config(path: str | Path) -> TqsConfig:
    """Load and validate a YAML config file."""
    path = Path(path)
    data = _read_yaml_mapping(path)

    try:
        return TqsConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e


def load_vars(path: str | Path) -> dict[str, Any]:
    """Load a YAML mapping of bindings."""
    return _read_yaml_mapping(Path(path))
