"""Configuration for leaf.

leaf.yaml schema:
- root: directory templates are loaded from (relative to the config file)
- suffix: file suffix appended to template names
- cache: memoise compiled templates
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from leaf.exceptions import ConfigError

CONFIG_FILENAME = "leaf.yaml"
ROOT_ENV = "LEAF_ROOT"


class LeafConfig(BaseModel):
    """Main leaf.yaml configuration."""

    root: Path = Field(default_factory=Path.cwd, description="Template root directory")
    suffix: str = Field(default=".leaf", description="Template file suffix")
    cache: bool = Field(default=True, description="Cache compiled templates")


def find_config() -> Optional[Path]:
    """Find leaf.yaml in current directory or parents."""
    cwd = Path.cwd()
    for parent in [cwd] + list(cwd.parents):
        candidate = parent / CONFIG_FILENAME
        if candidate.exists():
            return candidate
    return None


def load_config(path: Path) -> LeafConfig:
    """Load leaf.yaml from path.

    Raises:
        ConfigError: If the file is missing, not YAML, or fails validation.
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")

    try:
        config = LeafConfig(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config in {path}: {exc}") from exc

    if "root" in data and not config.root.is_absolute():
        config.root = path.parent / config.root
    return config


def resolve_config(path: Optional[Path] = None) -> LeafConfig:
    """Config for the CLI: explicit file, else leaf.yaml nearby, else defaults.

    The LEAF_ROOT environment variable overrides `root`.
    """
    if path is None:
        path = find_config()
    config = load_config(path) if path is not None else LeafConfig()

    env_root = os.environ.get(ROOT_ENV)
    if env_root:
        config.root = Path(env_root)
    return config
