"""Configuration file loading.

A single YAML file (devtimeline_config.yaml) holds the scheduler settings,
an optional default start date and optional input file locations:

    start_date: 2025-01-06
    inputs:
      directory: data
      leaves: holidays/leaves.csv
    scheduler:
      strict: false
      max_run_iterations: 3650
      effort:
        companion_share: 0.25
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigError
from .loader import InputPaths
from .scheduler import SchedulingConfig

CONFIG_FILENAME = "devtimeline_config.yaml"


class InputsConfig(BaseModel):
    """Input table locations; relative paths resolve against the config file."""

    directory: Path | None = None
    roles: Path | None = None
    tasks: Path | None = None
    developers: Path | None = None
    oncalls: Path | None = None
    leaves: Path | None = None

    def resolve(self, base_dir: Path, default_directory: Path | None = None) -> InputPaths:
        """Combine explicit file entries with the conventional names in the directory."""
        if self.directory is not None:
            directory = base_dir / self.directory
        else:
            directory = default_directory or base_dir
        paths = InputPaths.from_directory(directory)
        for field_name in ("roles", "tasks", "developers", "oncalls", "leaves"):
            override: Path | None = getattr(self, field_name)
            if override is not None:
                setattr(paths, field_name, base_dir / override)
        return paths


class UnifiedConfig(BaseModel):
    """Contents of devtimeline_config.yaml."""

    start_date: date | None = None
    inputs: InputsConfig = Field(default_factory=InputsConfig)
    scheduler: SchedulingConfig = Field(default_factory=SchedulingConfig)

    # Directory the file was loaded from, for resolving relative input paths
    base_dir: Path = Field(default_factory=Path, exclude=True)

    def input_paths(self, default_directory: Path | None = None) -> InputPaths:
        return self.inputs.resolve(self.base_dir, default_directory)


def load_unified_config(config_path: Path | str) -> UnifiedConfig:
    """Load configuration from a YAML file.

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or does not
            match the configuration schema
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the top level")

    try:
        config = UnifiedConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    config.base_dir = config_path.parent
    return config


def discover_config(
    explicit_path: Path | None = None, data_dir: Path | None = None
) -> UnifiedConfig | None:
    """Find the configuration file.

    Search order:
    1. Explicit path (must exist)
    2. data directory / devtimeline_config.yaml
    3. Current directory / devtimeline_config.yaml
    """
    if explicit_path is not None:
        return load_unified_config(explicit_path)

    candidates = []
    if data_dir is not None:
        candidates.append(data_dir / CONFIG_FILENAME)
    candidates.append(Path(CONFIG_FILENAME))

    for candidate in candidates:
        if candidate.exists():
            return load_unified_config(candidate)
    return None
