"""YAML configuration parser for sqflags.

This module provides parsing and validation for sqflags.yaml files:

    options:
      SQ_SRT_LINUX_STATIC: ON
      CMAKE_VERSION: "3.20"
    toolchain:
      cxx_compiler_id: Clang
      frontend_variant: GNU
      target_os: Windows
"""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict

import yaml

from ..core.environment import BuildEnvironmentFacts
from ..core.exceptions import ConfigError
from ..flags.options import Options, cmake_bool

logger = logging.getLogger(__name__)

_BOOL_FACTS = {"msvc", "mingw"}
_PATH_FACTS = {"cxx_compiler"}
_FACT_FIELDS = {f.name for f in fields(BuildEnvironmentFacts)}


@dataclass
class SqFlagsConfig:
    """Complete sqflags configuration."""

    options: Options = field(default_factory=Options)
    toolchain: Dict[str, Any] = field(default_factory=dict)

    def apply(self, facts: BuildEnvironmentFacts) -> BuildEnvironmentFacts:
        """
        Apply toolchain overrides to detected facts.

        Args:
            facts: Detected facts

        Returns:
            New facts with overrides applied
        """
        if not self.toolchain:
            return facts
        return facts.with_overrides(**self.toolchain)


def parse_config(config_path: Path) -> SqFlagsConfig:
    """
    Parse sqflags.yaml configuration file.

    Args:
        config_path: Path to sqflags.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        logger.debug(f"Empty configuration file {config_path}, using defaults")
        return SqFlagsConfig()

    config = parse_config_data(data)
    logger.debug(f"Loaded configuration from {config_path}")
    return config


def parse_config_data(data: Any) -> SqFlagsConfig:
    """
    Validate parsed YAML data.

    Args:
        data: Result of yaml.safe_load

    Raises:
        ConfigError: If the data is not a valid configuration
    """
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration must be a mapping, got {type(data).__name__}"
        )

    unknown = set(data) - {"options", "toolchain"}
    if unknown:
        raise ConfigError(f"Unknown configuration sections: {sorted(unknown)}")

    options_data = data.get("options") or {}
    if not isinstance(options_data, dict):
        raise ConfigError("'options' must be a mapping")

    return SqFlagsConfig(
        options=Options.from_cache(options_data),
        toolchain=_parse_toolchain(data.get("toolchain") or {}),
    )


def _parse_toolchain(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ConfigError("'toolchain' must be a mapping")

    unknown = set(data) - _FACT_FIELDS
    if unknown:
        raise ConfigError(
            f"Unknown toolchain keys: {sorted(unknown)}. "
            f"Valid keys: {sorted(_FACT_FIELDS)}"
        )

    overrides = {}
    for key, value in data.items():
        if key in _BOOL_FACTS:
            overrides[key] = cmake_bool(value)
        elif key in _PATH_FACTS:
            overrides[key] = Path(value) if value else None
        elif value is None:
            overrides[key] = None
        else:
            overrides[key] = str(value)
    return overrides
