"""
Core functionality for sqflags.

This package contains the foundational modules that other components depend on.
"""

from .environment import (
    BuildEnvironmentFacts,
    CompilerIdentifier,
    collect_host_facts,
    find_cxx_compiler,
)

from .exceptions import (
    SqFlagsError,
    ConfigError,
    FlagTableError,
    WarningTableError,
    BundleError,
    UnknownModuleError,
)

__all__ = [
    "BuildEnvironmentFacts",
    "CompilerIdentifier",
    "collect_host_facts",
    "find_cxx_compiler",
    "SqFlagsError",
    "ConfigError",
    "FlagTableError",
    "WarningTableError",
    "BundleError",
    "UnknownModuleError",
]
