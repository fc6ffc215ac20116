"""
Flag resolution for sqflags.

Maps a ToolchainProfile and Options to FlagSets for the SQ_CW (compiler
warnings) and SQ_SRT (static runtimes) modules.
"""

from .expressions import (
    Literal,
    ConfigConditional,
    FlagExpr,
    expand,
    concat,
)
from .options import Options, cmake_bool
from .flagset import FlagModule, FlagSet, LANGUAGES
from .resolver import FlagResolver
from .warnings import (
    WarningFlagsResolver,
    WarningTable,
    WARNINGS_MODULE,
    load_warning_table,
)
from .runtimes import StaticRuntimeResolver, RUNTIMES_MODULE
from .registry import available_modules, get_resolver

__all__ = [
    "Literal",
    "ConfigConditional",
    "FlagExpr",
    "expand",
    "concat",
    "Options",
    "cmake_bool",
    "FlagModule",
    "FlagSet",
    "LANGUAGES",
    "FlagResolver",
    "WarningFlagsResolver",
    "WarningTable",
    "WARNINGS_MODULE",
    "load_warning_table",
    "StaticRuntimeResolver",
    "RUNTIMES_MODULE",
    "available_modules",
    "get_resolver",
]
