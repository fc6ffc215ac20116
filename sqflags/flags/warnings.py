"""
Compiler warning flags (SQ_CW module).

Flags come from the packaged YAML table `data/warnings.yaml`, loaded once
per process.

Example:
    ```python
    from sqflags.flags.warnings import WarningFlagsResolver

    flags = WarningFlagsResolver().resolve(profile, Options())
    print(flags.compile_flags("CXX"))
    ```
"""

import functools
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from ..core.exceptions import WarningTableError
from ..toolchain.profile import CompilerFamily, ToolchainProfile
from .expressions import literals
from .flagset import FlagModule, FlagSet
from .options import Options
from .resolver import FlagResolver

logger = logging.getLogger(__name__)

DEFAULT_TABLE_PATH = Path(__file__).parent / "data" / "warnings.yaml"

WARNINGS_MODULE = FlagModule(
    name="SQ_CW",
    c_variable="SQ_CW_COMPILE_OPTIONS_C",
    cxx_variable="SQ_CW_COMPILE_OPTIONS_CXX",
)

MSVC_DIALECT_FAMILIES = (
    CompilerFamily.MSVC,
    CompilerFamily.CLANG_MSVC_FRONTEND,
)


@dataclass(frozen=True)
class WarningTable:
    """
    Parsed warning table.

    Attributes:
        msvc: MSVC dialect flags, shared by C and C++
        gnu_base: GNU dialect baseline for C and C++
        gnu_cxx: GNU dialect flags added for C++ only
        gnu_compilers: Per compiler id extras, {'c': [...], 'cxx': [...]}
    """

    msvc: Tuple[str, ...]
    gnu_base: Tuple[str, ...]
    gnu_cxx: Tuple[str, ...]
    gnu_compilers: Dict[str, Dict[str, Tuple[str, ...]]] = field(
        default_factory=dict
    )

    def compiler_extras(self, compiler_id: str, language: str) -> Tuple[str, ...]:
        """
        Get compiler-specific GNU dialect extras.

        Args:
            compiler_id: Normalized compiler id ('Clang', 'GNU')
            language: 'c' or 'cxx'
        """
        return self.gnu_compilers.get(compiler_id, {}).get(language, ())


def _flag_list(data: Dict[str, Any], key: str, where: str) -> Tuple[str, ...]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(f, str) for f in value):
        raise WarningTableError(f"'{where}.{key}' must be a list of strings")
    return tuple(value)


def _section(data: Dict[str, Any], key: str, where: str) -> Dict[str, Any]:
    value = data.get(key)
    if not isinstance(value, dict):
        raise WarningTableError(f"Missing or invalid section '{where}{key}'")
    return value


def parse_warning_table(data: Any) -> WarningTable:
    """
    Validate parsed YAML data and build a WarningTable.

    Args:
        data: Result of yaml.safe_load

    Raises:
        WarningTableError: If required sections are missing or malformed
    """
    if not isinstance(data, dict):
        raise WarningTableError(
            f"Warning table must be a mapping, got {type(data).__name__}"
        )

    msvc = _section(data, "msvc", "")
    gnu = _section(data, "gnu", "")

    compilers = {}
    for compiler_id, extras in (gnu.get("compilers") or {}).items():
        if not isinstance(extras, dict):
            raise WarningTableError(
                f"'gnu.compilers.{compiler_id}' must be a mapping"
            )
        where = f"gnu.compilers.{compiler_id}"
        compilers[compiler_id] = {
            "c": _flag_list(extras, "c", where),
            "cxx": _flag_list(extras, "cxx", where),
        }

    return WarningTable(
        msvc=_flag_list(msvc, "common", "msvc"),
        gnu_base=_flag_list(gnu, "base", "gnu"),
        gnu_cxx=_flag_list(gnu, "cxx", "gnu"),
        gnu_compilers=compilers,
    )


@functools.lru_cache(maxsize=None)
def load_warning_table(path: Path = DEFAULT_TABLE_PATH) -> WarningTable:
    """
    Load and cache a warning table file.

    Args:
        path: YAML file (default: packaged table)

    Raises:
        WarningTableError: If the file is missing, unreadable or malformed
    """
    if not path.exists():
        raise WarningTableError(f"Warning table not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise WarningTableError(f"Invalid YAML syntax in {path}: {e}") from e

    table = parse_warning_table(data)
    logger.debug(f"Loaded warning table from {path}")
    return table


class WarningFlagsResolver(FlagResolver):
    """
    Resolve warning flags for the SQ_CW module.

    MSVC and clang-cl get the MSVC dialect; every other supported family
    gets the GNU dialect. The two are never mixed.
    """

    module = WARNINGS_MODULE

    def __init__(self, table: Optional[WarningTable] = None):
        """
        Initialize resolver.

        Args:
            table: Warning table (default: packaged table)
        """
        self.table = table or load_warning_table()

    def resolve(self, profile: ToolchainProfile, options: Options) -> FlagSet:
        """Resolve warning flags for a toolchain."""
        family = profile.compiler_family

        if family is CompilerFamily.UNKNOWN:
            logger.debug("No warning flags for unsupported toolchain")
            return FlagSet()

        if family in MSVC_DIALECT_FAMILIES:
            flags = literals(*self.table.msvc)
            return FlagSet.build(c=flags, cxx=flags)

        c_flags: List[str] = list(self.table.gnu_base)
        cxx_flags: List[str] = list(self.table.gnu_base)
        cxx_flags.extend(self.table.gnu_cxx)

        c_flags.extend(self.table.compiler_extras(profile.compiler_id, "c"))
        cxx_flags.extend(self.table.compiler_extras(profile.compiler_id, "cxx"))

        return FlagSet.build(c=literals(*c_flags), cxx=literals(*cxx_flags))
