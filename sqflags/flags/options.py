"""
Resolver options and CMake value semantics.

Options are the configuration knobs a project sets before resolving
flags, together with the capabilities of the host build tool.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from packaging.version import InvalidVersion, Version

from ..core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CMAKE_VERSION = "3.28"

# First CMake version with the MSVC_RUNTIME_LIBRARY property
MSVC_RUNTIME_PROPERTY_VERSION = Version("3.15")
# First CMake version with target_link_options()
TARGET_LINK_OPTIONS_VERSION = Version("3.13")

_CMAKE_TRUE = {"1", "on", "yes", "true", "y"}
_CMAKE_FALSE = {"0", "off", "no", "false", "n", "ignore", "notfound", ""}


def cmake_bool(value: Any) -> bool:
    """
    Interpret a value with CMake if() truthiness.

    Args:
        value: bool, number or string ('ON', 'OFF', 'YES', 'foo-NOTFOUND', ...)

    Returns:
        True or False as CMake would evaluate it
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0

    text = str(value).strip().lower()
    if text in _CMAKE_TRUE:
        return True
    if text in _CMAKE_FALSE or text.endswith("-notfound"):
        return False
    try:
        return float(text) != 0
    except ValueError:
        # Any other string is a variable reference, undefined here
        return False


@dataclass(frozen=True)
class Options:
    """
    Flag resolution options.

    Attributes:
        linux_static: SQ_SRT_LINUX_STATIC, statically link libstdc++ and
            libgcc on glibc Linux
        msvc_runtime_library: Value the project already chose for
            CMAKE_MSVC_RUNTIME_LIBRARY; left untouched when set
        cmake_version: Version of the host build tool
    """

    linux_static: bool = False
    msvc_runtime_library: Optional[str] = None
    cmake_version: str = DEFAULT_CMAKE_VERSION

    @classmethod
    def from_cache(cls, cache: Mapping[str, Any]) -> "Options":
        """
        Build options from CMake cache-style variables.

        Recognized keys: SQ_SRT_LINUX_STATIC, CMAKE_MSVC_RUNTIME_LIBRARY,
        CMAKE_VERSION. Unknown keys are ignored.

        Args:
            cache: Variable name to value mapping

        Returns:
            Options instance

        Raises:
            ConfigError: If CMAKE_VERSION is a float, which has already lost
                digits (YAML reads an unquoted 3.20 as 3.2)
        """
        runtime = cache.get("CMAKE_MSVC_RUNTIME_LIBRARY")
        version = cache.get("CMAKE_VERSION")
        if isinstance(version, float):
            raise ConfigError(
                f"CMAKE_VERSION must be a quoted string, got number {version} "
                '(write e.g. CMAKE_VERSION: "3.20")'
            )
        return cls(
            linux_static=cmake_bool(cache.get("SQ_SRT_LINUX_STATIC", False)),
            msvc_runtime_library=str(runtime) if runtime is not None else None,
            cmake_version=str(version) if version else DEFAULT_CMAKE_VERSION,
        )

    def _version_at_least(self, minimum: Version) -> bool:
        try:
            return Version(self.cmake_version) >= minimum
        except InvalidVersion:
            logger.debug(
                f"Unparseable CMake version '{self.cmake_version}', "
                "assuming legacy feature set"
            )
            return False

    @property
    def supports_msvc_runtime_property(self) -> bool:
        return self._version_at_least(MSVC_RUNTIME_PROPERTY_VERSION)

    @property
    def supports_target_link_options(self) -> bool:
        return self._version_at_least(TARGET_LINK_OPTIONS_VERSION)
