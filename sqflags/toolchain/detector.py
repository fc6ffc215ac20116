"""
Toolchain detection - classifies build environment facts into a profile.

The same Clang binary can speak three flag dialects depending on the
frontend it emulates and the linker it targets, so the classification
order matters: MinGW is checked before the generic GNU-driver-on-MSVC
branch.
"""

import functools
import logging
from typing import Optional

from ..core.environment import BuildEnvironmentFacts
from .libc_probe import LibcProbe
from .profile import CompilerFamily, LibcKind, TargetOS, ToolchainProfile

logger = logging.getLogger(__name__)

_CLANG_IDS = ("Clang", "AppleClang")


def normalize_compiler_id(compiler_id: str) -> str:
    """
    Normalize a vendor id for table lookups.

    Args:
        compiler_id: Vendor id as reported by the build tool

    Returns:
        'Clang' for any Clang flavor, otherwise the id unchanged
    """
    compiler_id = (compiler_id or "").strip()
    if compiler_id in _CLANG_IDS:
        return "Clang"
    return compiler_id


def is_mingw(facts: BuildEnvironmentFacts) -> bool:
    """Check for MinGW via the build tool flag or the target triple."""
    if facts.mingw:
        return True
    return bool(facts.compiler_target and "mingw" in facts.compiler_target.lower())


class ToolchainDetector:
    """
    Classify a toolchain from build environment facts.

    Example:
        ```python
        detector = ToolchainDetector()
        profile = detector.detect(facts)
        print(profile.compiler_family)
        ```
    """

    def __init__(self, probe: Optional[LibcProbe] = None):
        """
        Initialize detector.

        Args:
            probe: libc probe used on Linux targets (default: LibcProbe())
        """
        self.probe = probe or LibcProbe()

    def detect(self, facts: BuildEnvironmentFacts) -> ToolchainProfile:
        """
        Classify the toolchain described by facts.

        Args:
            facts: Build environment facts

        Returns:
            ToolchainProfile; UNKNOWN family when no rule matches
        """
        target_os = TargetOS.from_system_name(facts.target_os)
        compiler_id = normalize_compiler_id(facts.cxx_compiler_id)
        frontend = (facts.frontend_variant or "").upper()
        mingw = is_mingw(facts)

        if target_os is TargetOS.WINDOWS:
            profile = self._classify_windows(compiler_id, frontend, facts.msvc, mingw)
        elif target_os is TargetOS.LINUX:
            profile = self._classify_linux(compiler_id, facts)
        else:
            profile = ToolchainProfile(target_os=target_os, compiler_id=compiler_id)

        if profile.is_supported:
            logger.info(f"Detected toolchain {profile} for {facts}")
        else:
            logger.info(f"Unsupported toolchain {facts}; no flags will be applied")
        return profile

    def _classify_windows(
        self, compiler_id: str, frontend: str, msvc: bool, mingw: bool
    ) -> ToolchainProfile:
        is_clang = compiler_id == "Clang"

        if msvc or compiler_id == "MSVC" or (is_clang and frontend == "MSVC"):
            family = (
                CompilerFamily.CLANG_MSVC_FRONTEND
                if is_clang
                else CompilerFamily.MSVC
            )
            return ToolchainProfile(
                compiler_family=family,
                target_os=TargetOS.WINDOWS,
                libc_kind=LibcKind.MSVCRT,
                compiler_id=compiler_id,
            )

        # A missing frontend variant on Clang means the GNU driver
        if is_clang and not mingw:
            return ToolchainProfile(
                compiler_family=CompilerFamily.CLANG_GNU_FRONTEND_ON_MSVC_TARGET,
                target_os=TargetOS.WINDOWS,
                libc_kind=LibcKind.MSVCRT,
                compiler_id=compiler_id,
            )

        # GNU on Windows is always a MinGW driver
        if mingw or compiler_id == "GNU":
            return ToolchainProfile(
                compiler_family=CompilerFamily.GNU,
                target_os=TargetOS.WINDOWS,
                libc_kind=LibcKind.MSVCRT,
                is_mingw=True,
                compiler_id=compiler_id,
            )

        return ToolchainProfile(target_os=TargetOS.WINDOWS, compiler_id=compiler_id)

    def _classify_linux(
        self, compiler_id: str, facts: BuildEnvironmentFacts
    ) -> ToolchainProfile:
        if compiler_id == "GNU":
            family = CompilerFamily.GNU
        elif compiler_id == "Clang":
            family = CompilerFamily.CLANG_GNU_FRONTEND
        else:
            return ToolchainProfile(target_os=TargetOS.LINUX, compiler_id=compiler_id)

        libc = self.probe.probe(facts.cxx_compiler)
        if libc is LibcKind.UNKNOWN:
            logger.debug("libc undetermined, assuming glibc-like behavior")

        return ToolchainProfile(
            compiler_family=family,
            target_os=TargetOS.LINUX,
            libc_kind=libc,
            compiler_id=compiler_id,
        )


@functools.lru_cache(maxsize=None)
def detect_toolchain(facts: BuildEnvironmentFacts) -> ToolchainProfile:
    """
    Detect the toolchain profile for facts, memoized process-wide.

    The libc probe runs at most once per distinct facts value.

    Args:
        facts: Build environment facts

    Returns:
        ToolchainProfile
    """
    return ToolchainDetector().detect(facts)


def clear_detection_cache():
    """
    Clear the toolchain detection cache.

    Forces the next detect_toolchain() call to classify and probe again.
    """
    detect_toolchain.cache_clear()
