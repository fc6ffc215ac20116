"""
Build environment facts for sqflags.

This module defines the explicit input of toolchain detection: the
compiler identity, frontend variant, target platform and compiler target
triple that a build tool reports about its configured toolchain.

Facts can be built by hand (tests, build-description code that already
knows its toolchain) or collected from the running host:

Usage:
    from sqflags.core.environment import collect_host_facts

    facts = collect_host_facts()
    print(f"Compiler: {facts.cxx_compiler_id} targeting {facts.target_os}")
"""

import logging
import os
import platform
import re
import shutil
import subprocess
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

import distro

logger = logging.getLogger(__name__)

# Candidate C++ compilers searched in PATH when none is given
_CXX_CANDIDATES = ["c++", "g++", "clang++", "clang-cl", "cl"]


@dataclass(frozen=True)
class BuildEnvironmentFacts:
    """
    Toolchain identity as reported by the host build tool.

    Attributes:
        c_compiler_id: C compiler vendor id ('MSVC', 'Clang', 'GNU', ...)
        cxx_compiler_id: C++ compiler vendor id
        target_os: Target system name ('Windows', 'Linux', 'Darwin', ...)
        frontend_variant: 'MSVC' or 'GNU' for drivers that emulate one,
            None when the build tool does not report it
        msvc: True for cl and clang-cl
        mingw: True for MinGW toolchains
        compiler_target: Target triple (e.g., 'x86_64-w64-mingw32')
        cxx_compiler: C++ compiler executable, used for the libc probe
        distribution: Host Linux distribution id, informational only
    """

    c_compiler_id: str = ""
    cxx_compiler_id: str = ""
    target_os: str = ""
    frontend_variant: Optional[str] = None
    msvc: bool = False
    mingw: bool = False
    compiler_target: Optional[str] = None
    cxx_compiler: Optional[Path] = None
    distribution: str = ""

    def with_overrides(self, **overrides) -> "BuildEnvironmentFacts":
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)

    def __str__(self) -> str:
        parts = [self.cxx_compiler_id or "unknown-compiler"]
        if self.frontend_variant:
            parts.append(f"({self.frontend_variant} frontend)")
        parts.append(f"on {self.target_os or 'unknown-os'}")
        if self.compiler_target:
            parts.append(f"[{self.compiler_target}]")
        return " ".join(parts)


class CompilerIdentifier:
    """
    Identify a compiler executable the way a build tool would.

    Runs the compiler with --version and -dumpmachine and maps the
    output to a vendor id and a target triple.
    """

    def __init__(self, timeout: float = 5):
        self.timeout = timeout

    def identify(self, compiler_path: Path) -> Optional[str]:
        """
        Identify the compiler vendor.

        Args:
            compiler_path: Path to compiler executable

        Returns:
            'MSVC', 'Clang', 'AppleClang', 'GNU' or None if unknown
        """
        output = self._run(compiler_path, ["--version"], require_success=False)
        if output is None:
            return None

        if re.search(r"Microsoft \(R\) C/C\+\+", output):
            return "MSVC"
        if "Apple clang" in output:
            return "AppleClang"
        if re.search(r"\bclang version\b", output):
            return "Clang"
        if "Free Software Foundation" in output or "(GCC)" in output:
            return "GNU"

        logger.debug(f"Unrecognized compiler banner: {output[:200]}")
        return None

    def extract_target(self, compiler_path: Path) -> Optional[str]:
        """
        Extract target triplet from compiler via -dumpmachine.

        Args:
            compiler_path: Path to compiler executable

        Returns:
            Target triplet string or None if extraction failed
        """
        output = self._run(compiler_path, ["-dumpmachine"], require_success=True)
        if output:
            return output.strip() or None
        return None

    def _run(self, compiler_path: Path, args, require_success: bool) -> Optional[str]:
        try:
            result = subprocess.run(
                [str(compiler_path), *args],
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.debug(f"Timeout running {compiler_path} {' '.join(args)}")
            return None
        except OSError as e:
            logger.debug(f"Failed to run {compiler_path}: {e}")
            return None

        if require_success and result.returncode != 0:
            logger.debug(
                f"{compiler_path} {' '.join(args)} returned {result.returncode}"
            )
            return None

        return result.stdout + result.stderr


def find_cxx_compiler() -> Optional[Path]:
    """
    Locate the C++ compiler a build tool would pick by default.

    Honors the CXX environment variable, then searches PATH.

    Returns:
        Path to compiler or None if none was found
    """
    env_cxx = os.environ.get("CXX")
    if env_cxx:
        found = shutil.which(env_cxx)
        if found:
            return Path(found)
        logger.debug(f"CXX={env_cxx} not found in PATH")

    for name in _CXX_CANDIDATES:
        found = shutil.which(name)
        if found:
            return Path(found)

    return None


def collect_host_facts(
    cxx_compiler: Optional[Path] = None,
    identifier: Optional[CompilerIdentifier] = None,
) -> BuildEnvironmentFacts:
    """
    Collect build environment facts for a native build on this host.

    Args:
        cxx_compiler: C++ compiler to describe (default: auto-detected)
        identifier: Compiler identifier to use (default: new instance)

    Returns:
        BuildEnvironmentFacts; fields that cannot be determined stay empty
    """
    identifier = identifier or CompilerIdentifier()
    system = platform.system()
    compiler = cxx_compiler or find_cxx_compiler()

    compiler_id = ""
    frontend = None
    target = None
    if compiler is not None:
        compiler_id = identifier.identify(compiler) or ""
        if compiler_id in ("Clang", "AppleClang"):
            stem = compiler.name.lower()
            frontend = "MSVC" if stem.startswith("clang-cl") else "GNU"
        if compiler_id != "MSVC" and frontend != "MSVC":
            target = identifier.extract_target(compiler)
    else:
        logger.info("No C++ compiler found; toolchain facts will be incomplete")

    is_msvc = compiler_id == "MSVC" or frontend == "MSVC"
    facts = BuildEnvironmentFacts(
        c_compiler_id=compiler_id,
        cxx_compiler_id=compiler_id,
        target_os=system,
        frontend_variant=frontend,
        msvc=is_msvc,
        mingw=bool(target and "mingw" in target.lower()),
        compiler_target=target,
        cxx_compiler=compiler,
        distribution=distro.id() if system == "Linux" else "",
    )
    logger.debug(f"Collected host facts: {facts}")
    return facts


__all__ = [
    "BuildEnvironmentFacts",
    "CompilerIdentifier",
    "find_cxx_compiler",
    "collect_host_facts",
]
