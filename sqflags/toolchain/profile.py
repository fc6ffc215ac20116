"""
Toolchain classification produced by detection.

A ToolchainProfile is the only input the flag resolvers look at. It is
computed once from BuildEnvironmentFacts and never mutated afterwards.
"""

from dataclasses import dataclass
from enum import Enum


class CompilerFamily(Enum):
    """Flag dialect and linker combination of a compiler driver."""

    MSVC = "msvc"  # cl.exe
    CLANG_MSVC_FRONTEND = "clang-msvc-frontend"  # clang-cl
    CLANG_GNU_FRONTEND_ON_MSVC_TARGET = "clang-gnu-on-msvc"  # clang++ + lld-link
    GNU = "gnu"  # gcc/g++, MinGW drivers
    CLANG_GNU_FRONTEND = "clang-gnu-frontend"  # clang/clang++ on Linux
    UNKNOWN = "unknown"


class TargetOS(Enum):
    """Target operating system."""

    WINDOWS = "windows"
    LINUX = "linux"
    MACOS = "macos"
    OTHER = "other"

    @classmethod
    def from_system_name(cls, name: str) -> "TargetOS":
        """
        Map a build-tool system name to a TargetOS.

        Args:
            name: System name such as 'Windows', 'Linux' or 'Darwin'

        Returns:
            Matching TargetOS, OTHER for anything unrecognized
        """
        key = (name or "").strip().lower()
        if key in ("windows", "win32", "msys", "cygwin"):
            return cls.WINDOWS
        if key == "linux":
            return cls.LINUX
        if key in ("darwin", "macos", "osx"):
            return cls.MACOS
        return cls.OTHER


class LibcKind(Enum):
    """C library implementation of the target."""

    GLIBC = "glibc"
    MUSL = "musl"
    MSVCRT = "msvcrt"
    UNKNOWN = "unknown"  # Treated like glibc


@dataclass(frozen=True)
class ToolchainProfile:
    """
    Immutable toolchain classification.

    Attributes:
        compiler_family: Flag dialect / linker classification
        target_os: Target operating system
        libc_kind: C library (probed on Linux only)
        is_mingw: True for MinGW toolchains
        compiler_id: Normalized C++ vendor id ('GNU', 'Clang', 'MSVC', '')
    """

    compiler_family: CompilerFamily = CompilerFamily.UNKNOWN
    target_os: TargetOS = TargetOS.OTHER
    libc_kind: LibcKind = LibcKind.UNKNOWN
    is_mingw: bool = False
    compiler_id: str = ""

    @property
    def is_supported(self) -> bool:
        return self.compiler_family is not CompilerFamily.UNKNOWN

    @property
    def is_clang(self) -> bool:
        return self.compiler_id == "Clang"

    @property
    def is_gcc(self) -> bool:
        return self.compiler_id == "GNU"

    def __str__(self) -> str:
        parts = [self.compiler_family.value, self.target_os.value]
        if self.is_mingw:
            parts.append("mingw")
        if self.libc_kind is not LibcKind.UNKNOWN:
            parts.append(self.libc_kind.value)
        return "-".join(parts)
