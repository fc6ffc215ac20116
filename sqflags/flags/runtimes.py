"""
Static runtime linkage flags (SQ_SRT module).

Prefers static linkage of the language runtime and low-level support
libraries where it is safe, keeping system libraries dynamic:

- MSVC / clang-cl: static MSVC runtime (/MT, /MTd) through the
  CMAKE_MSVC_RUNTIME_LIBRARY property, or raw flags on old CMake
- clang++ GNU driver with the MSVC toolchain: static CRT macros at
  compile time plus MSVC linker directives forwarded through -Wl
- MinGW: static libstdc++/libgcc, winpthread pulled in completely,
  UCRT left dynamic
- Linux musl: fully static link
- Linux glibc: nothing unless SQ_SRT_LINUX_STATIC is set
"""

import logging
from typing import List

from ..toolchain.profile import (
    CompilerFamily,
    LibcKind,
    TargetOS,
    ToolchainProfile,
)
from .expressions import ConfigConditional, FlagExpr, Literal, literals
from .flagset import FlagModule, FlagSet
from .options import Options
from .resolver import FlagResolver

logger = logging.getLogger(__name__)

RUNTIMES_MODULE = FlagModule(
    name="SQ_SRT",
    c_variable="SQ_SRT_COMPILE_FLAGS_C",
    cxx_variable="SQ_SRT_COMPILE_FLAGS_CXX",
    link_variable="SQ_SRT_LINK_ITEMS",
)

MSVC_RUNTIME_PROPERTY = "CMAKE_MSVC_RUNTIME_LIBRARY"
DEBUG_CONFIG = "Debug"

# Dynamic CRT import libraries, release and debug names
DYNAMIC_CRT_LIBS = [
    "msvcrt",
    "msvcrtd",
    "ucrt",
    "ucrtd",
    "vcruntime",
    "vcruntimed",
    "msvcprt",
    "msvcprtd",
]
STATIC_CRT_RELEASE_LIBS = ["libucrt", "libvcruntime", "libcmt", "libcpmt"]
STATIC_CRT_DEBUG_LIBS = ["libucrtd", "libvcruntimed", "libcmtd", "libcpmtd"]
CRT_COMPAT_LIB = "oldnames"

CLANG_STATIC_CRT_COMPILE_FLAGS = [
    "-fms-runtime-lib=static",
    "-U_DLL",
    "-U_MT",
    "-D_MT",
]

STATIC_LIBSTDCXX_FLAGS = ["-static-libstdc++", "-static-libgcc"]
MINGW_WHOLE_ARCHIVE_BEGIN = "-Wl,-Bstatic,--whole-archive"
MINGW_WHOLE_ARCHIVE_END = "-Wl,-Bdynamic,--no-whole-archive"
MINGW_THREAD_LIB = "-lwinpthread"
FULLY_STATIC_FLAG = "-static"


def nodefaultlib(name: str) -> str:
    return f"-Wl,/NODEFAULTLIB:{name}"


def defaultlib(name: str) -> str:
    return f"-Wl,/DEFAULTLIB:{name}"


class StaticRuntimeResolver(FlagResolver):
    """Resolve static runtime flags for the SQ_SRT module."""

    module = RUNTIMES_MODULE

    def resolve(self, profile: ToolchainProfile, options: Options) -> FlagSet:
        """Resolve static runtime flags for a toolchain."""
        family = profile.compiler_family

        if family in (CompilerFamily.MSVC, CompilerFamily.CLANG_MSVC_FRONTEND):
            return self._msvc_runtime(options)

        if family is CompilerFamily.CLANG_GNU_FRONTEND_ON_MSVC_TARGET:
            return self._clang_gnu_msvc_runtime()

        if profile.target_os is TargetOS.WINDOWS and family is CompilerFamily.GNU:
            return self._mingw_runtime()

        if profile.target_os is TargetOS.LINUX and family in (
            CompilerFamily.GNU,
            CompilerFamily.CLANG_GNU_FRONTEND,
        ):
            return self._linux_runtime(profile.libc_kind, options)

        logger.debug(f"No static runtime flags for {profile}")
        return FlagSet()

    def _msvc_runtime(self, options: Options) -> FlagSet:
        if options.msvc_runtime_library is not None:
            logger.debug(
                f"{MSVC_RUNTIME_PROPERTY} already set to "
                f"'{options.msvc_runtime_library}', leaving it alone"
            )
            return FlagSet()

        if options.supports_msvc_runtime_property:
            value = [
                Literal("MultiThreaded"),
                ConfigConditional(DEBUG_CONFIG, "Debug"),
            ]
            return FlagSet.build(properties={MSVC_RUNTIME_PROPERTY: value})

        logger.info(
            f"CMake {options.cmake_version} lacks {MSVC_RUNTIME_PROPERTY}, "
            "falling back to /MT flags"
        )
        flags = [
            ConfigConditional(DEBUG_CONFIG, "/MT", negate=True),
            ConfigConditional(DEBUG_CONFIG, "/MTd"),
        ]
        return FlagSet.build(c=flags, cxx=flags)

    def _clang_gnu_msvc_runtime(self) -> FlagSet:
        compile_flags = literals(*CLANG_STATIC_CRT_COMPILE_FLAGS)

        # Exclusions must come before any static CRT inclusion
        link: List[FlagExpr] = [
            Literal(nodefaultlib(lib)) for lib in DYNAMIC_CRT_LIBS
        ]
        link.extend(
            ConfigConditional(DEBUG_CONFIG, defaultlib(lib), negate=True)
            for lib in STATIC_CRT_RELEASE_LIBS
        )
        link.extend(
            ConfigConditional(DEBUG_CONFIG, defaultlib(lib))
            for lib in STATIC_CRT_DEBUG_LIBS
        )
        link.append(Literal(defaultlib(CRT_COMPAT_LIB)))

        return FlagSet.build(c=compile_flags, cxx=compile_flags, link=link)

    def _mingw_runtime(self) -> FlagSet:
        # UCRT and the IO completion runtime stay dynamic
        link = literals(
            *STATIC_LIBSTDCXX_FLAGS,
            MINGW_WHOLE_ARCHIVE_BEGIN,
            MINGW_THREAD_LIB,
            MINGW_WHOLE_ARCHIVE_END,
        )
        return FlagSet.build(link=link)

    def _linux_runtime(self, libc: LibcKind, options: Options) -> FlagSet:
        if libc is LibcKind.MUSL:
            return FlagSet.build(link=literals(FULLY_STATIC_FLAG))

        if options.linux_static:
            return FlagSet.build(link=literals(*STATIC_LIBSTDCXX_FLAGS))

        return FlagSet()
