"""
Pytest configuration and shared fixtures for sqflags tests.
"""

from pathlib import Path
from unittest.mock import Mock

import pytest

from sqflags.cmake.bundle import get_default_registry
from sqflags.core.environment import BuildEnvironmentFacts
from sqflags.toolchain.detector import ToolchainDetector, clear_detection_cache
from sqflags.toolchain.libc_probe import LibcProbe
from sqflags.toolchain.profile import LibcKind


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that invoke a real compiler",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def reset_process_caches():
    """Clear process-wide detection and bundle caches around each test."""
    clear_detection_cache()
    get_default_registry().clear()
    yield
    clear_detection_cache()
    get_default_registry().clear()


# ============================================================================
# Build Environment Facts
# ============================================================================


@pytest.fixture
def msvc_facts():
    """cl.exe on Windows."""
    return BuildEnvironmentFacts(
        c_compiler_id="MSVC",
        cxx_compiler_id="MSVC",
        target_os="Windows",
        msvc=True,
    )


@pytest.fixture
def clang_cl_facts():
    """clang-cl on Windows."""
    return BuildEnvironmentFacts(
        c_compiler_id="Clang",
        cxx_compiler_id="Clang",
        target_os="Windows",
        frontend_variant="MSVC",
        msvc=True,
        compiler_target="x86_64-pc-windows-msvc",
    )


@pytest.fixture
def clang_gnu_msvc_facts():
    """clang++ GNU driver targeting the MSVC toolchain."""
    return BuildEnvironmentFacts(
        c_compiler_id="Clang",
        cxx_compiler_id="Clang",
        target_os="Windows",
        frontend_variant="GNU",
        compiler_target="x86_64-pc-windows-msvc",
    )


@pytest.fixture
def mingw_gcc_facts():
    """MinGW-w64 GCC."""
    return BuildEnvironmentFacts(
        c_compiler_id="GNU",
        cxx_compiler_id="GNU",
        target_os="Windows",
        mingw=True,
        compiler_target="x86_64-w64-mingw32",
    )


@pytest.fixture
def mingw_clang_facts():
    """llvm-mingw clang++, MinGW known only from the target triple."""
    return BuildEnvironmentFacts(
        c_compiler_id="Clang",
        cxx_compiler_id="Clang",
        target_os="Windows",
        frontend_variant="GNU",
        compiler_target="x86_64-w64-mingw32",
    )


@pytest.fixture
def linux_gcc_facts():
    """GCC on Linux."""
    return BuildEnvironmentFacts(
        c_compiler_id="GNU",
        cxx_compiler_id="GNU",
        target_os="Linux",
        frontend_variant="GNU",
        compiler_target="x86_64-linux-gnu",
        cxx_compiler=Path("/usr/bin/g++"),
    )


@pytest.fixture
def linux_clang_facts():
    """Clang on Linux."""
    return BuildEnvironmentFacts(
        c_compiler_id="Clang",
        cxx_compiler_id="Clang",
        target_os="Linux",
        frontend_variant="GNU",
        compiler_target="x86_64-unknown-linux-gnu",
        cxx_compiler=Path("/usr/bin/clang++"),
    )


@pytest.fixture
def macos_facts():
    """AppleClang on macOS."""
    return BuildEnvironmentFacts(
        c_compiler_id="AppleClang",
        cxx_compiler_id="AppleClang",
        target_os="Darwin",
        frontend_variant="GNU",
        compiler_target="arm64-apple-darwin23.1.0",
        cxx_compiler=Path("/usr/bin/clang++"),
    )


# ============================================================================
# Detection helpers
# ============================================================================


def make_probe(kind: LibcKind) -> Mock:
    """Create a libc probe double returning a fixed result."""
    probe = Mock(spec=LibcProbe)
    probe.probe.return_value = kind
    return probe


@pytest.fixture
def glibc_detector():
    """Detector whose probe reports glibc."""
    return ToolchainDetector(probe=make_probe(LibcKind.GLIBC))


@pytest.fixture
def musl_detector():
    """Detector whose probe reports musl."""
    return ToolchainDetector(probe=make_probe(LibcKind.MUSL))


@pytest.fixture
def failing_probe_detector():
    """Detector whose probe could not run the compiler."""
    return ToolchainDetector(probe=make_probe(LibcKind.UNKNOWN))
