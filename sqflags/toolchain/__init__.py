"""
Toolchain detection for sqflags.

Classifies compiler vendor, frontend variant, target platform and C
library into a ToolchainProfile.
"""

from .profile import (
    CompilerFamily,
    TargetOS,
    LibcKind,
    ToolchainProfile,
)
from .libc_probe import LibcProbe
from .detector import (
    ToolchainDetector,
    detect_toolchain,
    clear_detection_cache,
    normalize_compiler_id,
)

__all__ = [
    "CompilerFamily",
    "TargetOS",
    "LibcKind",
    "ToolchainProfile",
    "LibcProbe",
    "ToolchainDetector",
    "detect_toolchain",
    "clear_detection_cache",
    "normalize_compiler_id",
]
