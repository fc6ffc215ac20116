"""
CMake integration for sqflags.

Bundles wrap resolved flags as reusable INTERFACE-style targets and can
be rendered as CMake fragments.
"""

from .targets import BuildTarget, DirectoryScope
from .bundle import (
    Bundle,
    BundleRegistry,
    configure,
    get_default_registry,
)
from .emit import (
    render_bundle,
    render_cmake,
    write_cmake_module,
    describe_bundle,
)

__all__ = [
    "BuildTarget",
    "DirectoryScope",
    "Bundle",
    "BundleRegistry",
    "configure",
    "get_default_registry",
    "render_bundle",
    "render_cmake",
    "write_cmake_module",
    "describe_bundle",
]
