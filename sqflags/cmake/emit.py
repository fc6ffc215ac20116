"""
CMake fragment generation for flag bundles.

Renders bundles as a CMake file that exports the module list variables
and declares one INTERFACE target per module, so build descriptions can
use either form:

    target_link_libraries(my_target PRIVATE SQ_SRT)

    add_compile_options(
      $<$<COMPILE_LANGUAGE:C>:${SQ_SRT_COMPILE_FLAGS_C}>
      $<$<COMPILE_LANGUAGE:CXX>:${SQ_SRT_COMPILE_FLAGS_CXX}>
    )
    add_link_options(${SQ_SRT_LINK_ITEMS})
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from ..core.filesystem import atomic_write
from ..flags.expressions import concat, expand
from ..flags.options import Options
from ..toolchain.profile import ToolchainProfile
from .bundle import Bundle

logger = logging.getLogger(__name__)


def cmake_quote(value: str) -> str:
    """Quote a value as a CMake quoted argument."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def cmake_list(values: Iterable[str]) -> str:
    """Render values as a quoted CMake list."""
    return cmake_quote(";".join(values))


def _module_variables(bundle: Bundle) -> List[str]:
    module = bundle.module
    flags = bundle.flags
    lines = [
        f"set({module.c_variable} {cmake_list(flags.compile_flags('C'))})",
        f"set({module.cxx_variable} {cmake_list(flags.compile_flags('CXX'))})",
    ]
    if module.link_variable:
        lines.append(f"set({module.link_variable} {cmake_list(flags.link_flags())})")
    return lines


def _module_properties(bundle: Bundle) -> List[str]:
    lines = []
    for name, value in bundle.flags.properties:
        lines.extend(
            [
                f"if(NOT DEFINED {name})",
                f"  set({name} {cmake_quote(concat(value))})",
                "endif()",
            ]
        )
    return lines


def _interface_target(bundle: Bundle, options: Options) -> List[str]:
    module = bundle.module
    name = bundle.name
    lines = [
        f"if(NOT TARGET {name})",
        f"  add_library({name} INTERFACE)",
        f"  target_compile_options({name} INTERFACE",
        f"    $<$<COMPILE_LANGUAGE:C>:${{{module.c_variable}}}>",
        f"    $<$<COMPILE_LANGUAGE:CXX>:${{{module.cxx_variable}}}>",
        "  )",
    ]
    if module.link_variable:
        if options.supports_target_link_options:
            lines.append(
                f"  target_link_options({name} INTERFACE ${{{module.link_variable}}})"
            )
        else:
            lines.append(
                f"  set_property(TARGET {name} PROPERTY "
                f'INTERFACE_LINK_LIBRARIES "${{{module.link_variable}}}")'
            )
    lines.append("endif()")
    return lines


def render_bundle(bundle: Bundle, options: Optional[Options] = None) -> str:
    """
    Render one bundle as CMake code.

    Config-dependent flags are emitted as generator expressions so the
    fragment works with multi-config generators.

    Args:
        bundle: Bundle with module information
        options: Options used to pick CMake features (default: Options())

    Returns:
        CMake code as string

    Raises:
        ValueError: If the bundle carries no module description
    """
    if bundle.module is None:
        raise ValueError(f"Bundle {bundle.name} has no module description")
    options = options or Options()

    lines = [f"# {bundle.name}"]
    lines.extend(_module_variables(bundle))
    properties = _module_properties(bundle)
    if properties:
        lines.append("")
        lines.extend(properties)
    lines.append("")
    lines.extend(_interface_target(bundle, options))
    return "\n".join(lines)


def render_cmake(
    bundles: Iterable[Bundle],
    options: Optional[Options] = None,
    profile: Optional[ToolchainProfile] = None,
) -> str:
    """
    Render a complete CMake fragment for several bundles.

    Args:
        bundles: Bundles to render, in order
        options: Options used to resolve the bundles
        profile: Toolchain profile, recorded in the header

    Returns:
        CMake file content
    """
    lines = [
        "# Generated by sqflags",
        f"# Toolchain: {profile if profile is not None else 'unspecified'}",
        "#",
        "# DO NOT EDIT - This file is auto-generated",
        "",
        "cmake_policy(PUSH)",
        "",
    ]
    for bundle in bundles:
        lines.append(render_bundle(bundle, options))
        lines.append("")
    lines.append("cmake_policy(POP)")
    lines.append("")
    return "\n".join(lines)


def write_cmake_module(
    output_path: Path,
    bundles: Iterable[Bundle],
    options: Optional[Options] = None,
    profile: Optional[ToolchainProfile] = None,
) -> Path:
    """
    Write a CMake fragment to disk atomically.

    Args:
        output_path: Destination .cmake file
        bundles: Bundles to render
        options: Options used to resolve the bundles
        profile: Toolchain profile, recorded in the header

    Returns:
        Path to the written file
    """
    output_path = Path(output_path)
    atomic_write(output_path, render_cmake(bundles, options, profile))
    logger.info(f"Generated CMake flag module: {output_path}")
    return output_path


def describe_bundle(bundle: Bundle, config: Optional[str] = None) -> List[str]:
    """
    Human-readable summary lines for a bundle.

    Args:
        bundle: Bundle to describe
        config: Build configuration, None to show deferred expressions
    """
    flags = bundle.flags
    lines = [f"{bundle.name}:"]
    lines.append(f"  C:    {' '.join(flags.compile_flags('C', config)) or '-'}")
    lines.append(f"  CXX:  {' '.join(flags.compile_flags('CXX', config)) or '-'}")
    lines.append(f"  Link: {' '.join(expand(flags.link_items, config)) or '-'}")
    for name, value in flags.property_values(config).items():
        lines.append(f"  {name} = {value}")
    return lines
