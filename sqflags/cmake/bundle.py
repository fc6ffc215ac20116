"""
Reusable flag bundles.

A Bundle wraps one resolved FlagSet under the module's target name. It
plays the role of an INTERFACE library: attaching it to any number of
targets applies the same flags without resolving again.

Example:
    ```python
    from sqflags.cmake.bundle import configure

    bundles = configure()
    app = BuildTarget("app")
    bundles["SQ_SRT"].attach(app)
    bundles["SQ_CW"].attach(app)
    ```
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ..core.environment import BuildEnvironmentFacts, collect_host_facts
from ..flags.flagset import FlagModule, FlagSet
from ..flags.options import Options
from ..flags.registry import available_modules, get_resolver
from ..toolchain.detector import detect_toolchain
from ..toolchain.profile import ToolchainProfile
from .targets import BuildTarget, DirectoryScope

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bundle:
    """
    Named handle over a FlagSet.

    Equality and hashing use the FlagSet only: two bundles with equal
    flags are interchangeable.

    Attributes:
        name: Target name (e.g., 'SQ_SRT')
        flags: Resolved flags
        module: Module description, used for exporting variables
    """

    name: str = field(compare=False)
    flags: FlagSet
    module: Optional[FlagModule] = field(default=None, compare=False)

    def attach(self, target: BuildTarget) -> None:
        """
        Apply this bundle to a target. Attaching twice has no effect.

        Args:
            target: Target to attach to
        """
        if target.link(self):
            logger.debug(f"Attached {self.name} to {target.name}")

    def merge_into(self, scope: DirectoryScope) -> None:
        """
        Merge this bundle into directory-wide defaults. Idempotent.

        Args:
            scope: Directory scope to merge into
        """
        if scope.merge(self):
            logger.debug(f"Merged {self.name} into directory scope")

    def is_empty(self) -> bool:
        return self.flags.is_empty()


class BundleRegistry:
    """
    Cache of bundles keyed by module, profile and options.

    Requesting a bundle for an already-resolved combination returns the
    cached bundle instead of resolving again.
    """

    def __init__(self):
        self._bundles: Dict[Tuple[str, ToolchainProfile, Options], Bundle] = {}

    def get(
        self,
        module_name: str,
        profile: ToolchainProfile,
        options: Optional[Options] = None,
    ) -> Bundle:
        """
        Get the bundle for a module, resolving it on first request.

        Args:
            module_name: 'SQ_CW' or 'SQ_SRT'
            profile: Toolchain profile
            options: Resolution options (default: Options())

        Returns:
            Bundle

        Raises:
            UnknownModuleError: If module_name is not a known module
        """
        options = options or Options()
        key = (module_name, profile, options)

        bundle = self._bundles.get(key)
        if bundle is not None:
            return bundle

        resolver = get_resolver(module_name)
        flags = resolver.resolve(profile, options)
        bundle = Bundle(name=module_name, flags=flags, module=resolver.module)
        self._bundles[key] = bundle

        if bundle.is_empty():
            logger.info(f"{module_name}: no flags for {profile}")
        else:
            logger.debug(f"{module_name}: resolved flags for {profile}")
        return bundle

    def get_all(
        self, profile: ToolchainProfile, options: Optional[Options] = None
    ) -> Dict[str, Bundle]:
        """Get bundles for every known module."""
        return {name: self.get(name, profile, options) for name in available_modules()}

    def clear(self):
        """Forget all cached bundles."""
        self._bundles.clear()

    def __len__(self) -> int:
        return len(self._bundles)


_default_registry = BundleRegistry()


def get_default_registry() -> BundleRegistry:
    """Get the process-wide bundle registry."""
    return _default_registry


def configure(
    facts: Optional[BuildEnvironmentFacts] = None,
    options: Optional[Options] = None,
    registry: Optional[BundleRegistry] = None,
) -> Dict[str, Bundle]:
    """
    Detect the toolchain and return bundles for every module.

    Args:
        facts: Build environment facts (default: collected from host)
        options: Resolution options (default: Options())
        registry: Bundle registry (default: process-wide registry)

    Returns:
        Mapping of module name to Bundle
    """
    if facts is None:
        facts = collect_host_facts()
    profile = detect_toolchain(facts)
    return (registry or _default_registry).get_all(profile, options)
