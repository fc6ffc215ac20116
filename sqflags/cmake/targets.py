"""
Minimal model of build targets and directory scopes.

Bundles are applied either to individual targets (like linking an
INTERFACE library) or merged into a directory scope (like
add_compile_options/add_link_options). Targets created from a scope
inherit its flags.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from ..flags.expressions import FlagExpr, concat, expand
from ..flags.flagset import LANGUAGES

if TYPE_CHECKING:
    from .bundle import Bundle


def _empty_languages() -> Dict[str, List[FlagExpr]]:
    return {language: [] for language in LANGUAGES}


@dataclass
class DirectoryScope:
    """
    Directory-wide default flags.

    Attributes:
        compile_options: Per-language compile flag expressions
        link_options: Link item expressions
        properties: Property name to value fragments
        merged: Bundles already merged into this scope
    """

    compile_options: Dict[str, List[FlagExpr]] = field(
        default_factory=_empty_languages
    )
    link_options: List[FlagExpr] = field(default_factory=list)
    properties: Dict[str, List[FlagExpr]] = field(default_factory=dict)
    merged: List["Bundle"] = field(default_factory=list)

    def merge(self, bundle: "Bundle") -> bool:
        """
        Merge a bundle's flags into this scope.

        Args:
            bundle: Bundle to merge

        Returns:
            False if an equal bundle was already merged
        """
        if bundle in self.merged:
            return False

        flags = bundle.flags
        for language in LANGUAGES:
            self.compile_options[language].extend(flags.compile_exprs(language))
        self.link_options.extend(flags.link_items)
        for name, value in flags.properties:
            # An existing property wins, like `if(NOT DEFINED ...)`
            self.properties.setdefault(name, list(value))
        self.merged.append(bundle)
        return True

    def add_target(self, name: str) -> "BuildTarget":
        """Create a target that inherits this scope's flags."""
        return BuildTarget(name=name, scope=self)

    def compile_flags(self, language: str, config: Optional[str] = None) -> List[str]:
        return expand(self.compile_options[language], config)

    def link_flags(self, config: Optional[str] = None) -> List[str]:
        return expand(self.link_options, config)

    def property_values(self, config: Optional[str] = None) -> Dict[str, str]:
        return {name: concat(value, config) for name, value in self.properties.items()}


@dataclass
class BuildTarget:
    """
    A build target consuming bundles.

    Attributes:
        name: Target name
        scope: Directory scope the target was created in
        bundles: Bundles attached to the target, in attach order
    """

    name: str
    scope: Optional[DirectoryScope] = None
    bundles: List["Bundle"] = field(default_factory=list)

    def link(self, bundle: "Bundle") -> bool:
        """
        Attach a bundle.

        Returns:
            False if an equal bundle was already attached
        """
        if bundle in self.bundles:
            return False
        self.bundles.append(bundle)
        return True

    def effective_compile_flags(
        self, language: str, config: Optional[str] = None
    ) -> List[str]:
        """Scope flags followed by attached bundle flags."""
        flags = self.scope.compile_flags(language, config) if self.scope else []
        for bundle in self.bundles:
            flags.extend(bundle.flags.compile_flags(language, config))
        return flags

    def effective_link_flags(self, config: Optional[str] = None) -> List[str]:
        """Scope link items followed by attached bundle link items."""
        flags = self.scope.link_flags(config) if self.scope else []
        for bundle in self.bundles:
            flags.extend(bundle.flags.link_flags(config))
        return flags

    def effective_properties(self, config: Optional[str] = None) -> Dict[str, str]:
        """Scope properties, then bundle properties not already set."""
        values = self.scope.property_values(config) if self.scope else {}
        for bundle in self.bundles:
            for name, value in bundle.flags.property_values(config).items():
                values.setdefault(name, value)
        return values
